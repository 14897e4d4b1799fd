"""Fatal VM errors, assertions and warnings."""

from __future__ import annotations

import sys
from enum import IntEnum


class VMErrorType(IntEnum):
    """Kinds of fatal VM error."""

    INTERNAL_ERROR = 0xE0000000
    OOM_MALLOC_ERROR = 0xE0000001
    OOM_MMAP_ERROR = 0xE0000002
    OOM_MPROTECT_ERROR = 0xE0000003
    OOM_JAVA_HEAP_FATAL = 0xE0000004


class VMError(Exception):
    """A fatal error detected inside the VM."""

    def __init__(
        self,
        message: str,
        detail: str | None = None,
        error_type: VMErrorType = VMErrorType.INTERNAL_ERROR,
    ) -> None:
        self.message = message
        self.detail = detail
        self.error_type = error_type
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message}: {self.detail}"
        return self.message


def report_vm_error(msg: str, detail: str | None = None) -> None:
    """Raise a :class:`VMError` carrying ``msg`` and optional ``detail``."""
    raise VMError(msg, detail)


def vm_assert(condition: object, msg: str) -> None:
    """Raise a :class:`VMError` when ``condition`` is false (debug checks)."""
    if __debug__ and not condition:
        raise VMError("assert failed", msg)


def guarantee(condition: object, msg: str) -> None:
    """Raise a :class:`VMError` when ``condition`` is false (always checked)."""
    if not condition:
        raise VMError("guarantee failed", msg)


def fatal(msg: str) -> None:
    """Raise a :class:`VMError` unconditionally."""
    raise VMError("fatal error", msg)


def should_not_reach_here() -> None:
    """Signal that control reached code that must be unreachable."""
    raise VMError("ShouldNotReachHere()")


def warning(message: str) -> None:
    """Print a non-fatal warning to standard error."""
    print(f"WARNING: {message}", file=sys.stderr)