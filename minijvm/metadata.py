"""Base class for class metadata objects: classes, methods, constant pools."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TextIO


class Metadata(ABC):
    """Metadata with kind queries and a debugging printout."""

    def is_metadata(self) -> bool:
        return True

    def is_klass(self) -> bool:
        return False

    def is_method(self) -> bool:
        return False

    def is_constant_pool(self) -> bool:
        return False

    @abstractmethod
    def internal_name(self) -> str:
        """A short name for the kind of metadata."""

    def print_on(self, out: TextIO) -> None:
        """Write a one-line description to ``out``."""
        out.write(f"Metadata({id(self):#x}) [{self.internal_name()}]")