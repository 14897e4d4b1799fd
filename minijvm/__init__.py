"""Runtime data structures of a small Java virtual machine: constant pools, klasses, methods, mark words, heap objects and primitive arrays."""

__version__ = "0.1.0"