"""Adapters - I/O implementations of ports."""

from .file_state import FileStateStore, MemoryStateStore

__all__ = [
    "FileStateStore",
    "MemoryStateStore",
]
