"""Durable state storage interface."""

from typing import Protocol


class StateStore(Protocol):
    """Interface for reading and writing the persisted editor state."""

    def read(self) -> str | None:
        """Read the serialized state. Returns None if nothing was saved yet."""
        ...

    def write(self, content: str) -> None:
        """Write/overwrite the serialized state."""
        ...
