"""File-based state storage adapter."""

from pathlib import Path


class FileStateStore:
    """
    File-based state storage.

    Implements StateStore protocol. The whole state lives in one JSON file.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def read(self) -> str | None:
        """Read the saved state. Returns None if the file does not exist."""
        if not self.path.exists():
            return None
        return self.path.read_text(encoding="utf-8")

    def write(self, content: str) -> None:
        """Write the state, replacing the file in one rename."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(content, encoding="utf-8")
        tmp.replace(self.path)


class MemoryStateStore:
    """In-memory StateStore, for sessions that should not touch disk."""

    def __init__(self, content: str | None = None):
        self.content = content

    def read(self) -> str | None:
        return self.content

    def write(self, content: str) -> None:
        self.content = content
