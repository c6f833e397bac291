import os
from dataclasses import dataclass
from typing import List, Optional, Sequence


@dataclass(frozen=True)
class Entry:
    name: str
    is_dir: bool


class FileBrowser:
    """Keyboard driven directory listing that only offers files with an allowed extension."""

    def __init__(self, directory: str, allowed_types: Sequence[str] = (".pdf",), height: int = 12):
        self.allowed_types = tuple(t.lower() for t in allowed_types)
        self.height = height
        self.error: Optional[str] = None
        self.entries: List[Entry] = []
        self.selected = 0
        self.current_directory = os.path.abspath(directory)
        self.read_dir()

    def _allowed(self, name: str) -> bool:
        if not self.allowed_types:
            return True
        return os.path.splitext(name)[1].lower() in self.allowed_types

    def read_dir(self):
        self.selected = 0
        self.error = None
        try:
            names = os.listdir(self.current_directory)
        except OSError as exc:
            self.entries = []
            self.error = str(exc)
            return
        dirs, files = [], []
        for name in names:
            if name.startswith("."):
                continue
            full = os.path.join(self.current_directory, name)
            if os.path.isdir(full):
                dirs.append(Entry(name, True))
            elif self._allowed(name):
                files.append(Entry(name, False))
        self.entries = sorted(dirs, key=lambda e: e.name.lower()) + sorted(files, key=lambda e: e.name.lower())

    def handle_key(self, key: str) -> Optional[str]:
        """Move or open; returns the absolute path when a file is chosen."""
        if key in ("up", "k"):
            self.selected = max(0, self.selected - 1)
        elif key in ("down", "j"):
            self.selected = min(len(self.entries) - 1, self.selected + 1) if self.entries else 0
        elif key in ("home", "g"):
            self.selected = 0
        elif key in ("end", "G"):
            self.selected = max(0, len(self.entries) - 1)
        elif key in ("backspace", "left", "h"):
            parent = os.path.dirname(self.current_directory)
            if parent != self.current_directory:
                self.current_directory = parent
                self.read_dir()
        elif key in ("enter", "right", "l"):
            if not self.entries:
                return None
            entry = self.entries[self.selected]
            path = os.path.join(self.current_directory, entry.name)
            if entry.is_dir:
                self.current_directory = path
                self.read_dir()
                return None
            return path
        return None

    def view(self) -> str:
        lines = [self.current_directory, ""]
        if self.error:
            lines.append(f"  cannot read directory: {self.error}")
        elif not self.entries:
            lines.append("  (no PDF files here)")
        start = max(0, self.selected - self.height + 1)
        for idx, entry in enumerate(self.entries[start:start + self.height], start):
            marker = ">" if idx == self.selected else " "
            suffix = "/" if entry.is_dir else ""
            lines.append(f"{marker} {entry.name}{suffix}")
        return "\n".join(lines)
