from __future__ import annotations

import hashlib
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Dict, List, Mapping, Sequence, Tuple

SourcePath = Tuple[str, ...]


@dataclass(frozen=True, slots=True)
class SourceEntry:
    name: str
    is_directory: bool


class ContentSource(ABC):
    """Read-only access to a content tree addressed by raw name segments.

    Implementations raise ``OSError`` for unreadable entries and
    ``UnicodeDecodeError`` for documents that are not valid UTF-8.
    """

    @abstractmethod
    def list_entries(self, path: Sequence[str]) -> List[SourceEntry]:
        """List the direct children of a directory (order is unspecified)."""

    @abstractmethod
    def read_entry(self, path: Sequence[str]) -> str:
        """Return the text of a document."""

    @abstractmethod
    def fingerprint(self) -> str:
        """Return a token that changes whenever the content changes."""

    def location(self, path: Sequence[str]) -> str:
        return "/".join(path)

    def describe(self) -> str:
        return type(self).__name__


class FileSystemContentSource(ContentSource):
    """Content stored in a directory on disk."""

    def __init__(self, root: Path, *, encoding: str = "utf-8") -> None:
        self.root = Path(root)
        self.encoding = encoding

    def _resolve(self, path: Sequence[str]) -> Path:
        for segment in path:
            if segment in {"", ".", ".."} or "/" in segment or "\\" in segment:
                raise FileNotFoundError(f"Invalid path segment: {segment!r}")
        return self.root.joinpath(*path)

    def list_entries(self, path: Sequence[str]) -> List[SourceEntry]:
        directory = self._resolve(path)
        return [SourceEntry(name=child.name, is_directory=child.is_dir()) for child in directory.iterdir()]

    def read_entry(self, path: Sequence[str]) -> str:
        return self._resolve(path).read_text(encoding=self.encoding)

    def fingerprint(self) -> str:
        digest = hashlib.sha1()
        if not self.root.exists():
            return digest.hexdigest()
        for item in sorted(self.root.rglob("*")):
            try:
                stat = item.stat()
            except OSError:
                continue
            rel = item.relative_to(self.root).as_posix()
            digest.update(f"{rel}:{stat.st_size}:{stat.st_mtime_ns}\n".encode("utf-8"))
        return digest.hexdigest()

    def describe(self) -> str:
        return str(self.root)


class InMemoryContentSource(ContentSource):
    """Content held in a ``{"dir/sub/file.md": text}`` mapping.

    Directories are implied by the document paths; an explicit empty
    directory can be declared with a trailing slash key (``"dir/": ""``).
    """

    def __init__(self, documents: Mapping[str, str] | None = None) -> None:
        self._lock = threading.Lock()
        self._files: Dict[SourcePath, str] = {}
        self._directories: set[SourcePath] = {()}
        self._version = 0
        for key, text in (documents or {}).items():
            self.write(key, text)

    @staticmethod
    def _split(key: str) -> SourcePath:
        return tuple(part for part in PurePosixPath(key).parts if part not in {"/", ""})

    def write(self, key: str, text: str = "") -> None:
        parts = self._split(key)
        with self._lock:
            if key.endswith("/"):
                self._add_directories(parts)
            else:
                self._add_directories(parts[:-1])
                self._files[parts] = text
            self._version += 1

    def remove(self, key: str) -> None:
        parts = self._split(key)
        with self._lock:
            self._files = {path: text for path, text in self._files.items() if path[: len(parts)] != parts}
            self._directories = {
                path for path in self._directories if path == () or path[: len(parts)] != parts
            }
            self._version += 1

    def _add_directories(self, parts: SourcePath) -> None:
        for depth in range(len(parts) + 1):
            self._directories.add(parts[:depth])

    def list_entries(self, path: Sequence[str]) -> List[SourceEntry]:
        parent = tuple(path)
        with self._lock:
            directories = list(self._directories)
            files = list(self._files)
        if parent not in directories:
            raise FileNotFoundError(f"No such directory: {'/'.join(parent) or '<root>'}")
        names: Dict[str, bool] = {}
        for directory in directories:
            if len(directory) == len(parent) + 1 and directory[:-1] == parent:
                names[directory[-1]] = True
        for file_path in files:
            if len(file_path) == len(parent) + 1 and file_path[:-1] == parent:
                names.setdefault(file_path[-1], False)
        return [SourceEntry(name=name, is_directory=is_dir) for name, is_dir in names.items()]

    def read_entry(self, path: Sequence[str]) -> str:
        with self._lock:
            text = self._files.get(tuple(path))
        if text is None:
            raise FileNotFoundError(f"No such document: {'/'.join(path)}")
        return text

    def fingerprint(self) -> str:
        with self._lock:
            return str(self._version)

    def describe(self) -> str:
        return f"<memory:{len(self._files)} documents>"


__all__ = [
    "ContentSource",
    "FileSystemContentSource",
    "InMemoryContentSource",
    "SourceEntry",
    "SourcePath",
]
