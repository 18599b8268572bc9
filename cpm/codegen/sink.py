"""
Where generated files go.

Renderers never touch the filesystem; the driver writes their output
through an `OutputSink`. `FileSystemSink` is the real one, `MemorySink`
keeps everything in a dict so tests can inspect the result.
"""

from __future__ import annotations

import io
from contextlib import contextmanager
from pathlib import Path, PurePosixPath
from typing import Dict, Iterator, Protocol, Set, TextIO, Union, runtime_checkable

PathLike = Union[str, PurePosixPath]


@runtime_checkable
class OutputSink(Protocol):
    def makedirs(self, path: PathLike) -> None:
        """Create ``path`` and its parents; an existing directory is fine."""
        ...

    def open(self, path: PathLike):
        """Context manager yielding a text handle that truncates ``path``."""
        ...


class FileSystemSink:
    def __init__(self, root: Union[str, Path] = ".") -> None:
        self.root = Path(root)

    def _resolve(self, path: PathLike) -> Path:
        return self.root / Path(str(path))

    def makedirs(self, path: PathLike) -> None:
        self._resolve(path).mkdir(parents=True, exist_ok=True)

    @contextmanager
    def open(self, path: PathLike) -> Iterator[TextIO]:
        with open(self._resolve(path), "w", encoding="utf-8", newline="\n") as fh:
            yield fh

    def __repr__(self) -> str:
        return f"FileSystemSink({str(self.root)!r})"


class MemorySink:
    def __init__(self) -> None:
        self.files: Dict[str, str] = {}
        self.dirs: Set[str] = set()

    @staticmethod
    def _key(path: PathLike) -> str:
        return str(PurePosixPath(str(path)))

    def makedirs(self, path: PathLike) -> None:
        p = PurePosixPath(self._key(path))
        self.dirs.add(str(p))
        self.dirs.update(str(parent) for parent in p.parents if str(parent) != ".")

    @contextmanager
    def open(self, path: PathLike) -> Iterator[TextIO]:
        # a writer that raises leaves no entry behind
        with io.StringIO() as buf:
            yield buf
            self.files[self._key(path)] = buf.getvalue()

    def read(self, path: PathLike) -> str:
        return self.files[self._key(path)]


__all__ = ["OutputSink", "FileSystemSink", "MemorySink"]
