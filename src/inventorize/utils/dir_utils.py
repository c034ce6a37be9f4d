"""
Recursive directory traversal.

Files are visited depth-first using an explicit stack of open `os.scandir`
iterators, so the nesting depth of the tree never grows the Python call
stack. Directory entries themselves are never produced, only descended into.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path
from types import TracebackType

from inventorize.core.exceptions import FileIoError
from inventorize.core.logging_config import TRACE

logger = logging.getLogger(__name__)


def is_hidden(path: str | os.PathLike[str]) -> bool:
    """
    Check if a file specified by path is considered hidden.

    Only name-based detection is supported: a file is hidden if its final
    path component starts with a dot.
    """
    return os.path.basename(os.fspath(path)).startswith(".")


class DirectoryIterator:
    """
    A forward-only iterator over the files below a root directory.

    The iterator cannot be restarted. Once a filesystem error has been
    raised the iteration is over and every scandir handle is released.
    Use it as a context manager so that handles are also released when the
    caller stops early.
    """

    def __init__(self, root: str | os.PathLike[str], skip_hidden: bool = False) -> None:
        self.root = Path(root)
        self.skip_hidden = skip_hidden
        self._stack: list[tuple[str, os._ScandirIterator[str]]] = []
        self._descend(os.fspath(self.root))

    def __iter__(self) -> DirectoryIterator:
        return self

    def __next__(self) -> os.DirEntry[str]:
        while self._stack:
            directory, entries = self._stack[-1]
            try:
                entry = next(entries, None)
                if entry is None:
                    # Directory exhausted: resume the parent where it stopped.
                    self._stack.pop()
                    entries.close()
                    continue
                if self.skip_hidden and is_hidden(entry.name):
                    logger.log(TRACE, "Skipping hidden entry %s", entry.path)
                    continue
                is_dir = entry.is_dir()
            except OSError as e:
                self.close()
                raise FileIoError(directory, e) from e

            if is_dir:
                logger.log(TRACE, "Descending into %s", entry.path)
                self._descend(entry.path)
            else:
                return entry
        raise StopIteration

    def __enter__(self) -> DirectoryIterator:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Release all open directory handles."""
        while self._stack:
            _, entries = self._stack.pop()
            entries.close()

    def _descend(self, directory: str) -> None:
        try:
            self._stack.append((directory, os.scandir(directory)))
        except OSError as e:
            self.close()
            raise FileIoError(directory, e) from e

    def paths(self) -> Iterator[Path]:
        """Yield absolute paths of the discovered files."""
        for entry in self:
            yield Path(entry.path)

    def relative_paths(self) -> Iterator[Path]:
        """
        Yield paths of the discovered files relative to the root directory.

        Raises:
            ValueError: If a produced path is not below the root. The root is
                captured once when the iterator is created, so this only
                happens on a programming error and must not be caught.

        """
        for path in self.paths():
            yield path.relative_to(self.root)
