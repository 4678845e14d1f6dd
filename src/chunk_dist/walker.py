"""Recursive directory listing that yields file sizes."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterator
from pathlib import Path

logger = logging.getLogger(__name__)


class HomeDirResolutionError(RuntimeError):
    """The starting directory could not be determined."""


class DirectoryReadError(OSError):
    """A directory could not be listed."""

    def __init__(self, path: Path, cause: OSError) -> None:
        super().__init__(cause.errno, f"Cannot list {path}: {cause.strerror or cause}")
        self.path = path
        self.cause = cause


class DirectoryLister:
    """Walk a tree depth-first with an explicit stack and yield file sizes.

    Every non-directory entry counts as a file. Unless ``follow_symlinks``
    is set, symlinks are never followed and count as files of their own
    size. Directories that cannot be listed are treated as empty, logged,
    and collected in ``skipped``; pass ``on_error`` to observe or re-raise.
    """

    def __init__(
        self,
        root: Path,
        *,
        follow_symlinks: bool = False,
        on_error: Callable[[DirectoryReadError], None] | None = None,
    ) -> None:
        self.root = Path(root)
        self.follow_symlinks = follow_symlinks
        self.on_error = on_error
        self.skipped: list[Path] = []

    def _handle_error(self, path: Path, exc: OSError) -> None:
        err = DirectoryReadError(path, exc)
        logger.warning("Skipping unreadable directory %s: %s", path, exc.strerror or exc)
        self.skipped.append(path)
        if self.on_error is not None:
            self.on_error(err)

    def iter_file_sizes(self) -> Iterator[int]:
        """Yield the size in bytes of every file under the root."""
        for _, size in self.iter_files():
            yield size

    def iter_files(self) -> Iterator[tuple[Path, int]]:
        """Yield ``(path, size)`` for every file under the root."""
        follow = self.follow_symlinks
        seen: set[tuple[int, int]] = set()
        stack = [self.root]

        while stack:
            current = stack.pop()
            if follow:
                try:
                    st = current.stat()
                except OSError as exc:
                    self._handle_error(current, exc)
                    continue
                if (st.st_dev, st.st_ino) in seen:
                    logger.debug("Already visited %s, not descending again", current)
                    continue
                seen.add((st.st_dev, st.st_ino))

            try:
                with os.scandir(current) as it:
                    entries = sorted(it, key=lambda e: e.name)
            except OSError as exc:
                self._handle_error(current, exc)
                continue

            subdirs: list[Path] = []
            for entry in entries:
                try:
                    if entry.is_dir(follow_symlinks=follow):
                        subdirs.append(Path(entry.path))
                        continue
                    size = entry.stat(follow_symlinks=follow).st_size
                except OSError as exc:
                    logger.debug("Cannot stat %s: %s", entry.path, exc)
                    continue
                yield Path(entry.path), size

            # Reversed so subdirectories are visited in name order
            stack.extend(reversed(subdirs))
