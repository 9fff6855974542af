"""INTAKE stage — Walk root directories and yield every regular file with its size."""

import fnmatch
import os
import stat
from collections.abc import Iterator

from dedup import diagnostics
from dedup.errors import RootError, TraversalEntryError


def _describe_mode(mode: int) -> str:
    if stat.S_ISLNK(mode):
        return "symbolic link"
    if stat.S_ISFIFO(mode):
        return "named pipe"
    if stat.S_ISSOCK(mode):
        return "socket"
    if stat.S_ISCHR(mode) or stat.S_ISBLK(mode):
        return "device"
    return "not a regular file"


class PathCollector:
    """Collect candidate files for one invocation.

    The collector owns the set of absolute paths it has already seen, so
    overlapping roots (or the same root given twice) are only scanned once.
    Symbolic links are never followed; they are reported and skipped along
    with every other non-regular entry.
    """

    def __init__(self, sink, exclude=()):
        self.sink = sink
        self.exclude = list(exclude)
        self._visited: set[str] = set()

    @property
    def visited(self) -> frozenset[str]:
        return frozenset(self._visited)

    def collect(self, root) -> Iterator[tuple[str, int]]:
        """Return a lazy iterator of (path, size) pairs under root.

        The root itself is checked right away: a missing, non-directory or
        unlistable root raises RootError before anything is yielded.
        """
        root_dir = self._check_root(root)
        if root_dir in self._visited:
            return iter(())
        self._visited.add(root_dir)
        return self._walk(root_dir)

    def _excluded(self, name: str) -> bool:
        return any(fnmatch.fnmatch(name, pattern) for pattern in self.exclude)

    def _check_root(self, root) -> str:
        root_dir = os.path.abspath(os.path.expanduser(str(root)))
        if not os.path.exists(root_dir):
            raise RootError("no such directory", root_dir)
        if not os.path.isdir(root_dir):
            raise RootError("not a directory", root_dir)
        try:
            with os.scandir(root_dir):
                pass
        except OSError as e:
            raise RootError(e.strerror or str(e), root_dir) from e
        return root_dir

    def _walk(self, root_dir: str) -> Iterator[tuple[str, int]]:
        for dirpath, dirnames, filenames in os.walk(root_dir, onerror=self._on_walk_error):
            # Prune in-place; os.walk lists links to directories as dirnames
            kept = []
            for name in sorted(dirnames):
                dpath = os.path.join(dirpath, name)
                if self._excluded(name) or dpath in self._visited:
                    continue
                self._visited.add(dpath)
                if os.path.islink(dpath):
                    self.sink.emit(
                        diagnostics.event(diagnostics.ENTRY_SKIPPED, dpath, reason="symbolic link")
                    )
                    continue
                kept.append(name)
            dirnames[:] = kept

            for name in sorted(filenames):
                if self._excluded(name):
                    continue
                fpath = os.path.join(dirpath, name)
                if fpath in self._visited:
                    continue
                self._visited.add(fpath)

                try:
                    size = self._regular_file_size(fpath)
                except TraversalEntryError as e:
                    self.sink.emit(diagnostics.from_error(diagnostics.ENTRY_FAILED, e))
                    continue
                if size is None:
                    continue
                yield fpath, size

    def _regular_file_size(self, fpath: str) -> int | None:
        """Size of fpath if it is a regular file, else None after reporting it."""
        try:
            st = os.lstat(fpath)
        except OSError as e:
            raise TraversalEntryError(e.strerror or str(e), fpath) from e
        if stat.S_ISREG(st.st_mode):
            return st.st_size
        self.sink.emit(
            diagnostics.event(diagnostics.ENTRY_SKIPPED, fpath, reason=_describe_mode(st.st_mode))
        )
        return None

    def _on_walk_error(self, err: OSError) -> None:
        self.sink.emit(
            diagnostics.event(
                diagnostics.ENTRY_FAILED,
                err.filename,
                reason=err.strerror or str(err),
            )
        )
