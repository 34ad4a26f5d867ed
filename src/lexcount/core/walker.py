# src/lexcount/core/walker.py
import os
import stat
from pathlib import Path
from typing import FrozenSet, Iterator, List, Optional, TextIO, Tuple

import pathspec

from lexcount.core.ignore import is_excluded
from lexcount.utils.console import report_error

# (st_dev, st_ino) of a directory
DirKey = Tuple[int, int]

class DirectoryWalker:
    """
    Enumerates the regular files reachable from `root`.

    Directories are kept on an explicit stack instead of recursing, and each
    directory listing is read completely and closed before its children are
    visited, so at most one directory handle is open at a time.

    Per-entry failures (listing, stat, symlink resolution, symlink loops) are
    reported to `err` and only that entry or subtree is skipped.
    """

    def __init__(
        self,
        root: Path,
        follow_links: bool = True,
        ignore_spec: Optional[pathspec.PathSpec] = None,
        err: Optional[TextIO] = None,
    ):
        self.root = Path(root)
        self.follow_links = follow_links
        self.ignore_spec = ignore_spec
        self.err = err

    def _report(self, message: str) -> None:
        report_error(self.err, message)

    def walk(self) -> Iterator[Path]:
        # The root itself is always resolved, even when it is a symlink
        try:
            st = os.stat(self.root)
        except OSError as e:
            self._report(f"Error accessing {self.root}: {e}")
            return

        if stat.S_ISREG(st.st_mode):
            yield self.root
            return
        if not stat.S_ISDIR(st.st_mode):
            return

        stack: List[Tuple[Path, FrozenSet[DirKey]]] = [
            (self.root, frozenset([(st.st_dev, st.st_ino)]))
        ]

        while stack:
            dir_path, ancestors = stack.pop()

            try:
                with os.scandir(dir_path) as it:
                    entries = sorted(it, key=lambda e: e.name)
            except OSError as e:
                self._report(f"Error reading directory {dir_path}: {e}")
                continue

            subdirs = []
            for entry in entries:
                entry_path = Path(entry.path)
                is_link = False
                try:
                    is_link = entry.is_symlink()
                    if is_link and not self.follow_links:
                        continue

                    # Excluded entries are never stat'ed, so they cannot produce errors
                    if self.ignore_spec is not None:
                        rel_path = entry_path.relative_to(self.root)
                        looks_like_dir = entry.is_dir(follow_symlinks=self.follow_links)
                        if is_excluded(self.ignore_spec, rel_path, is_directory=looks_like_dir):
                            continue

                    entry_st = entry.stat(follow_symlinks=self.follow_links)
                except OSError as e:
                    if is_link:
                        self._report(f"Error resolving symlink {entry_path}: {e}")
                    else:
                        self._report(f"Error accessing {entry_path}: {e}")
                    continue

                is_dir = stat.S_ISDIR(entry_st.st_mode)
                if not is_dir and not stat.S_ISREG(entry_st.st_mode):
                    # Devices, sockets, fifos
                    continue

                if is_dir:
                    key = (entry_st.st_dev, entry_st.st_ino)
                    if key in ancestors:
                        self._report(f"File system loop found: {entry_path} points to an ancestor directory")
                        continue
                    subdirs.append((entry_path, ancestors | {key}))
                else:
                    yield entry_path

            # Reversed so that the stack pops subdirectories in name order
            stack.extend(reversed(subdirs))
