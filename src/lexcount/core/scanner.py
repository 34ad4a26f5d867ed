# src/lexcount/core/scanner.py
from pathlib import Path
from typing import Dict, Optional, TextIO

import pathspec

from lexcount.core.buffer import BufferAllocationError, ContentBuffer
from lexcount.core.counter import count_tokens
from lexcount.core.reader import read_file
from lexcount.core.walker import DirectoryWalker
from lexcount.utils.console import report_error
from lexcount.utils.matcher import TokenMatcher

class PathScanner:
    def __init__(
        self,
        matcher: TokenMatcher,
        follow_links: bool = True,
        ignore_spec: Optional[pathspec.PathSpec] = None,
        err: Optional[TextIO] = None,
    ):
        self.matcher = matcher
        self.follow_links = follow_links
        self.ignore_spec = ignore_spec
        self.err = err

    def scan(self, root: Path) -> Dict[bytes, int]:
        """
        Counts tokens in every regular file under `root` and returns a fresh
        table for that input path.

        One ContentBuffer is reused for all files of the path. If it cannot
        be sized for a file, the rest of this path is abandoned and the
        counts gathered so far are returned.
        """
        counts: Dict[bytes, int] = {}
        buffer = ContentBuffer()
        walker = DirectoryWalker(root, self.follow_links, self.ignore_spec, self.err)

        files = walker.walk()
        try:
            for file_path in files:
                try:
                    ok = read_file(file_path, buffer, self.err)
                except BufferAllocationError as e:
                    report_error(self.err, f"Error buffering {file_path}: {e}")
                    report_error(self.err, f"Aborting {root}")
                    break

                if ok:
                    count_tokens(self.matcher.tokens(buffer), counts)
        finally:
            files.close()

        return counts
