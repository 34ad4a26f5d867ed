# src/lexcount/core/ignore.py
from pathlib import Path
from typing import List, Optional

import pathspec

def load_ignore_spec(ignore_file: Optional[Path] = None, extra_patterns: Optional[List[str]] = None) -> Optional[pathspec.PathSpec]:
    """
    Builds a gitignore-style PathSpec from an ignore file plus extra patterns
    given on the command line. Returns None when there is nothing to exclude.

    OSError from reading `ignore_file` is propagated; the CLI treats it as fatal.
    """
    lines: List[str] = []

    if ignore_file is not None:
        with open(ignore_file, "r", encoding="utf-8") as f:
            lines.extend(f.read().splitlines())

    if extra_patterns:
        lines.extend(extra_patterns)

    # Comments and blank lines do not count as rules
    if not any(line.strip() and not line.lstrip().startswith("#") for line in lines):
        return None

    return pathspec.GitIgnoreSpec.from_lines(lines)

def is_excluded(spec: Optional[pathspec.PathSpec], rel_path: Path, is_directory: bool = False) -> bool:
    """Checks a path relative to the input root against the exclusion rules."""
    if spec is None:
        return False
    candidate = rel_path.as_posix()
    if is_directory:
        candidate += "/"
    return spec.match_file(candidate)
