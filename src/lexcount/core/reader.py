# src/lexcount/core/reader.py
import os
from pathlib import Path
from typing import Optional, TextIO

from lexcount.core.buffer import ContentBuffer
from lexcount.utils.console import report_error

def read_file(path: Path, buffer: ContentBuffer, err: Optional[TextIO] = None) -> bool:
    """
    Loads the whole file into `buffer`.

    Returns False (after reporting) when the file cannot be opened or read;
    the buffer content must not be used in that case. BufferAllocationError
    is left to the caller, since it ends the current input path.
    """
    try:
        f = open(path, "rb")
    except OSError as e:
        report_error(err, f"Error opening {path}: {e}")
        return False

    with f:
        buffer.clear()
        try:
            size = os.fstat(f.fileno()).st_size
        except OSError:
            # Unknown length: keep whatever capacity is already there
            size = None

        if size is not None:
            buffer.reserve_exact(size)

        try:
            buffer.fill_from(f)
        except OSError as e:
            buffer.clear()
            report_error(err, f"Error reading {path}: {e}")
            return False

    return True
