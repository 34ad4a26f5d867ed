# src/lexcount/utils/console.py
import sys
from typing import Optional, TextIO

def report_error(err: Optional[TextIO], message: str) -> None:
    """Writes one line to the error channel and flushes it right away."""
    stream = err if err is not None else sys.stderr
    print(message, file=stream)
    stream.flush()
