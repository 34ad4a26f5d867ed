# src/lexcount/utils/matcher.py
import re
from typing import Iterator, Optional

from lexcount.config import DEFAULT_PATTERN
from lexcount.core.buffer import ContentBuffer

class PatternError(ValueError):
    """Raised when the user-supplied word pattern does not compile."""

class TokenMatcher:
    def __init__(self, pattern: "re.Pattern[str]"):
        self.pattern = pattern

    def tokens(self, buffer: ContentBuffer) -> Iterator[bytes]:
        """
        Yields every non-overlapping match in the filled part of the buffer.

        The bytes are matched as UTF-8 text, so `\\w` covers non-ASCII letters.
        Undecodable bytes go through surrogateescape and come back out of
        each token unchanged. Every token is an owned copy, so the buffer
        can be refilled afterwards.
        """
        text = buffer.data[:len(buffer)].decode("utf-8", "surrogateescape")
        for match in self.pattern.finditer(text):
            yield match.group().encode("utf-8", "surrogateescape")

def compile_pattern(expr: Optional[str] = None) -> TokenMatcher:
    if expr is None:
        expr = DEFAULT_PATTERN
    try:
        return TokenMatcher(re.compile(expr))
    except re.error as e:
        raise PatternError(f"Invalid pattern {expr!r}: {e}") from e
