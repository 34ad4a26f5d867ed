# src/lexcount/core/counter.py
import sys
from typing import Dict, Iterable

# Largest count a table entry may hold; mirrors a native unsigned word
MAX_COUNT = sys.maxsize

class CountOverflowError(ArithmeticError):
    """A token count would exceed MAX_COUNT."""

def count_tokens(tokens: Iterable[bytes], counts: Dict[bytes, int]) -> None:
    """
    Adds each token to `counts`: new tokens start at 1, known tokens are
    incremented. A count is never allowed past MAX_COUNT.
    """
    for token in tokens:
        current = counts.get(token)
        if current is None:
            counts[token] = 1
            continue
        if current >= MAX_COUNT:
            raise CountOverflowError(f"Count for token {token!r} exceeds {MAX_COUNT}")
        counts[token] = current + 1
