# src/lexcount/models.py
from dataclasses import dataclass

@dataclass(frozen=True)
class ReportEntry:
    """Decoded token and how many times it was seen under one input path."""
    token: str
    count: int
