# src/lexcount/core/report.py
from typing import Dict, Iterable, List, TextIO

from lexcount.models import ReportEntry

def build_entries(counts: Dict[bytes, int], must_sort: bool) -> List[ReportEntry]:
    """
    Decodes the count table into report entries. Invalid UTF-8 is replaced
    with U+FFFD. When sorting, entries go by count, highest first; ties keep
    the table's order (sorted() is stable).
    """
    entries = [
        ReportEntry(token.decode("utf-8", errors="replace"), count)
        for token, count in counts.items()
    ]
    if must_sort:
        entries.sort(key=lambda e: e.count, reverse=True)
    return entries

def format_report(display: str, entries: Iterable[ReportEntry]) -> str:
    lines = [f"{display}\n"]
    lines.extend(f"\t{e.token} {e.count}\n" for e in entries)
    return "".join(lines)

def emit_report(out: TextIO, display: str, entries: Iterable[ReportEntry]) -> None:
    out.write(format_report(display, entries))
    out.flush()
