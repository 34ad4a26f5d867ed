# src/lexcount/cli.py
import sys
import argparse
from pathlib import Path

# Module imports
from lexcount.config import DEFAULT_PATH, DEFAULT_PATTERN, VERSION
from lexcount.core.ignore import load_ignore_spec
from lexcount.core.report import build_entries, emit_report
from lexcount.core.scanner import PathScanner
from lexcount.utils.console import report_error
from lexcount.utils.matcher import PatternError, compile_pattern

_TRUE_WORDS = {"true", "yes", "y", "1", "on"}
_FALSE_WORDS = {"false", "no", "n", "0", "off"}

def parse_bool(value: str) -> bool:
    word = value.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise argparse.ArgumentTypeError(f"expected true or false, got {value!r}")

def create_arg_parser():
    parser = argparse.ArgumentParser(
        prog="lexcount",
        description="Count distinct regex-matched words in files, per path."
    )
    parser.add_argument("paths", type=str, nargs="*", metavar="PATH", help=f"Files or directories to scan (default: {DEFAULT_PATH})")
    parser.add_argument("-r", "--re", type=str, default=None, metavar="REGEX", help=f"Word regular expression (default: {DEFAULT_PATTERN})")
    parser.add_argument(
        "-s", "--sort",
        type=parse_bool,
        default=None,
        metavar="BOOL",
        help="Sort words by count (default: true if stdout is a TTY)"
    )
    parser.add_argument("--no-follow-links", dest="follow_links", action="store_false", help="Do not follow symbolic links")
    parser.add_argument("-x", "--exclude", action="append", default=[], metavar="PATTERN", help="Gitignore-style pattern to skip (repeatable)")
    parser.add_argument("--ignore-file", type=str, default=None, metavar="FILE", help="File with gitignore-style patterns to skip")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    return parser

def should_sort(requested, out) -> bool:
    """An explicit --sort wins; otherwise sort only for an interactive terminal."""
    if requested is not None:
        return requested
    isatty = getattr(out, "isatty", None)
    return bool(isatty and isatty())

def main():
    out = sys.stdout
    err = sys.stderr
    try:
        parser = create_arg_parser()
        args = parser.parse_args()

        try:
            matcher = compile_pattern(args.re)
        except PatternError as e:
            report_error(err, str(e))
            sys.exit(1)

        try:
            ignore_file = Path(args.ignore_file) if args.ignore_file else None
            ignore_spec = load_ignore_spec(ignore_file, extra_patterns=args.exclude)
        except OSError as e:
            report_error(err, f"Error reading ignore file: {e}")
            sys.exit(1)

        paths = args.paths or [DEFAULT_PATH]
        must_sort = should_sort(args.sort, out)

        scanner = PathScanner(matcher, follow_links=args.follow_links, ignore_spec=ignore_spec, err=err)
        for raw_path in paths:
            counts = scanner.scan(Path(raw_path))
            emit_report(out, raw_path, build_entries(counts, must_sort))

    except KeyboardInterrupt:
        print("\nCancelled.", file=err)
        sys.exit(1)

    except Exception as e:
        print(f"An unexpected error occurred: {e}", file=err)
        sys.exit(1)

if __name__ == "__main__":
    main()
