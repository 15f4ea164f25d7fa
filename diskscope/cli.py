from __future__ import annotations
import argparse
import logging
import sys
from typing import List, Optional
from .explorer import Explorer, select_root
from .report import print_results
from .scanner import build_tree, sort_by_size
from .utils import InvalidPathError, setup_console, validate_directory

logger = logging.getLogger(__name__)

HELP_FLAGS = ("-h", "--help", "/?")

class ColorFormatter(logging.Formatter):
    """Prefixes records with an ANSI color picked by level."""

    COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[41m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelno, "")
        return f"{color}{super().format(record)}{self.RESET}"

def configure_logging(verbose: bool = False) -> None:
    pkg_logger = logging.getLogger("diskscope")
    for h in list(pkg_logger.handlers):
        pkg_logger.removeHandler(h)
    handler = logging.StreamHandler(sys.stderr)
    fmt = "%(levelname)s: %(message)s"
    if sys.stderr.isatty():
        handler.setFormatter(ColorFormatter(fmt))
    else:
        handler.setFormatter(logging.Formatter(fmt))
    pkg_logger.addHandler(handler)
    pkg_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

def _positive_int(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return n

def explore_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="diskscope",
        description="DiskScope - Interactive Disk Explorer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Controls:\n"
            "  [number]  Navigate into folder\n"
            "  b         Go back to parent\n"
            "  r         Refresh current folder\n"
            "  q         Quit\n"
        ),
    )
    parser.add_argument("path", nargs="?", default=None,
                        help="Directory to start in (default: pick a drive)")
    parser.add_argument("-j", "--workers", type=_positive_int, default=None,
                        help="Limit parallel subfolder scans (default: one per subfolder)")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log scan details to stderr")
    return parser

def report_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="diskscope-tree",
        description="DiskScope - Disk Space Analyzer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  diskscope-tree C:\\Users\\John\\Documents\n"
            "  diskscope-tree .\n"
            "  diskscope-tree\n"
        ),
    )
    parser.add_argument("path", nargs="?", default=".",
                        help="Directory to scan (default: current directory)")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log scan details to stderr")
    return parser

def _wants_help(argv: List[str]) -> bool:
    # argparse не знает про "/?"
    return bool(argv) and argv[0] in HELP_FLAGS

def explore_main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else list(argv)
    setup_console()
    parser = explore_parser()
    if _wants_help(argv):
        parser.print_help()
        return 0
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        start = args.path if args.path is not None else select_root()
        start = validate_directory(start)
        Explorer(start, max_workers=args.workers).run()
    except InvalidPathError as e:
        logger.error("%s", e)
        return 1
    except KeyboardInterrupt:
        return 130
    return 0

def report_main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else list(argv)
    setup_console()
    parser = report_parser()
    if _wants_help(argv):
        parser.print_help()
        return 0
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        root_path = validate_directory(args.path)
    except InvalidPathError as e:
        logger.error("%s", e)
        return 1

    print(f"\nScanning: {root_path}")
    print("Please wait...")
    try:
        root = build_tree(root_path)
    except KeyboardInterrupt:
        return 130
    sort_by_size(root)
    print_results(root)
    return 0
