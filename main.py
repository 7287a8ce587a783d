"""
Main entry point for the SpotDiff command line.

This module handles:
- Command line argument parsing
- Logging configuration
- Loading comparison settings
- Reading, comparing and printing two files
- Exporting the unified diff
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional, List, TextIO

from spotdiff import __version__
from spotdiff.core.diff.side_by_side import SideBySideFormatter
from spotdiff.core.diff.text_diff import TextDiffEngine
from spotdiff.core.models import DiffError, DiffResult
from spotdiff.services.file_io import DEFAULT_EXPORT_NAME, FileIOService
from spotdiff.services.settings import DiffStyle, SettingsManager


# =============================================================================
# Constants
# =============================================================================

APP_NAME = "spotdiff"

# Exit codes follow diff(1)
EXIT_IDENTICAL = 0
EXIT_DIFFERENT = 1
EXIT_ERROR = 2

logger = logging.getLogger(APP_NAME)


# =============================================================================
# Data Classes
# =============================================================================

@dataclass
class CommandLineArgs:
    """Parsed command line arguments."""
    left_path: Optional[str] = None
    right_path: Optional[str] = None
    output_path: Optional[str] = None
    diff_style: Optional[DiffStyle] = None
    ignore_whitespace: Optional[bool] = None
    ignore_case: Optional[bool] = None
    width: Optional[int] = None
    show_summary: bool = False
    config_file: Optional[str] = None
    encoding: Optional[str] = None
    log_level: str = "WARNING"


# =============================================================================
# Logging Setup
# =============================================================================

class LogFormatter(logging.Formatter):
    """Custom log formatter with colors for console."""

    COLORS = {
        logging.INFO: '\033[32m',      # Green
        logging.WARNING: '\033[33m',   # Yellow
        logging.ERROR: '\033[31m',     # Red
        logging.CRITICAL: '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, use_colors: bool = True):
        super().__init__(
            fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)

        if self.use_colors:
            color = self.COLORS.get(record.levelno, '')
            return f"{color}{formatted}{self.RESET}"

        return formatted


def setup_logging(level: str = "WARNING", log_file: Optional[Path] = None) -> logging.Logger:
    """
    Configure application logging.

    Console output goes to stderr so it never mixes with the diff on stdout.

    Args:
        level: Log level string
        log_file: Optional file path for logging

    Returns:
        Root logger instance
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(LogFormatter(use_colors=True))
    root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(LogFormatter(use_colors=False))
        root_logger.addHandler(file_handler)

    # Reduce noise from encoding detection
    logging.getLogger('chardet').setLevel(logging.WARNING)

    return root_logger


# =============================================================================
# Command Line Parsing
# =============================================================================

def parse_arguments(args: Optional[List[str]] = None) -> CommandLineArgs:
    """
    Parse command line arguments.

    Args:
        args: Arguments to parse (defaults to sys.argv)

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Line-by-line comparison of two text files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s old.txt new.txt               Unified diff
  %(prog)s -y old.txt new.txt            Side-by-side diff
  %(prog)s -w -o changes.diff a.py b.py  Ignore whitespace, export result

Binary files (NUL bytes or known binary signatures) are refused with exit
status 2 rather than compared as text.
        """
    )

    parser.add_argument('left', help='Original file')
    parser.add_argument('right', help='Modified file')

    # Comparison options
    parser.add_argument(
        '-w', '--ignore-whitespace',
        action='store_true',
        default=None,
        help='Treat lines differing only in whitespace as unchanged'
    )
    parser.add_argument(
        '-i', '--ignore-case',
        action='store_true',
        default=None,
        help='Compare lines case-insensitively'
    )
    parser.add_argument(
        '--encoding',
        help='Force input encoding (auto-detected by default)'
    )

    # Output options
    style_group = parser.add_mutually_exclusive_group()
    style_group.add_argument(
        '-u', '--unified',
        action='store_const',
        const=DiffStyle.UNIFIED,
        dest='diff_style',
        help='Unified output (default)'
    )
    style_group.add_argument(
        '-y', '--side-by-side',
        action='store_const',
        const=DiffStyle.SIDE_BY_SIDE,
        dest='diff_style',
        help='Side-by-side output'
    )
    parser.add_argument(
        '-W', '--width',
        type=int,
        help='Total width of side-by-side output'
    )
    parser.add_argument(
        '-o', '--output',
        nargs='?',
        const='',
        help='Also write the unified diff to a file (default: diff-result.diff)'
    )
    parser.add_argument(
        '-s', '--summary',
        action='store_true',
        help='Print added/removed/unchanged counts'
    )

    # Configuration
    parser.add_argument(
        '-c', '--config',
        help='Settings file path'
    )

    # Logging
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output'
    )
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        default='WARNING',
        help='Log level'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'{APP_NAME} {__version__}'
    )

    parsed = parser.parse_args(args)

    result = CommandLineArgs()
    result.left_path = parsed.left
    result.right_path = parsed.right
    result.output_path = parsed.output
    result.diff_style = parsed.diff_style
    result.ignore_whitespace = parsed.ignore_whitespace
    result.ignore_case = parsed.ignore_case
    result.width = parsed.width
    result.show_summary = parsed.summary
    result.config_file = parsed.config
    result.encoding = parsed.encoding
    result.log_level = 'DEBUG' if parsed.verbose else parsed.log_level

    return result


# =============================================================================
# Comparison
# =============================================================================

def run_compare(args: CommandLineArgs, out: Optional[TextIO] = None) -> int:
    """
    Compare the two files named by `args` and print the result.

    Args:
        args: Parsed command line arguments
        out: Stream receiving the diff (stdout by default)

    Returns:
        Process exit code
    """
    out = out or sys.stdout
    manager = SettingsManager(Path(args.config_file) if args.config_file else None)
    # Command line flags override stored settings for this run only
    comparison = replace(manager.settings.comparison)
    if args.ignore_whitespace is not None:
        comparison.ignore_whitespace = args.ignore_whitespace
    if args.ignore_case is not None:
        comparison.ignore_case = args.ignore_case
    style = args.diff_style or comparison.diff_style
    width = args.width or comparison.side_by_side_width

    file_io = FileIOService()
    texts = []
    for path in (args.left_path, args.right_path):
        read_result = file_io.read_file(path, encoding=args.encoding)
        if not read_result.success:
            print(f"{APP_NAME}: {read_result.error}", file=sys.stderr)
            return EXIT_ERROR
        content = read_result.content
        logger.info("%s: %d lines, %s, %s", path, content.line_count,
                    content.size_formatted, content.encoding)
        texts.append(content.text)

    try:
        engine = TextDiffEngine(comparison.to_options())
        result = engine.compare(texts[0], texts[1], args.left_path, args.right_path)
    except (DiffError, ValueError) as e:
        print(f"{APP_NAME}: {e}", file=sys.stderr)
        return EXIT_ERROR

    _print_result(result, style, width, comparison.tab_size, out)

    if args.show_summary:
        print(f"{result.summary}", file=out)

    if args.output_path is not None:
        if not _export(file_io, manager, result, args.output_path):
            return EXIT_ERROR

    manager.add_recent_comparison(args.left_path, args.right_path)
    return EXIT_DIFFERENT if result.has_differences else EXIT_IDENTICAL


def _print_result(
    result: DiffResult,
    style: DiffStyle,
    width: int,
    tab_size: int,
    out: TextIO
) -> None:
    if style == DiffStyle.SIDE_BY_SIDE:
        text = SideBySideFormatter(width=width, tab_size=tab_size).render(result.rows)
    else:
        text = result.to_text()

    if text:
        print(text, file=out)


def _export(
    file_io: FileIOService,
    manager: SettingsManager,
    result: DiffResult,
    output: str
) -> bool:
    """Write the unified text to `output`, or the default export file."""
    target = Path(output) if output else Path(DEFAULT_EXPORT_NAME)

    write_result = file_io.write_text(target, result.to_text())
    if not write_result.success:
        print(f"{APP_NAME}: {write_result.error}", file=sys.stderr)
        return False

    logger.info("Exported %d bytes to %s", write_result.bytes_written, target)
    manager.settings.last_export_path = str(target)
    return True


# =============================================================================
# Main
# =============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code
    """
    args = parse_arguments(argv)
    setup_logging(args.log_level)
    logger.debug("Arguments: %s", args)

    return run_compare(args)


if __name__ == '__main__':
    sys.exit(main())
