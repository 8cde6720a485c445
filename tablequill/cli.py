"""
Command-line interface for TableQuill.

Usage:
    tablequill render input.html -o output.pdf
    tablequill render input.html -o output.pdf --orientation L --size A3
    tablequill version
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .engine.text_metrics import FontSpec
from .exceptions import TableQuillError
from .utils.logger import LOG_LEVELS, configure_logging

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="tablequill",
        description="TableQuill - table markup layout and pagination to PDF",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  tablequill render report.html -o report.pdf
  tablequill render report.html -o report.pdf --orientation L --font Times --font-size 10
  tablequill render report.html --footer footer.html
  tablequill version
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    render_parser = subparsers.add_parser("render", help="Render table markup to PDF")
    render_parser.add_argument("input", help="Input markup file")
    render_parser.add_argument(
        "-o", "--output",
        help="Output PDF path (default: input name with .pdf extension)"
    )
    render_parser.add_argument(
        "--orientation",
        choices=["P", "L"],
        default="P",
        help="Page orientation (default: P)"
    )
    render_parser.add_argument(
        "--unit",
        choices=["pt", "mm", "cm", "in"],
        default="mm",
        help="User unit for sizes in the markup (default: mm)"
    )
    render_parser.add_argument(
        "--size",
        default="A4",
        help="Page size: A3, A4, A5, Letter, Legal (default: A4)"
    )
    render_parser.add_argument("--font", default="Helvetica", help="Default font family")
    render_parser.add_argument("--font-size", type=float, default=12.0, help="Default font size in points")
    render_parser.add_argument("--header", help="Markup file drawn at the top of every page")
    render_parser.add_argument("--footer", help="Markup file drawn at the bottom of every page")
    render_parser.add_argument(
        "--single-page",
        action="store_true",
        help="Never break tables across pages"
    )
    render_parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="WARNING",
        help="Log level (default: WARNING)"
    )

    subparsers.add_parser("version", help="Show version information")

    return parser


def _read_markup(path: Optional[str]) -> str:
    if not path:
        return ""
    return Path(path).read_text(encoding="utf-8")


def cmd_render(args) -> int:
    """Handle render command."""
    from .api import render_markup_to_pdf

    configure_logging(args.log_level)

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1
    output_path = Path(args.output) if args.output else input_path.with_suffix(".pdf")

    try:
        written = render_markup_to_pdf(
            _read_markup(args.input),
            output_path,
            orientation=args.orientation,
            unit=args.unit,
            size=args.size,
            font=FontSpec(args.font, "", args.font_size),
            header=_read_markup(args.header),
            footer=_read_markup(args.footer),
            multipage=not args.single_page,
        )
    except (TableQuillError, ValueError, OSError) as exc:
        logger.debug("Rendering failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"Saved: {written}")
    return 0


def cmd_version(args=None) -> int:
    """Handle version command."""
    from .version import __version__
    print(f"TableQuill v{__version__}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command == "render":
        return cmd_render(args)
    if args.command == "version":
        return cmd_version(args)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
