"""CLI for minifying JavaScript files and scripts embedded in HTML.

Usage:
    python -m jsminifier.cli.minify js app.js --out app.min.js --stats
    python -m jsminifier.cli.minify html index.html \
        --out dist/index.html \
        --record dist/index.record.json
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from jsminifier import __version__
from jsminifier.cli._console import _fmt, configure_windows_console
from jsminifier.config import get_config
from jsminifier.errors import MinificationError
from jsminifier.logging_setup import get_logger
from jsminifier.records import MinificationHistory, MinificationRecord

logger = get_logger("cli.minify")

MODE_JS = "js"
MODE_HTML = "html"


def format_stats(record: MinificationRecord, src: Path, use_emoji: bool = True) -> str:
    """Format a one-line size report for a run.

    Args:
        record: Run record.
        src: Source path shown in the report.
        use_emoji: Whether to use emoji prefix.

    Returns:
        Report line.
    """
    prefix = _fmt("📦", "[SIZE]", use_emoji)
    percent = (1.0 - record.ratio) * 100
    return (
        f"{prefix} {src}: {record.original_size:,} -> {record.minified_size:,} bytes "
        f"(-{record.saved_bytes:,} bytes, -{percent:.1f}%)"
    )


def write_record(record: MinificationRecord, path: Path, include_data_urls: bool) -> None:
    """Write a run record as JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = record.to_dict(include_data_urls=include_data_urls)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def run_minify(text: str, mode: str, fallback_original: bool) -> MinificationRecord | None:
    """Minify ``text`` and return its run record.

    Args:
        text: Source text.
        mode: ``js`` or ``html``.
        fallback_original: Keep the input unchanged when minification fails.

    Returns:
        The run record, or None when minification failed without fallback.
    """
    history = MinificationHistory(enabled=True)
    config = get_config().minifier

    try:
        if mode == MODE_HTML:
            history.minify_html(text)
        else:
            history.minify_file(text)
    except MinificationError as e:
        if not fallback_original:
            logger.error(f"Minification failed: {e}")
            return None
        logger.warning(f"Minification failed, keeping original text: {e}")
        mime_type = config.html_mime_type if mode == MODE_HTML else config.js_mime_type
        return MinificationRecord.build(text, text, mime_type)

    return history.latest


def cmd_minify(args: argparse.Namespace) -> int:
    """Run js/html command.

    Args:
        args: Parsed arguments.

    Returns:
        Exit code.
    """
    src = Path(args.src)
    use_emoji = not args.no_emoji

    if not src.exists():
        logger.error(f"Source file not found: {src}")
        return 1

    text = src.read_text(encoding="utf-8")
    fallback = args.fallback_original or get_config().minifier.fallback_original

    record = run_minify(text, args.command, fallback)
    if record is None:
        return 1

    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(record.minified_text, encoding="utf-8")
        print(_fmt("✅ Minified file written to:", "[OK] Minified file written to:", use_emoji) + f" {out_path}")
    else:
        sys.stdout.write(record.minified_text)

    if args.record:
        write_record(record, Path(args.record), args.data_urls)

    if args.stats:
        # Keep stdout clean when it carries the minified text
        stream = sys.stdout if args.out else sys.stderr
        print(format_stats(record, src, use_emoji), file=stream)

    return 0


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("src", type=str, help="Source file")
    parser.add_argument(
        "--out",
        type=str,
        default=None,
        metavar="PATH",
        help="Write output to file instead of stdout",
    )
    parser.add_argument(
        "--fallback-original",
        action="store_true",
        help="Write the input unchanged when minification fails",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print original and minified sizes",
    )
    parser.add_argument(
        "--record",
        type=str,
        default=None,
        metavar="PATH",
        help="Write the run record as JSON",
    )
    parser.add_argument(
        "--data-urls",
        action="store_true",
        help="Include data URLs in the JSON record",
    )
    parser.add_argument(
        "--no-emoji",
        action="store_true",
        help="Disable emoji in output (useful for Windows/CI)",
    )


def main() -> None:
    """Main entry point for the minify CLI."""
    parser = argparse.ArgumentParser(
        prog="jsmin",
        description="Strip comments and whitespace from JavaScript",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    js_parser = subparsers.add_parser(MODE_JS, help="Minify a JavaScript file")
    _add_common_arguments(js_parser)

    html_parser = subparsers.add_parser(
        MODE_HTML,
        help="Minify scripts embedded in an HTML file",
    )
    _add_common_arguments(html_parser)

    args = parser.parse_args()

    configure_windows_console()

    if args.command in (MODE_JS, MODE_HTML):
        sys.exit(cmd_minify(args))
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
