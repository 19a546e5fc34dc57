"""Extract a saved UNIVERSAL PASSPORT page as JSON.

Standalone CLI script: reads an HTML file (or stdin), runs the extractor
for the given page type and prints the record as JSON on stdout.

Run with: python scripts/extract_page.py grade_inquiry data/grades.html
Stdin:    cat portal.html | python scripts/extract_page.py portal
Strict:   python scripts/extract_page.py test_answer_status page.html --strict
List:     python scripts/extract_page.py --list

Page types may be given by name (grade_inquiry, syllabus_view, ...) or by
the portal's own page title (成績照会, 課題提出一覧, ...).

Exit codes:
  0 = success (JSON on stdout)
  1 = error (message on stderr)
"""

import argparse
import json
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Add project root to path for src imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from src.unipa.config import ExtractorOptions, UnipaConfig, get_config  # noqa: E402
from src.unipa.errors import ExtractionError  # noqa: E402
from src.unipa.logging import setup_logging  # noqa: E402
from src.unipa.registry import PageType, extract  # noqa: E402


def _log(msg: str) -> None:
    """Write diagnostic messages to stderr so stdout stays clean for JSON."""
    print(msg, file=sys.stderr)


def _parse_args() -> argparse.Namespace:
    """Parse CLI arguments using argparse."""
    parser = argparse.ArgumentParser(
        description="Extract a saved UNIVERSAL PASSPORT page as JSON.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "page_type",
        nargs="?",
        help="Page type name or page title (see --list).",
    )
    parser.add_argument(
        "html_file",
        nargs="?",
        default=None,
        help="Saved HTML file. Reads stdin when omitted or '-'.",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List recognised page types and exit.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Emit extractor debug events on stderr.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Escalate tolerated fallbacks into errors.",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Log to stderr as JSON lines instead of console format.",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write JSON to this file instead of stdout.",
    )
    return parser.parse_args()


def _build_options(args: argparse.Namespace, config: UnipaConfig) -> ExtractorOptions:
    """Options from UNIPA_* settings; --debug and --strict only ever switch modes on."""
    options = ExtractorOptions.from_config(config)
    if args.debug:
        options = options.with_debug_mode(True)
    if args.strict:
        options = options.with_strict_mode(True)
    return options


def _read_html(html_file: str | None) -> bytes:
    if html_file is None or html_file == "-":
        return sys.stdin.buffer.read()
    return Path(html_file).read_bytes()


def main(args: argparse.Namespace) -> None:
    if args.list:
        for page_type in PageType:
            print(f"{page_type.name.lower():<28} {page_type.value}")
        return

    if not args.page_type:
        _log("ERROR: page_type is required (see --list)")
        sys.exit(1)

    config = get_config()
    setup_logging(
        json_output=args.json_logs or config.log_json,
        log_level="DEBUG" if args.debug else config.log_level,
    )

    options = _build_options(args, config)

    page_type = PageType.parse(args.page_type)
    _log(f"extract_page: {page_type.name.lower()} ({page_type.value})")

    record = extract(page_type, _read_html(args.html_file), options)
    output = json.dumps(record.model_dump(mode="json"), indent=2, ensure_ascii=False)

    if args.output:
        output_file = Path(args.output)
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(output, encoding="utf-8")
        _log(f"  Wrote {output_file}")
    else:
        print(output)


if __name__ == "__main__":
    args = _parse_args()
    try:
        main(args)
    except (ExtractionError, ValueError, OSError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)
