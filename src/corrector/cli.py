"""Command-line front end for the text corrector.

Reads text from ``--text``, ``--file`` or stdin, runs one check and writes
the results page. ``--copy`` prints the corrected text so it can be piped
into a clipboard tool.
"""

from __future__ import annotations

import argparse
import csv
import logging
import sys
from pathlib import Path
from typing import Iterable, Optional

from src.language_check.checker import IssueChecker, ServiceError
from src.language_check.client import LanguageToolClient
from src.language_check.language_check_config import CheckerSettings
from src.models import CheckSession

from .report_utils import build_issue_csv, build_results_html
from .session import CheckFailedError, CorrectionController, EmptyTextError

LOGGER = logging.getLogger(__name__)


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Check text for grammar, spelling, style and clarity issues.",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--text",
        help="Text to check. Reads stdin when neither --text nor --file is given.",
    )
    source.add_argument(
        "--file",
        type=Path,
        default=None,
        help="Path to a UTF-8 text file to check.",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write the HTML results page here (a CSV issue list is written beside it).",
    )
    parser.add_argument(
        "--copy",
        action="store_true",
        help="Print the corrected text to stdout.",
    )
    parser.add_argument(
        "--language",
        default=None,
        help="Language code sent to the service (default: env CORRECTOR_LANGUAGE or en-US)",
    )
    parser.add_argument(
        "--api-url",
        default=None,
        help="Check endpoint URL (default: env CORRECTOR_API_URL or the public LanguageTool API)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Request timeout in seconds (default: env CORRECTOR_TIMEOUT or 30)",
    )
    parser.add_argument(
        "--local",
        action="store_true",
        help="Use a local LanguageTool server via language_tool_python instead of the HTTP API.",
    )
    parser.add_argument(
        "--dotenv",
        type=Path,
        default=None,
        help="Path to a .env file with CORRECTOR_* settings.",
    )
    return parser.parse_args(list(argv) if argv is not None else None)


def _read_input(args: argparse.Namespace) -> str:
    if args.text is not None:
        return args.text
    if args.file is not None:
        return args.file.read_text(encoding="utf-8")
    return sys.stdin.read()


def build_checker(args: argparse.Namespace, settings: CheckerSettings) -> IssueChecker:
    if args.local:
        from src.language_check.language_tool_manager import LocalLanguageToolChecker

        return LocalLanguageToolChecker(settings.language)
    return LanguageToolClient(settings)


def write_outputs(session: CheckSession, output: Path) -> Path:
    """Write the HTML page and the CSV issue list for ``session``."""

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(build_results_html(session), encoding="utf-8")

    csv_path = output.with_suffix(".csv")
    with csv_path.open("w", encoding="utf-8", newline="") as csv_file:
        writer = csv.writer(csv_file)
        writer.writerows(build_issue_csv(session))
    return csv_path


def main(argv: Optional[Iterable[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO)
    args = parse_args(argv)

    try:
        settings = CheckerSettings.from_env(args.dotenv).with_overrides(
            language=args.language,
            api_url=args.api_url,
            timeout=args.timeout,
        )
        text = _read_input(args)
    except (OSError, ValueError) as exc:
        LOGGER.error("%s", exc)
        return 1

    try:
        checker = build_checker(args, settings)
    except ServiceError as exc:
        LOGGER.error("%s", exc)
        return 1

    controller = CorrectionController(checker)
    try:
        session = controller.check(text)
    except (EmptyTextError, CheckFailedError) as exc:
        LOGGER.error("%s", exc)
        return 1
    finally:
        checker.close()

    print(f"Found {len(session.issue_records)} issue(s).", file=sys.stderr)
    if args.output is not None:
        csv_path = write_outputs(session, args.output)
        print(f"Results page written to {args.output.resolve()}", file=sys.stderr)
        print(f"CSV issue list written to {csv_path.resolve()}", file=sys.stderr)
    if args.copy:
        print(controller.copy_text(text))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
