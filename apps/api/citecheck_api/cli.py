from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from citecheck_core.citeextract import extract_case_citations
from citecheck_core.ingest import DocumentError, extract_text_from_path
from citecheck_core.report import generate_report, needs_review
from citecheck_core.verify import VerificationEngine

from citecheck_api.render import OUTPUT_FORMATS, render_citation_list, render_report
from citecheck_api.services import build_verification_engine
from citecheck_api.settings import settings

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_NEEDS_REVIEW = 2

_EPILOG = """\
examples:
  citecheck brief.pdf
  citecheck motion.docx -o report.md -f markdown
  citecheck contract.txt --extract-only
  citecheck filing.pdf -o results.json -f json

Citations are checked against the CourtListener API (Free Law Project).
Federal coverage is comprehensive; state coverage varies. Always verify
citations marked "not found" manually before filing.
"""


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="citecheck",
        description="Detect case citations in a document and verify them against CourtListener.",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("file", help="Path to the document (PDF, DOCX, TXT or MD)")
    parser.add_argument("-o", "--output", help="Write output to this file instead of stdout")
    parser.add_argument(
        "-f",
        "--format",
        choices=OUTPUT_FORMATS,
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--extract-only",
        action="store_true",
        help="Only extract citations, do not verify them",
    )
    return parser.parse_args(argv)


def _print_progress(completed: int, total: int) -> None:
    percent = round(completed * 100 / total) if total else 100
    filled = percent // 5
    bar = "█" * filled + "░" * (20 - filled)
    sys.stderr.write(f"\rVerifying: [{bar}] {percent}% ({completed}/{total})")
    sys.stderr.flush()


def _emit(content: str, output: str | None) -> None:
    if output:
        Path(output).write_text(content, encoding="utf-8")
        print(f"Saved to {output}", file=sys.stderr)
    else:
        print(content)


def run(args: argparse.Namespace, engine: VerificationEngine | None = None) -> int:
    path = Path(args.file)
    if not path.is_file():
        print(f"Error: File not found: {args.file}", file=sys.stderr)
        return EXIT_FATAL

    print(f"Processing: {path.name}", file=sys.stderr)
    try:
        text = extract_text_from_path(path)
    except (DocumentError, OSError) as exc:
        print(f"Error extracting text: {exc}", file=sys.stderr)
        return EXIT_FATAL
    print(f"  Found {len(text):,} characters", file=sys.stderr)

    citations = extract_case_citations(text)
    print(f"  Found {len(citations)} citation(s)", file=sys.stderr)
    if not citations:
        print("No citations found in document.", file=sys.stderr)
        return EXIT_OK

    if args.extract_only:
        _emit(render_citation_list(citations, args.format), args.output)
        return EXIT_OK

    engine = engine if engine is not None else build_verification_engine()
    print("Verifying against CourtListener database...", file=sys.stderr)
    results = engine.verify_all(citations, on_progress=_print_progress)
    sys.stderr.write("\n")

    report = generate_report(path.name, results)
    _emit(render_report(report, args.format), args.output)

    if needs_review(report):
        print(
            f"{report.not_found + report.format_errors} citation(s) need manual review.",
            file=sys.stderr,
        )
        return EXIT_NEEDS_REVIEW
    print("All citations verified successfully.", file=sys.stderr)
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=settings.log_level.upper())
    try:
        return run(args)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Unhandled error")
        print(f"Fatal error: {exc}", file=sys.stderr)
        return EXIT_FATAL


if __name__ == "__main__":
    raise SystemExit(main())
