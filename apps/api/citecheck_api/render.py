from __future__ import annotations

import json
from collections.abc import Sequence
from datetime import datetime
from typing import Literal

from citecheck_core.citeextract import format_citation
from citecheck_core.report import calculate_risk_score
from citecheck_core.types import Citation, VerificationReport

OutputFormat = Literal["text", "markdown", "json"]
OUTPUT_FORMATS: tuple[str, ...] = ("text", "markdown", "json")

_RULE_WIDTH = 70

_STATUS_LABELS = {
    "verified": "✓ VERIFIED",
    "not_found": "✗ NOT FOUND",
    "partial_match": "⚠ PARTIAL MATCH",
    "format_error": "! FORMAT ERROR",
    "api_error": "? API ERROR",
}

_STATUS_EMOJI = {
    "verified": "✅",
    "not_found": "❌",
    "partial_match": "⚠️",
    "format_error": "⚡",
    "api_error": "🔌",
}

_COVERAGE_NOTE = (
    "This tool verifies citations against the CourtListener database, "
    "which primarily covers federal cases. State court citations may show as "
    '"not found" even if valid. Always perform manual verification for '
    "citations marked as not found or partial match before filing."
)


def _processed_label(processed_at: str) -> str:
    try:
        return datetime.fromisoformat(processed_at).strftime("%Y-%m-%d %H:%M:%S %Z").strip()
    except ValueError:
        return processed_at


def render_text(report: VerificationReport) -> str:
    heavy = "═" * _RULE_WIDTH
    light = "─" * _RULE_WIDTH
    risk = calculate_risk_score(report)

    lines = [
        heavy,
        "CITATION VERIFICATION REPORT",
        heavy,
        "",
        f"Document: {report.document_name}",
        f"Processed: {_processed_label(report.processed_at)}",
        "",
        light,
        "SUMMARY",
        light,
        f"Total Citations Found: {report.total_citations}",
        f"  ✓ Verified:        {report.verified}",
        f"  ⚠ Partial Match:   {report.partial_matches}",
        f"  ✗ Not Found:       {report.not_found}",
        f"  ! Format Errors:   {report.format_errors}",
        f"  ? API Errors:      {report.api_errors}",
        "",
        f"Risk Level: {risk.level} ({risk.score}/100)",
        f"Recommendation: {risk.recommendation}",
        "",
        light,
        "DETAILED RESULTS",
        light,
    ]

    for idx, result in enumerate(report.results, start=1):
        lines.append("")
        lines.append(f"[{idx}] {format_citation(result.citation)}")
        status = _STATUS_LABELS.get(result.status, result.status.upper())
        lines.append(f"    Status: {status} ({result.confidence}% confidence)")
        lines.append(f"    {result.details}")
        if result.matched_case:
            lines.append(f"    Matched: {result.matched_case.case_name}")
            lines.append(
                f"    Filed: {result.matched_case.date_filed} | Court: {result.matched_case.court}"
            )
        if result.court_listener_url:
            lines.append(f"    Link: {result.court_listener_url}")
        if result.warnings:
            lines.append(f"    Warnings: {'; '.join(result.warnings)}")

    lines.extend(["", heavy, "END OF REPORT", heavy, "", f"NOTE: {_COVERAGE_NOTE}", ""])
    return "\n".join(lines)


def render_markdown(report: VerificationReport) -> str:
    risk = calculate_risk_score(report)
    lines = [
        "# Citation Verification Report",
        "",
        f"**Document:** {report.document_name}",
        f"**Processed:** {_processed_label(report.processed_at)}",
        "",
        "## Summary",
        "",
        "| Status | Count |",
        "|--------|-------|",
        f"| ✅ Verified | {report.verified} |",
        f"| ⚠️ Partial Match | {report.partial_matches} |",
        f"| ❌ Not Found | {report.not_found} |",
        f"| ⚡ Format Error | {report.format_errors} |",
        f"| 🔌 API Error | {report.api_errors} |",
        f"| **Total** | **{report.total_citations}** |",
        "",
        f"### Risk Assessment: {risk.level}",
        "",
        f"> {risk.recommendation}",
        "",
        "## Detailed Results",
        "",
    ]

    for idx, result in enumerate(report.results, start=1):
        emoji = _STATUS_EMOJI.get(result.status, "❓")
        lines.append(f"### {idx}. {emoji} {format_citation(result.citation)}")
        lines.append("")
        status = result.status.replace("_", " ").upper()
        lines.append(f"**Status:** {status} ({result.confidence}% confidence)")
        lines.append("")
        lines.append(result.details)
        lines.append("")
        if result.matched_case:
            lines.extend(
                [
                    "**Matched Case:**",
                    f"- Name: {result.matched_case.case_name}",
                    f"- Citation: {result.matched_case.citation}",
                    f"- Filed: {result.matched_case.date_filed}",
                    f"- Court: {result.matched_case.court}",
                    "",
                ]
            )
        if result.court_listener_url:
            lines.append(f"[View on CourtListener]({result.court_listener_url})")
            lines.append("")
        if result.warnings:
            lines.append("**⚠️ Warnings:**")
            lines.extend(f"- {warning}" for warning in result.warnings)
            lines.append("")
        lines.append("---")
        lines.append("")

    lines.extend(["## Disclaimer", "", _COVERAGE_NOTE, ""])
    return "\n".join(lines)


def render_json(report: VerificationReport) -> str:
    payload = report.model_dump(mode="json")
    payload["risk"] = calculate_risk_score(report).model_dump()
    return json.dumps(payload, indent=2, ensure_ascii=False)


def render_report(report: VerificationReport, output_format: OutputFormat = "text") -> str:
    if output_format == "json":
        return render_json(report)
    if output_format == "markdown":
        return render_markdown(report)
    return render_text(report)


def citation_rows(citations: Sequence[Citation]) -> list[dict[str, object]]:
    return [
        {
            "index": idx,
            "raw": citation.raw,
            "case_name": citation.case_name,
            "volume": citation.volume,
            "reporter": citation.reporter,
            "page": citation.page,
            "year": citation.year,
            "court": citation.court,
        }
        for idx, citation in enumerate(citations, start=1)
    ]


def render_citation_list(
    citations: Sequence[Citation], output_format: OutputFormat = "text"
) -> str:
    rows = citation_rows(citations)
    if output_format == "json":
        return json.dumps(rows, indent=2, ensure_ascii=False)

    lines: list[str] = []
    for row in rows:
        lines.append(f"{row['index']}. {row['raw']}")
        if row["case_name"]:
            lines.append(f"   Case: {row['case_name']}")
        year = f" ({row['year']})" if row["year"] else ""
        lines.append(f"   {row['volume']} {row['reporter']} {row['page']}{year}")
        lines.append("")
    return "\n".join(lines)
