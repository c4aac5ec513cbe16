from __future__ import annotations

import pytest
from pydantic import ValidationError

from citecheck_core.report import calculate_risk_score, generate_report, needs_review
from citecheck_core.types import Citation, VerificationReport, VerificationResult


def _result(status: str, page: str = "113") -> VerificationResult:
    citation = Citation(raw=f"410 U.S. {page}", volume="410", reporter="U.S.", page=page)
    return VerificationResult(citation=citation, status=status)


def test_generate_report_counts_every_status() -> None:
    statuses = ["verified", "verified", "not_found", "partial_match", "format_error", "api_error"]
    results = [_result(status, page=str(idx + 1)) for idx, status in enumerate(statuses)]

    report = generate_report("brief.pdf", results, processed_at="2026-01-01T00:00:00+00:00")

    assert report.document_name == "brief.pdf"
    assert report.total_citations == 6
    assert (report.verified, report.not_found, report.partial_matches) == (2, 1, 1)
    assert (report.format_errors, report.api_errors) == (1, 1)
    assert (
        report.verified
        + report.not_found
        + report.partial_matches
        + report.format_errors
        + report.api_errors
        == report.total_citations
    )
    assert [r.citation.page for r in report.results] == ["1", "2", "3", "4", "5", "6"]
    assert report.processed_at == "2026-01-01T00:00:00+00:00"


def test_report_rejects_inconsistent_counts() -> None:
    with pytest.raises(ValidationError):
        VerificationReport(
            document_name="brief.pdf",
            total_citations=2,
            verified=1,
            not_found=0,
            partial_matches=0,
            format_errors=0,
            api_errors=0,
            results=[_result("verified")],
            processed_at="2026-01-01T00:00:00+00:00",
        )


def test_empty_report_is_low_risk() -> None:
    report = generate_report("empty.txt", [])

    risk = calculate_risk_score(report)

    assert report.total_citations == 0
    assert risk.level == "LOW"
    assert risk.score == 0
    assert not needs_review(report)


def test_all_verified_is_low_risk() -> None:
    report = generate_report("ok.txt", [_result("verified"), _result("partial_match", "2")])

    risk = calculate_risk_score(report)

    assert risk.level == "LOW"
    assert risk.score >= 85
    assert not needs_review(report)


def test_risk_levels_follow_unverified_ratio() -> None:
    medium = generate_report("m.txt", [_result("verified", str(i + 1)) for i in range(9)] + [_result("not_found", "99")])
    high = generate_report("h.txt", [_result("verified", str(i + 1)) for i in range(4)] + [_result("format_error", "99")])
    critical = generate_report("c.txt", [_result("verified"), _result("not_found", "2")])

    assert calculate_risk_score(medium).level == "MEDIUM"
    assert calculate_risk_score(high).level == "HIGH"
    critical_risk = calculate_risk_score(critical)
    assert critical_risk.level == "CRITICAL"
    assert critical_risk.score <= 25
    assert needs_review(critical)
