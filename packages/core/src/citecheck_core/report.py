from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from datetime import UTC, datetime

from .types import RiskScore, VerificationReport, VerificationResult


def generate_report(
    document_name: str,
    results: Sequence[VerificationResult],
    processed_at: str | None = None,
) -> VerificationReport:
    counts = Counter(result.status for result in results)
    return VerificationReport(
        document_name=document_name,
        total_citations=len(results),
        verified=counts["verified"],
        not_found=counts["not_found"],
        partial_matches=counts["partial_match"],
        format_errors=counts["format_error"],
        api_errors=counts["api_error"],
        results=list(results),
        processed_at=processed_at or datetime.now(UTC).isoformat(),
    )


def needs_review(report: VerificationReport) -> bool:
    return report.not_found > 0 or report.format_errors > 0


def calculate_risk_score(report: VerificationReport) -> RiskScore:
    total = report.total_citations
    if total == 0:
        return RiskScore(
            score=0, level="LOW", recommendation="No citations found to verify."
        )

    unverified = report.not_found + report.format_errors
    unverified_ratio = unverified / total
    partial_ratio = report.partial_matches / total
    score = round((report.verified / total) * 100 - partial_ratio * 15)

    if unverified == 0:
        return RiskScore(
            score=max(score, 85),
            level="LOW",
            recommendation="All citations verified. Document appears safe to file.",
        )
    if unverified_ratio <= 0.1:
        return RiskScore(
            score=score,
            level="MEDIUM",
            recommendation=f"{unverified} citation(s) need manual verification before filing.",
        )
    if unverified_ratio <= 0.3:
        return RiskScore(
            score=score,
            level="HIGH",
            recommendation=(
                "Significant number of unverified citations. "
                "Thorough review required before filing."
            ),
        )
    return RiskScore(
        score=min(score, 25),
        level="CRITICAL",
        recommendation=(
            "Majority of citations could not be verified. "
            "Do not file without comprehensive manual review."
        ),
    )
