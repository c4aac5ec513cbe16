from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from typing import Callable

from citecheck_core.citeextract.extract import format_citation
from citecheck_core.citeextract.validate import validate_citation_format
from citecheck_core.types import Citation, MatchedCase, VerificationResult

from .courtlistener import CaseRecord, CourtListenerClient, CourtListenerError, SearchResponse
from .scoring import calculate_confidence, case_names_agree, classify_confidence

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]
ContinueCallback = Callable[[], bool]


def _matched_case(record: CaseRecord) -> MatchedCase:
    return MatchedCase(
        case_name=record.case_name,
        citation=", ".join(record.citation),
        date_filed=record.date_filed,
        court=record.court,
        docket_number=record.docket_number,
    )


class VerificationEngine:
    """Checks extracted citations against CourtListener, one at a time."""

    def __init__(
        self,
        client: CourtListenerClient | None = None,
        *,
        current_year: int | None = None,
    ) -> None:
        self.client = client if client is not None else CourtListenerClient()
        self.current_year = current_year
        # Held for every lookup so callers sharing this engine never overlap requests.
        self._lookup_lock = threading.Lock()

    def _lookup(self, citation: Citation) -> SearchResponse | None:
        try:
            response: SearchResponse | None = self.client.search_by_citation(citation)
        except CourtListenerError:
            response = None

        if response is None or response.count == 0:
            try:
                response = self.client.search_by_components(citation)
            except CourtListenerError:
                response = None
        return response

    def verify_one(self, citation: Citation) -> VerificationResult:
        validation = validate_citation_format(citation, current_year=self.current_year)
        if not validation.valid:
            return VerificationResult(
                citation=citation,
                status="format_error",
                confidence=0,
                details=f"Citation format issues: {'; '.join(validation.issues)}",
                warnings=list(validation.issues),
            )

        with self._lookup_lock:
            response = self._lookup(citation)
        if response is None:
            return VerificationResult(
                citation=citation,
                status="api_error",
                confidence=0,
                details=(
                    "Failed to query CourtListener API. "
                    "Check your connection or try again later."
                ),
                warnings=["API request failed"],
            )

        if response.count == 0:
            return VerificationResult(
                citation=citation,
                status="not_found",
                confidence=0,
                details=(
                    f'No matching case found for "{format_citation(citation)}". '
                    "This citation may be fabricated, from a court not covered by "
                    "CourtListener, or use a different citation format."
                ),
                warnings=["No matching case in database"],
            )

        best_match: CaseRecord | None = None
        best_confidence = 0
        for record in response.results:
            confidence = calculate_confidence(citation, record)
            if confidence > best_confidence:
                best_confidence = confidence
                best_match = record

        if best_match is None:
            return VerificationResult(
                citation=citation,
                status="not_found",
                confidence=0,
                details="Search returned results but none matched the citation.",
                warnings=["No confident match found"],
            )

        warnings: list[str] = []
        if (
            citation.case_name
            and best_match.case_name
            and not case_names_agree(citation.case_name, best_match.case_name)
        ):
            warnings.append(
                f'Case name mismatch: citation says "{citation.case_name}", '
                f'database shows "{best_match.case_name}"'
            )

        status = classify_confidence(best_confidence)
        if status == "verified":
            return VerificationResult(
                citation=citation,
                status=status,
                confidence=best_confidence,
                details="Citation verified. Found matching case in CourtListener database.",
                court_listener_url=self.client.case_url(best_match),
                matched_case=_matched_case(best_match),
                warnings=warnings,
            )
        if status == "partial_match":
            return VerificationResult(
                citation=citation,
                status=status,
                confidence=best_confidence,
                details=(
                    "Possible match found, but confidence is low. "
                    "Manual verification recommended."
                ),
                court_listener_url=self.client.case_url(best_match),
                matched_case=_matched_case(best_match),
                warnings=[*warnings, "Low confidence match - verify manually"],
            )
        return VerificationResult(
            citation=citation,
            status=status,
            confidence=best_confidence,
            details=(
                f'Found potential result "{best_match.case_name}" '
                "but match confidence is too low."
            ),
            warnings=[*warnings, "Very low confidence - likely not a match"],
        )

    def verify_all(
        self,
        citations: Sequence[Citation],
        on_progress: ProgressCallback | None = None,
        should_continue: ContinueCallback | None = None,
    ) -> list[VerificationResult]:
        results: list[VerificationResult] = []
        total = len(citations)

        for citation in citations:
            if should_continue is not None and not should_continue():
                logger.info("Verification stopped after %d of %d citations", len(results), total)
                break

            result = self.verify_one(citation)
            logger.debug(
                "%s -> %s (%d)", citation.raw, result.status, result.confidence
            )
            results.append(result)
            if on_progress is not None:
                on_progress(len(results), total)

        logger.info("Verified %d citation(s)", len(results))
        return results
