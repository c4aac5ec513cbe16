from __future__ import annotations

from datetime import UTC, datetime

from citecheck_core.types import Citation, ValidationResult

from .reporters import is_known_reporter

VOLUME_RANGE = (1, 2000)
PAGE_RANGE = (1, 10000)
FIRST_REPORTED_YEAR = 1789


def _in_range(value: str | None, low: int, high: int) -> bool:
    try:
        number = int(value or "")
    except ValueError:
        return False
    return low <= number <= high


def validate_citation_format(
    citation: Citation, *, current_year: int | None = None
) -> ValidationResult:
    """Range and lookup sanity checks for a single citation.

    Every failed check contributes its own issue; the citation is valid only
    when no issue was raised.
    """
    issues: list[str] = []

    if not _in_range(citation.volume, *VOLUME_RANGE):
        issues.append(f"Unusual volume number: {citation.volume}")

    if not _in_range(citation.page, *PAGE_RANGE):
        issues.append(f"Unusual page number: {citation.page}")

    if citation.year:
        latest = current_year if current_year is not None else datetime.now(UTC).year
        if not _in_range(citation.year, FIRST_REPORTED_YEAR, latest):
            issues.append(f"Year out of range: {citation.year}")

    if not is_known_reporter(citation.reporter):
        issues.append(f"Unknown reporter: {citation.reporter}")

    return ValidationResult(valid=not issues, issues=issues)
