from __future__ import annotations

import re
from bisect import bisect_right, insort

from citecheck_core.types import Citation

from .regex_rules import CITATION_PATTERNS, CitationPatterns
from .reporters import normalize_reporter

PRECEDING_CONTEXT_CHARS = 200


class _ClaimedSpans:
    """Sorted, pairwise-disjoint ``[start, end)`` spans."""

    def __init__(self) -> None:
        self._starts: list[int] = []
        self._ends: dict[int, int] = {}

    def overlaps(self, start: int, end: int) -> bool:
        idx = bisect_right(self._starts, start)
        if idx > 0 and self._ends[self._starts[idx - 1]] > start:
            return True
        return idx < len(self._starts) and self._starts[idx] < end

    def claim(self, start: int, end: int) -> None:
        insort(self._starts, start)
        self._ends[start] = end


def _dedup_key(raw: str) -> str:
    return " ".join(raw.split()).lower()


def _clean_case_name(name: str | None) -> str | None:
    if not name:
        return None
    cleaned = re.sub(r"\s+", " ", name)
    cleaned = re.sub(r",\s*$", "", cleaned)
    cleaned = re.sub(r"^\s*,", "", cleaned)
    return cleaned.strip() or None


def _clean_court(court: str | None) -> str | None:
    if court is None:
        return None
    return court.strip() or None


def _preceding_case_name(text: str, patterns: CitationPatterns) -> str | None:
    for pattern in patterns.preceding_case_name:
        match = pattern.search(text)
        if match:
            return _clean_case_name(match.group(1))
    return None


def extract_case_citations(
    text: str, patterns: CitationPatterns = CITATION_PATTERNS
) -> list[Citation]:
    if not text:
        return []

    seen: set[str] = set()
    claimed = _ClaimedSpans()
    citations: list[Citation] = []

    for match in patterns.full.finditer(text):
        raw = match.group(0).strip()
        key = _dedup_key(raw)
        if key in seen:
            continue
        seen.add(key)

        start = match.start()
        end = start + len(raw)
        claimed.claim(start, end)
        citations.append(
            Citation(
                raw=raw,
                case_name=_clean_case_name(match.group("case_name")),
                volume=match.group("volume"),
                reporter=normalize_reporter(match.group("reporter")),
                page=match.group("page"),
                year=match.group("year"),
                court=_clean_court(match.group("court")),
                start_index=start,
                end_index=end,
            )
        )

    # Full citations claim their spans first, so they always win overlaps.
    for match in patterns.short.finditer(text):
        raw = match.group(0).strip()
        key = _dedup_key(raw)
        if key in seen:
            continue

        start = match.start()
        end = start + len(raw)
        if claimed.overlaps(start, end):
            continue
        seen.add(key)
        claimed.claim(start, end)

        preceding = text[max(0, start - PRECEDING_CONTEXT_CHARS) : start]
        citations.append(
            Citation(
                raw=raw,
                case_name=_preceding_case_name(preceding, patterns),
                volume=match.group("volume"),
                reporter=normalize_reporter(match.group("reporter")),
                page=match.group("page"),
                year=match.group("year"),
                court=_clean_court(match.group("court")),
                start_index=start,
                end_index=end,
            )
        )

    citations.sort(key=lambda c: c.start_index)
    return citations


def format_citation(citation: Citation) -> str:
    parts: list[str] = []
    if citation.case_name:
        parts.append(f"{citation.case_name},")
    parts.append(f"{citation.volume} {citation.reporter} {citation.page}")

    parenthetical = [value for value in (citation.court, citation.year) if value]
    if parenthetical:
        parts.append(f"({' '.join(parenthetical)})")
    return " ".join(parts)
