from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from re import Pattern

from .reporters import ALL_REPORTERS

_PARTY_WORD = r"[A-Z][\w.'\-]+"
_VERSUS = r"(?:v\.?|vs\.?)"
_CASE_NAME = _PARTY_WORD + r"\s+" + _VERSUS + r"\s+" + _PARTY_WORD
_CASE_NAME_TAIL = r"[\w\s,'\-]*?"


@dataclass(frozen=True)
class CitationPatterns:
    full: Pattern[str]
    short: Pattern[str]
    preceding_case_name: tuple[Pattern[str], ...]


def reporter_alternation(reporters: Iterable[str]) -> str:
    # Longest first so "Cal. App. 2d" is tried before "Cal.".
    ordered = sorted(reporters, key=len, reverse=True)
    return "|".join(
        r"\s*".join(re.escape(part) for part in name.split()) for name in ordered
    )


def _volume_reporter_page(alternation: str) -> str:
    return (
        r"(?P<volume>\d{1,4})\s*"
        r"(?P<reporter>" + alternation + r")\s*"
        r"(?P<page>\d{1,6})"
        r"(?:\s*,\s*(?P<pinpoint>\d{1,5}))?"
        r"(?:\s*\((?P<court>[^)]*?)\s*(?P<year>\d{4})\))?"
    )


def build_citation_patterns(reporters: Iterable[str]) -> CitationPatterns:
    tail = _volume_reporter_page(reporter_alternation(reporters))

    full = re.compile(
        r"(?P<case_name>" + _CASE_NAME + _CASE_NAME_TAIL + r"),?\s*" + tail,
        re.IGNORECASE,
    )
    short = re.compile(r"(?<!\w)" + tail, re.IGNORECASE)
    preceding = (
        re.compile(r"(" + _CASE_NAME + _CASE_NAME_TAIL + r")\s*,?\s*$", re.IGNORECASE),
        re.compile(r"\bSee\s+(" + _CASE_NAME + r")", re.IGNORECASE),
        re.compile(r"\bin\s+(" + _CASE_NAME + r")", re.IGNORECASE),
    )
    return CitationPatterns(
        full=full,
        short=short,
        preceding_case_name=preceding,
    )


CITATION_PATTERNS: CitationPatterns = build_citation_patterns(ALL_REPORTERS)
PARTY_SEPARATOR: Pattern[str] = re.compile(r"\s+(?:vs|v)\.?\s+", re.IGNORECASE)
