"""Heuristic confidence that a CourtListener record matches a citation.

The score is additive and capped at 100. Three independent categories can
contribute in the same evaluation:

* citation string: +50 for the exact ``volume reporter page`` token, else +30
  when volume and page both appear in the same candidate citation string;
* case name: +30 when two or more party tokens appear in the record name,
  +15 for exactly one;
* year: +20 for the same year, +10 when one year apart.
"""

from __future__ import annotations

import re

from citecheck_core.citeextract.regex_rules import PARTY_SEPARATOR
from citecheck_core.types import Citation, VerificationStatus

from .courtlistener import CaseRecord, citation_query

EXACT_CITATION_POINTS = 50
PARTIAL_CITATION_POINTS = 30
TWO_PARTY_POINTS = 30
ONE_PARTY_POINTS = 15
SAME_YEAR_POINTS = 20
ADJACENT_YEAR_POINTS = 10
MAX_CONFIDENCE = 100

VERIFIED_THRESHOLD = 70
PARTIAL_MATCH_THRESHOLD = 40


def split_parties(case_name: str) -> list[str]:
    return PARTY_SEPARATOR.split(case_name.lower())


def _citation_points(citation: Citation, record: CaseRecord) -> int:
    exact = citation_query(citation).lower()
    for candidate in record.citation:
        if exact in candidate.lower():
            return EXACT_CITATION_POINTS
        if citation.volume in candidate and citation.page in candidate:
            return PARTIAL_CITATION_POINTS
    return 0


def _case_name_points(citation: Citation, record: CaseRecord) -> int:
    if not citation.case_name or not record.case_name:
        return 0

    record_name = record.case_name.lower()
    matches = 0
    for party in split_parties(citation.case_name):
        token = re.sub(r"[^\w\s]", "", party).strip()
        if token and token in record_name:
            matches += 1

    if matches >= 2:
        return TWO_PARTY_POINTS
    if matches == 1:
        return ONE_PARTY_POINTS
    return 0


def _year_points(citation: Citation, record: CaseRecord) -> int:
    if not citation.year or not record.date_filed:
        return 0
    try:
        cited = int(citation.year)
        filed = int(record.year_filed)
    except ValueError:
        return 0

    if cited == filed:
        return SAME_YEAR_POINTS
    if abs(cited - filed) == 1:
        return ADJACENT_YEAR_POINTS
    return 0


def calculate_confidence(citation: Citation, record: CaseRecord) -> int:
    confidence = (
        _citation_points(citation, record)
        + _case_name_points(citation, record)
        + _year_points(citation, record)
    )
    return min(MAX_CONFIDENCE, confidence)


def case_names_agree(citation_name: str, record_name: str) -> bool:
    cited = [re.sub(r"[^\w]", "", party) for party in split_parties(citation_name)]
    found = [re.sub(r"[^\w]", "", party) for party in split_parties(record_name)]
    return any(
        left and right and (left in right or right in left)
        for left in cited
        for right in found
    )


def classify_confidence(confidence: int) -> VerificationStatus:
    if confidence >= VERIFIED_THRESHOLD:
        return "verified"
    if confidence >= PARTIAL_MATCH_THRESHOLD:
        return "partial_match"
    return "not_found"
