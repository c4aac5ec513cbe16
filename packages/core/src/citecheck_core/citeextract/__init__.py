from .extract import extract_case_citations, format_citation
from .regex_rules import CITATION_PATTERNS, CitationPatterns, build_citation_patterns
from .reporters import (
    ALL_REPORTERS,
    FEDERAL_REPORTERS,
    REGIONAL_REPORTERS,
    STATE_REPORTERS,
    is_known_reporter,
    normalize_reporter,
)
from .validate import validate_citation_format

__all__ = [
    "ALL_REPORTERS",
    "CITATION_PATTERNS",
    "CitationPatterns",
    "FEDERAL_REPORTERS",
    "REGIONAL_REPORTERS",
    "STATE_REPORTERS",
    "build_citation_patterns",
    "extract_case_citations",
    "format_citation",
    "is_known_reporter",
    "normalize_reporter",
    "validate_citation_format",
]
