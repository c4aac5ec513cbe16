from .citeextract import extract_case_citations, format_citation, validate_citation_format
from .report import calculate_risk_score, generate_report, needs_review
from .types import (
    Citation,
    MatchedCase,
    RiskScore,
    ValidationResult,
    VerificationReport,
    VerificationResult,
)
from .verify import CourtListenerClient, CourtListenerError, RateLimiter, VerificationEngine

__all__ = [
    "Citation",
    "MatchedCase",
    "RiskScore",
    "ValidationResult",
    "VerificationReport",
    "VerificationResult",
    "extract_case_citations",
    "format_citation",
    "validate_citation_format",
    "generate_report",
    "calculate_risk_score",
    "needs_review",
    "CourtListenerClient",
    "CourtListenerError",
    "RateLimiter",
    "VerificationEngine",
]
