from .courtlistener import (
    CaseRecord,
    CourtListenerClient,
    CourtListenerError,
    SearchResponse,
)
from .engine import VerificationEngine
from .ratelimit import RateLimiter
from .scoring import calculate_confidence, case_names_agree, classify_confidence

__all__ = [
    "CaseRecord",
    "CourtListenerClient",
    "CourtListenerError",
    "RateLimiter",
    "SearchResponse",
    "VerificationEngine",
    "calculate_confidence",
    "case_names_agree",
    "classify_confidence",
]
