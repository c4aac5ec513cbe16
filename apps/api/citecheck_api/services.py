from __future__ import annotations

from citecheck_core.verify import CourtListenerClient, RateLimiter, VerificationEngine

from citecheck_api.settings import Settings, settings


def build_verification_engine(config: Settings = settings) -> VerificationEngine:
    client = CourtListenerClient(
        config.courtlistener_token,
        base_url=config.courtlistener_base_url,
        timeout_seconds=config.courtlistener_timeout_seconds,
        rate_limiter=RateLimiter(config.min_request_interval_seconds),
    )
    return VerificationEngine(client)
