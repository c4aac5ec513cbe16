from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

VerificationStatus = Literal[
    "verified",
    "not_found",
    "partial_match",
    "format_error",
    "api_error",
]
RiskLevel = Literal["LOW", "MEDIUM", "HIGH", "CRITICAL"]


class Citation(BaseModel):
    model_config = ConfigDict(frozen=True)

    raw: str
    case_name: str | None = None
    volume: str
    reporter: str
    page: str
    year: str | None = None
    court: str | None = None
    start_index: int = 0
    end_index: int = 0


class ValidationResult(BaseModel):
    valid: bool
    issues: list[str] = Field(default_factory=list)


class MatchedCase(BaseModel):
    case_name: str
    citation: str
    date_filed: str
    court: str
    docket_number: str | None = None


class VerificationResult(BaseModel):
    citation: Citation
    status: VerificationStatus
    confidence: int = Field(default=0, ge=0, le=100)
    details: str = ""
    court_listener_url: str | None = None
    matched_case: MatchedCase | None = None
    warnings: list[str] = Field(default_factory=list)


class VerificationReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    document_name: str
    total_citations: int
    verified: int
    not_found: int
    partial_matches: int
    format_errors: int
    api_errors: int
    results: list[VerificationResult]
    processed_at: str

    @model_validator(mode="after")
    def _check_counts(self) -> VerificationReport:
        counted = (
            self.verified
            + self.not_found
            + self.partial_matches
            + self.format_errors
            + self.api_errors
        )
        if counted != self.total_citations:
            raise ValueError(
                f"status counts sum to {counted}, expected {self.total_citations}"
            )
        if len(self.results) != self.total_citations:
            raise ValueError(
                f"report holds {len(self.results)} results, expected {self.total_citations}"
            )
        return self


class RiskScore(BaseModel):
    score: int
    level: RiskLevel
    recommendation: str
