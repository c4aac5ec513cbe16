from __future__ import annotations

import logging
import re
from typing import Any, Callable

import requests
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

from citecheck_core.types import Citation

from .ratelimit import RateLimiter

logger = logging.getLogger(__name__)

COURTLISTENER_BASE_URL = "https://www.courtlistener.com"
COURTLISTENER_SEARCH_PATH = "/api/rest/v3/search/"
USER_AGENT = "citecheck/1.0 (Legal Citation Verification Tool)"


HttpGet = Callable[..., requests.Response]


class CourtListenerError(RuntimeError):
    """Raised when a CourtListener search cannot be completed."""


class CaseRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    absolute_url: str | None = None
    case_name: str = Field(
        default="", validation_alias=AliasChoices("caseName", "case_name")
    )
    citation: list[str] = Field(default_factory=list)
    court: str = ""
    date_filed: str = Field(
        default="", validation_alias=AliasChoices("dateFiled", "date_filed")
    )
    docket_number: str | None = Field(
        default=None, validation_alias=AliasChoices("docketNumber", "docket_number")
    )

    @field_validator("case_name", "court", "date_filed", mode="before")
    @classmethod
    def _null_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("citation", mode="before")
    @classmethod
    def _as_citation_list(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value

    @field_validator("docket_number", mode="before")
    @classmethod
    def _docket_as_text(cls, value: Any) -> Any:
        return None if value is None else str(value)

    @property
    def year_filed(self) -> str:
        return self.date_filed[:4]


class SearchResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    count: int = 0
    results: list[CaseRecord] = Field(default_factory=list)

    @field_validator("count", mode="before")
    @classmethod
    def _null_count(cls, value: Any) -> Any:
        return 0 if value is None else value


def to_absolute_url(value: str | None, base_url: str = COURTLISTENER_BASE_URL) -> str | None:
    if not value:
        return None
    if value.startswith("http://") or value.startswith("https://"):
        return value
    return f"{base_url}{value}"


def citation_query(citation: Citation) -> str:
    return f"{citation.volume} {citation.reporter} {citation.page}"


def simplify_case_name(case_name: str) -> str:
    simplified = re.sub(r"\s+v\.?\s+", " v. ", case_name, count=1, flags=re.IGNORECASE)
    return re.sub(r",.*$", "", simplified).strip()


def build_citation_search_params(citation: Citation) -> dict[str, str]:
    params = {"citation": citation_query(citation)}
    if citation.case_name:
        params["case_name"] = simplify_case_name(citation.case_name)
    params["type"] = "o"
    return params


def build_component_search_params(citation: Citation) -> dict[str, str]:
    return {"q": citation_query(citation), "type": "o"}


class CourtListenerClient:
    def __init__(
        self,
        token: str | None = None,
        *,
        base_url: str = COURTLISTENER_BASE_URL,
        timeout_seconds: float = 10.0,
        rate_limiter: RateLimiter | None = None,
        http_get: HttpGet = requests.get,
    ) -> None:
        self.token = (token or "").strip() or None
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.rate_limiter = rate_limiter if rate_limiter is not None else RateLimiter()
        self._http_get = http_get

    @property
    def headers(self) -> dict[str, str]:
        headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}
        # Anonymous access still works, at a lower rate allowance.
        if self.token:
            headers["Authorization"] = f"Token {self.token}"
        return headers

    def search_by_citation(self, citation: Citation) -> SearchResponse:
        return self._search(build_citation_search_params(citation))

    def search_by_components(self, citation: Citation) -> SearchResponse:
        return self._search(build_component_search_params(citation))

    def case_url(self, record: CaseRecord) -> str | None:
        return to_absolute_url(record.absolute_url, self.base_url)

    def _search(self, params: dict[str, str]) -> SearchResponse:
        self.rate_limiter.wait()
        url = f"{self.base_url}{COURTLISTENER_SEARCH_PATH}"

        try:
            response = self._http_get(
                url, params=params, headers=self.headers, timeout=self.timeout_seconds
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.error("CourtListener request failed: %s", exc)
            raise CourtListenerError(f"CourtListener request failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            logger.error("CourtListener response was not valid JSON: %s", exc)
            raise CourtListenerError("CourtListener response was not valid JSON") from exc

        if not isinstance(payload, dict):
            raise CourtListenerError("CourtListener response was not a JSON object")

        try:
            return SearchResponse.model_validate(payload)
        except ValidationError as exc:
            logger.error("CourtListener response did not match the search schema: %s", exc)
            raise CourtListenerError(
                "CourtListener response did not match the search schema"
            ) from exc
