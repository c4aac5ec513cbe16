from __future__ import annotations

import logging
import threading
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import Depends, FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from citecheck_core.citeextract import extract_case_citations
from citecheck_core.ingest import SUPPORTED_EXTENSIONS, DocumentError, extract_text
from citecheck_core.report import calculate_risk_score, generate_report
from citecheck_core.types import Citation, RiskScore, VerificationReport
from citecheck_core.verify import VerificationEngine

from citecheck_api.services import build_verification_engine
from citecheck_api.settings import settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(level=settings.log_level.upper())
    yield


app = FastAPI(title="CiteCheck API", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_engine: VerificationEngine | None = None
_engine_lock = threading.Lock()


def get_engine() -> VerificationEngine:
    # One engine per process so every request shares the same rate limiter.
    global _engine
    if _engine is None:
        with _engine_lock:
            if _engine is None:
                _engine = build_verification_engine()
    return _engine


class ExtractRequest(BaseModel):
    text: str


class VerifyTextRequest(BaseModel):
    text: str
    document_name: str = "pasted-text"


class VerifyResponse(BaseModel):
    report: VerificationReport
    risk: RiskScore
    message: str | None = None


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/v1/extract", response_model=list[Citation])
def extract(payload: ExtractRequest) -> list[Citation]:
    return extract_case_citations(payload.text)


def _verify_document(
    document_name: str, text: str, engine: VerificationEngine
) -> VerifyResponse:
    citations = extract_case_citations(text)
    if not citations:
        report = generate_report(document_name, [])
        return VerifyResponse(
            report=report,
            risk=calculate_risk_score(report),
            message="No legal citations found in document.",
        )

    results = engine.verify_all(citations)
    report = generate_report(document_name, results)
    logger.info(
        "Verified %s: %d citation(s), %d not found",
        document_name,
        report.total_citations,
        report.not_found,
    )
    return VerifyResponse(report=report, risk=calculate_risk_score(report))


@app.post("/v1/verify/text", response_model=VerifyResponse)
def verify_text(
    payload: VerifyTextRequest,
    engine: VerificationEngine = Depends(get_engine),
) -> VerifyResponse:
    if not payload.text.strip():
        raise HTTPException(status_code=400, detail="text is required")
    return _verify_document(payload.document_name, payload.text, engine)


@app.post("/v1/verify", response_model=VerifyResponse)
def verify_upload(
    file: UploadFile = File(...),
    engine: VerificationEngine = Depends(get_engine),
) -> VerifyResponse:
    if not file.filename:
        raise HTTPException(status_code=400, detail="No file provided")

    if Path(file.filename).suffix.lower() not in SUPPORTED_EXTENSIONS:
        raise HTTPException(
            status_code=400,
            detail="Invalid file type. Supported: PDF, DOCX, TXT, MD",
        )

    data = file.file.read(settings.max_upload_bytes + 1)
    if len(data) > settings.max_upload_bytes:
        limit_mb = settings.max_upload_bytes // (1024 * 1024)
        raise HTTPException(
            status_code=400, detail=f"File too large. Maximum size is {limit_mb}MB."
        )

    try:
        text = extract_text(data, file.filename)
    except DocumentError as exc:
        logger.warning("Text extraction failed for %s: %s", file.filename, exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    if not text.strip():
        raise HTTPException(
            status_code=400,
            detail="Document appears to be empty or could not be read.",
        )

    return _verify_document(file.filename, text, engine)
