from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import patch

import requests

from citecheck_core.verify import CourtListenerClient, RateLimiter, VerificationEngine

from citecheck_api import cli

ROE_RECORD = {
    "caseName": "Roe v. Wade",
    "citation": ["410 U.S. 113"],
    "dateFiled": "1973-01-22",
    "court": "Supreme Court of the United States",
    "absolute_url": "/opinion/108713/roe-v-wade/",
}


class _FakeResponse:
    def __init__(self, payload: dict[str, Any]):
        self._payload = payload

    def raise_for_status(self) -> None:
        return None

    def json(self) -> dict[str, Any]:
        return self._payload


def _engine(payload: dict[str, Any] | None = None, *, fail: bool = False) -> VerificationEngine:
    def fake_get(*args: Any, **kwargs: Any) -> _FakeResponse:
        _ = (args, kwargs)
        if fail:
            raise requests.ConnectionError("offline")
        return _FakeResponse(payload or {"count": 0, "results": []})

    client = CourtListenerClient(
        rate_limiter=RateLimiter(0.5, clock=lambda: 0.0, sleep=lambda _seconds: None),
        http_get=fake_get,
    )
    return VerificationEngine(client)


def _write(tmp_path: Path, text: str, name: str = "brief.txt") -> Path:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_missing_file_exits_with_fatal_code(tmp_path: Path, capsys) -> None:
    code = cli.main([str(tmp_path / "missing.pdf")])

    assert code == cli.EXIT_FATAL
    assert "File not found" in capsys.readouterr().err


def test_unreadable_document_exits_with_fatal_code(tmp_path: Path, capsys) -> None:
    path = tmp_path / "brief.pdf"
    path.write_bytes(b"not really a pdf")

    code = cli.main([str(path)])

    assert code == cli.EXIT_FATAL
    assert "does not look like a PDF" in capsys.readouterr().err


def test_extract_only_json_never_verifies(tmp_path: Path, capsys) -> None:
    path = _write(tmp_path, "Roe v. Wade, 410 U.S. 113 (1973). See 123 F.3d 456.")

    with patch("citecheck_api.cli.build_verification_engine") as build:
        code = cli.main([str(path), "--extract-only", "-f", "json"])

    assert code == cli.EXIT_OK
    build.assert_not_called()
    rows = json.loads(capsys.readouterr().out)
    assert [row["raw"] for row in rows] == ["Roe v. Wade, 410 U.S. 113 (1973)", "123 F.3d 456"]


def test_no_citations_exits_cleanly(tmp_path: Path, capsys) -> None:
    path = _write(tmp_path, "   ")

    code = cli.main([str(path)])

    assert code == cli.EXIT_OK
    assert "No citations found" in capsys.readouterr().err


def test_verified_document_exits_zero_and_writes_output(tmp_path: Path) -> None:
    path = _write(tmp_path, "Roe v. Wade, 410 U.S. 113 (1973).")
    output = tmp_path / "report.md"

    with patch(
        "citecheck_api.cli.build_verification_engine",
        return_value=_engine({"count": 1, "results": [ROE_RECORD]}),
    ):
        code = cli.main([str(path), "-o", str(output), "--format", "markdown"])

    assert code == cli.EXIT_OK
    content = output.read_text(encoding="utf-8")
    assert content.startswith("# Citation Verification Report")
    assert "✅ Roe v. Wade, 410 U.S. 113 (1973)" in content


def test_not_found_citations_exit_with_review_code(tmp_path: Path, capsys) -> None:
    path = _write(tmp_path, "Smith v. Jones, 123 F.3d 456 (1999).")

    with patch("citecheck_api.cli.build_verification_engine", return_value=_engine()):
        code = cli.main([str(path)])

    captured = capsys.readouterr()
    assert code == cli.EXIT_NEEDS_REVIEW
    assert "✗ NOT FOUND" in captured.out
    assert "1 citation(s) need manual review." in captured.err


def test_api_errors_alone_do_not_require_review(tmp_path: Path, capsys) -> None:
    path = _write(tmp_path, "Smith v. Jones, 123 F.3d 456 (1999).")

    with patch("citecheck_api.cli.build_verification_engine", return_value=_engine(fail=True)):
        code = cli.main([str(path), "-f", "json"])

    payload = json.loads(capsys.readouterr().out)
    assert code == cli.EXIT_OK
    assert payload["api_errors"] == 1


def test_unexpected_failure_is_fatal(tmp_path: Path, capsys) -> None:
    path = _write(tmp_path, "Smith v. Jones, 123 F.3d 456 (1999).")

    with patch("citecheck_api.cli.build_verification_engine", side_effect=RuntimeError("boom")):
        code = cli.main([str(path)])

    assert code == cli.EXIT_FATAL
    assert "Fatal error: boom" in capsys.readouterr().err
