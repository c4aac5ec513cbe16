from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from citecheck_api.services import build_verification_engine
from citecheck_api.settings import Settings


def test_settings_loads_values_from_env_file(tmp_path: Path, monkeypatch) -> None:
    env_file = tmp_path / "test.env"
    env_file.write_text(
        "COURTLISTENER_TOKEN=token-from-file\nMIN_REQUEST_INTERVAL_SECONDS=1.5\n",
        encoding="utf-8",
    )

    monkeypatch.delenv("COURTLISTENER_TOKEN", raising=False)
    monkeypatch.delenv("MIN_REQUEST_INTERVAL_SECONDS", raising=False)

    settings = Settings(_env_file=str(env_file))

    assert settings.courtlistener_token == "token-from-file"
    assert settings.min_request_interval_seconds == 1.5


def test_request_spacing_cannot_drop_below_contract(monkeypatch) -> None:
    monkeypatch.setenv("MIN_REQUEST_INTERVAL_SECONDS", "0.1")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_engine_is_wired_from_settings() -> None:
    config = Settings(
        _env_file=None,
        courtlistener_token="abc",
        courtlistener_base_url="https://cl.example/",
        min_request_interval_seconds=2.0,
    )

    engine = build_verification_engine(config)

    assert engine.client.token == "abc"
    assert engine.client.base_url == "https://cl.example"
    assert engine.client.rate_limiter.min_interval == 2.0
    assert engine.client.headers["Authorization"] == "Token abc"
