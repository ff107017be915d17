"""Tests for the command line entry point in mock mode."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from genapi.config import load_settings
from genapi.main import main


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    for key in (
        "GENAPI_MODEL",
        "GENAPI_API_KEY",
        "GENAPI_MAX_OUTPUT_TOKENS",
        "GENAPI_VALIDATE_REQUESTS",
        "GENAPI_LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_settings_defaults(clean_env: Path) -> None:
    settings = load_settings()

    assert settings.model == "gpt-4o-mini"
    assert settings.api_key is None
    assert settings.max_tokens == 2048
    assert settings.validate_requests is False
    assert settings.log_level == "WARNING"


def test_settings_from_env(clean_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GENAPI_MODEL", "claude-3-haiku")
    monkeypatch.setenv("GENAPI_MAX_OUTPUT_TOKENS", "512")
    monkeypatch.setenv("GENAPI_VALIDATE_REQUESTS", "1")
    monkeypatch.setenv("GENAPI_LOG_LEVEL", "debug")

    settings = load_settings()

    assert (settings.model, settings.max_tokens) == ("claude-3-haiku", 512)
    assert settings.validate_requests is True
    assert settings.log_level == "DEBUG"


def test_cli_mock_mode_prints_blank_shape(
    clean_env: Path, hello_world_spec, capsys: pytest.CaptureFixture[str]
) -> None:
    spec_path = clean_env / "spec.yaml"
    spec_path.write_text(yaml.safe_dump(hello_world_spec), encoding="utf-8")
    out_path = clean_env / "out" / "result.json"

    code = main(
        [
            "--spec",
            str(spec_path),
            "--path",
            "/generation-api/hello-world",
            "--data",
            '{"text": "Paul"}',
            "--mode",
            "mock",
            "--out",
            str(out_path),
        ]
    )

    assert code == 0
    assert json.loads(capsys.readouterr().out) == {"text": ""}
    assert json.loads(out_path.read_text(encoding="utf-8")) == {"text": ""}


def test_cli_reads_payload_file(clean_env: Path, hello_world_spec) -> None:
    spec_path = clean_env / "spec.json"
    spec_path.write_text(json.dumps(hello_world_spec), encoding="utf-8")
    payload_path = clean_env / "payload.json"
    payload_path.write_text('{"text": "Paul"}', encoding="utf-8")

    code = main(
        [
            "--spec",
            str(spec_path),
            "--path",
            "/generation-api/hello-world",
            "--data",
            f"@{payload_path}",
            "--mode",
            "mock",
        ]
    )

    assert code == 0


def test_cli_reports_configuration_errors(
    clean_env: Path, hello_world_spec, capsys: pytest.CaptureFixture[str]
) -> None:
    spec_path = clean_env / "spec.yaml"
    spec_path.write_text(yaml.safe_dump(hello_world_spec), encoding="utf-8")

    code = main(["--spec", str(spec_path), "--path", "/nope", "--mode", "mock"])

    assert code == 1
    assert "Path or method not found" in capsys.readouterr().err


def test_cli_rejects_unknown_model(
    clean_env: Path, hello_world_spec, capsys: pytest.CaptureFixture[str]
) -> None:
    spec_path = clean_env / "spec.yaml"
    spec_path.write_text(yaml.safe_dump(hello_world_spec), encoding="utf-8")

    code = main(["--spec", str(spec_path), "--path", "/x", "--model", "llama-3", "--mode", "mock"])

    assert code == 1
    assert "Unsupported model name: llama-3" in capsys.readouterr().err
