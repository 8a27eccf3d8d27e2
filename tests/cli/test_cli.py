"""Tests for the ``imago-mcp`` CLI commands."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from imago_mcp import __version__
from imago_mcp.cli import main

ENV_VARS = ("OPENAI_API_KEY", "GEMINI_API_KEY", "XAI_API_KEY", "UPLOAD_URL", "UPLOAD_EXPIRATION", "UPLOAD_ON_ERROR")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestVersion:
    def test_version(self) -> None:
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestTools:
    def test_json(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GEMINI_API_KEY", "g")
        result = CliRunner().invoke(main, ["tools", "--json"])
        assert result.exit_code == 0

        payload = json.loads(result.output)
        names = [tool["name"] for tool in payload["tools"]]
        assert names == ["generate_image", "list_models", "list_providers"]
        provider = payload["tools"][0]["inputSchema"]["properties"]["provider"]
        assert provider["enum"] == ["gemini"]

    def test_table(self) -> None:
        result = CliRunner().invoke(main, ["tools"])
        assert result.exit_code == 0
        assert "generate_image" in result.output
        assert "list_providers" in result.output


class TestConfig:
    def test_json(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OPENAI_API_KEY", "sk")
        monkeypatch.setenv("UPLOAD_URL", "https://0x0.st")
        monkeypatch.setenv("UPLOAD_EXPIRATION", "12")
        result = CliRunner().invoke(main, ["config", "--json"])
        assert result.exit_code == 0

        payload = json.loads(result.output)
        assert payload["providers"] == ["openai"]
        assert payload["upload"]["url"] == "https://0x0.st"
        assert payload["upload"]["expiration"] == 12
        assert payload["upload"]["on_error"] == "raise"

    def test_upload_disabled(self) -> None:
        result = CliRunner().invoke(main, ["config"])
        assert result.exit_code == 0
        assert "missing" in result.output
        assert "Disabled" in result.output


class TestServe:
    def test_answers_requests_until_eof(self) -> None:
        lines = "\n".join(
            [
                json.dumps({"jsonrpc": "2.0", "id": 1, "method": "ping"}),
                json.dumps({"jsonrpc": "2.0", "method": "notifications/initialized"}),
                json.dumps({"jsonrpc": "2.0", "id": 2, "method": "tools/call", "params": {"name": "list_providers"}}),
            ]
        )
        result = CliRunner().invoke(main, ["serve"], input=lines + "\n")
        assert result.exit_code == 0

        responses = [json.loads(line) for line in result.stdout.splitlines() if line.strip()]
        assert [r["id"] for r in responses] == [1, 2]
        assert responses[0]["result"] == {}
        providers = json.loads(responses[1]["result"]["content"][0]["text"])
        assert providers == {"providers": []}
