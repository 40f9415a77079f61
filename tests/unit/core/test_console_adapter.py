"""Unit tests for ConsoleAdapter (structlog)."""

import json

import pytest
import structlog

from storefront.infrastructure.logging import ConsoleAdapter


@pytest.fixture(autouse=True)
def reset_structlog():
    """Drop the capsys-bound configuration after each test."""
    yield
    structlog.reset_defaults()


@pytest.mark.unit
class TestConsoleAdapter:
    """Test JSON output and bound context."""

    def test_json_output_includes_context(self, capsys):
        logger = ConsoleAdapter(use_json=True)

        logger.info("Token issued", token="abcd1234...")

        line = capsys.readouterr().out.strip().splitlines()[-1]
        record = json.loads(line)
        assert record["event"] == "Token issued"
        assert record["level"] == "info"
        assert record["token"] == "abcd1234..."

    def test_bind_adds_context(self, capsys):
        logger = ConsoleAdapter(use_json=True).bind(token_store="csrf")

        logger.warning("Checkout rejected")

        record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert record["token_store"] == "csrf"

    def test_error_includes_exception_details(self, capsys):
        logger = ConsoleAdapter(use_json=True)

        logger.error("Notifier failed", error=ConnectionError("smtp down"))

        record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert record["error_type"] == "ConnectionError"
        assert record["error_message"] == "smtp down"

    def test_level_filter(self, capsys):
        logger = ConsoleAdapter(use_json=True, level="WARNING")

        logger.info("hidden")

        assert capsys.readouterr().out == ""

    def test_full_token_id_is_masked(self, capsys):
        logger = ConsoleAdapter(use_json=True)

        logger.info("Download rejected", token="f" * 64)

        record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert record["token"] == "ffffffff..."
