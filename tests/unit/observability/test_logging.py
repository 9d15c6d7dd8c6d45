"""Tests for structured logging."""

import json
import re

import pytest
import structlog

from record_editor.observability.logging import (
    PIIRedactor,
    get_logger,
    setup_logging,
)


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        """JSON format writes one JSON object per event to stderr."""
        setup_logging(level="INFO", format="json", redact_pii=False)
        get_logger("test").info("records_loaded", count=3)

        parsed = json.loads(capsys.readouterr().err.strip())
        assert parsed["event"] == "records_loaded"
        assert parsed["count"] == 3
        assert parsed["level"] == "info"
        assert "timestamp" in parsed

    def test_level_filtering(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging(level="WARNING", format="json")
        logger = get_logger("test")
        logger.info("hidden")
        logger.error("shown")

        lines = capsys.readouterr().err.strip().splitlines()
        assert [json.loads(line)["event"] for line in lines] == ["shown"]

    def test_console_format(self) -> None:
        setup_logging(level="DEBUG", format="console", redact_pii=False)
        get_logger("test").debug("test_message")

    def test_redaction_applied(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging(level="INFO", format="json", redact_pii=True)
        get_logger("test").error("record_create_failed", email="ada@example.com", record_id=4)

        parsed = json.loads(capsys.readouterr().err.strip())
        assert parsed["email"] == "[REDACTED]"
        assert parsed["record_id"] == 4

    def test_redaction_keeps_timestamp(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging(level="INFO", format="json", redact_pii=True)
        get_logger("test").info("records_loaded", count=3)

        timestamp = json.loads(capsys.readouterr().err.strip())["timestamp"]
        assert "[PHONE]" not in timestamp
        assert re.match(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}", timestamp)

    def test_context_binding(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging(level="INFO", format="json", redact_pii=False)
        structlog.contextvars.bind_contextvars(session="abc")
        get_logger("test").info("record_deleted")

        assert json.loads(capsys.readouterr().err.strip())["session"] == "abc"


class TestPIIRedactor:
    """Tests for PII redaction."""

    @pytest.fixture
    def redactor(self) -> PIIRedactor:
        return PIIRedactor()

    @pytest.mark.parametrize("key", ["email", "phone", "balance", "Authorization"])
    def test_redacts_sensitive_keys(self, redactor: PIIRedactor, key: str) -> None:
        result = redactor(None, None, {key: "value", "other": "value"})  # type: ignore
        assert result[key] == "[REDACTED]"
        assert result["other"] == "value"

    def test_redacts_email_pattern_in_string_value(self, redactor: PIIRedactor) -> None:
        result = redactor(None, None, {"error": "duplicate ada@example.com"})  # type: ignore
        assert result["error"] == "duplicate [EMAIL]"

    def test_redacts_phone_pattern_in_string_value(self, redactor: PIIRedactor) -> None:
        result = redactor(None, None, {"error": "phone 555-123-4567 taken"})  # type: ignore
        assert "555-123-4567" not in result["error"]
        assert "[PHONE]" in result["error"]

    @pytest.mark.parametrize(
        "text",
        ["2026-10-19T15:42:46.908090Z", "2026-10-19T15:42:46+00:00", "record 20261019"],
    )
    def test_keeps_dates_and_short_numbers(self, redactor: PIIRedactor, text: str) -> None:
        assert redactor(None, None, {"message": text})["message"] == text  # type: ignore

    @pytest.mark.parametrize("phone", ["5551234567", "+1-555-123-4567", "(555) 123 4567"])
    def test_redacts_phone_formats(self, redactor: PIIRedactor, phone: str) -> None:
        result = redactor(None, None, {"message": f"call {phone}"})  # type: ignore
        assert result["message"] == "call [PHONE]"

    def test_handles_nested_dicts_and_lists(self, redactor: PIIRedactor) -> None:
        event_dict = {
            "details": {"email": "a@b.com", "name": "Ada"},
            "messages": ["contact a@b.com", 3],
        }
        result = redactor(None, None, event_dict)  # type: ignore
        assert result["details"] == {"email": "[REDACTED]", "name": "Ada"}
        assert result["messages"] == ["contact [EMAIL]", 3]

    def test_preserves_non_pii_data(self, redactor: PIIRedactor) -> None:
        event_dict = {"event": "records_loaded", "count": 42, "status_code": None}
        assert redactor(None, None, event_dict) == event_dict  # type: ignore
