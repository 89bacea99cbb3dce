"""Tests for log sanitization helpers."""

import logging

import pytest

from promptscan.utils.logger import (
    configure_logging,
    log_debug,
    log_info,
    logger,
    preview,
    safe_json,
    sanitize_text,
)

pytestmark = pytest.mark.unit


class TestSanitizeText:
    def test_masks_email(self):
        assert sanitize_text("contact jane.doe@example.com now") == "contact <email> now"

    def test_masks_api_key(self):
        assert "<api-key>" in sanitize_text("key sk-abcdefghijklmnopqrstuvwx")

    def test_masks_uuid(self):
        text = "prompt 123e4567-e89b-12d3-a456-426614174000 saved"
        assert sanitize_text(text) == "prompt <uuid> saved"

    def test_masks_url(self):
        assert sanitize_text("see https://example.com/a?token=1") == "see <url>"

    def test_plain_text_untouched(self):
        assert sanitize_text("Summarize this article") == "Summarize this article"

    def test_empty(self):
        assert sanitize_text("") == ""


class TestPreview:
    def test_short_text_unchanged(self):
        assert preview("Code review") == "Code review"

    def test_collapses_whitespace(self):
        assert preview("line one\n\n  line two") == "line one line two"

    def test_truncates(self):
        result = preview("word " * 30, limit=12)

        assert result == "word word wo…"

    def test_sanitizes_before_truncating(self):
        assert preview("mail me at jane@example.com please", limit=20) == "mail me at <email> p…"


class TestSafeJson:
    def test_serializes_and_sanitizes(self):
        assert safe_json({"user": "a@b.io"}) == '{"user": "<email>"}'

    def test_truncates(self):
        result = safe_json({"text": "x " * 1000}, max_length=50)

        assert result.endswith("... [truncated]")
        assert len(result) == 50 + len("... [truncated]")

    def test_falls_back_to_str(self):
        assert safe_json({"value": object}) == '{"value": "<class \'object\'>"}'

    def test_unserializable(self):
        circular = []
        circular.append(circular)
        assert safe_json(circular) == "<unable to serialize>"


class TestLogHelpers:
    def test_context_is_appended(self, caplog):
        with caplog.at_level(logging.INFO, logger="promptscan"):
            log_info("Scan finished", groups=2)

        assert "Scan finished | Context: {\"groups\": 2}" in caplog.text

    def test_debug_skipped_when_disabled(self, caplog):
        configure_logging("INFO")
        with caplog.at_level(logging.INFO, logger="promptscan"):
            log_debug("hidden", value=1)

        assert "hidden" not in caplog.text

    def test_configure_logging_sets_level(self):
        original = logger.level
        try:
            configure_logging("warning")
            assert logger.level == logging.WARNING
        finally:
            logger.setLevel(original)
