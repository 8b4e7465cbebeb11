"""Tests for logging_config.py module."""

import io
import logging

import colorlog
import pytest

from rest_token.logging_config import (
    MASK,
    configure_logging,
    debug_requested,
    log_structured_error,
    mask_context,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [("true", True), ("1", True), ("YES", True), ("false", False), ("", False)],
)
def test_debug_requested(value, expected):
    assert debug_requested({"DEBUG": value}) is expected


def test_mask_context_hides_credentials():
    masked = mask_context({"user": "alice", "Password": "pw", "token": "abc"})
    assert masked == {"user": "alice", "Password": MASK, "token": MASK}


def test_log_structured_error_format(caplog):
    caplog.set_level(logging.DEBUG)

    log_structured_error(
        "auth",
        "Token refresh failed",
        exception=ValueError("rejected"),
        context={"user": "alice", "password": "pw"},
        level=logging.WARNING,
    )

    record = caplog.records[-1]
    assert record.levelno == logging.WARNING
    assert record.getMessage() == (
        "[AUTH] Token refresh failed | Exception: ValueError: rejected"
        f" | Context: user=alice, password={MASK}"
    )


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def _restore_root(self):
        root = logging.getLogger()
        level = root.level
        handlers = list(root.handlers)
        yield
        for h in list(root.handlers):
            if h not in handlers:
                root.removeHandler(h)
        root.setLevel(level)

    def test_debug_env_enables_debug(self, monkeypatch):
        monkeypatch.setenv("DEBUG", "true")
        configure_logging(stream=io.StringIO())
        assert logging.getLogger().level == logging.DEBUG

    def test_explicit_level(self, monkeypatch):
        monkeypatch.setenv("DEBUG", "true")
        configure_logging(logging.WARNING, stream=io.StringIO())
        assert logging.getLogger().level == logging.WARNING

    def test_colored_output(self):
        stream = io.StringIO()
        handler = configure_logging(logging.INFO, stream=stream)

        logging.getLogger("rest_token.test").info("token ready")

        assert isinstance(handler.formatter, colorlog.ColoredFormatter)
        assert "token ready" in stream.getvalue()

    def test_repeat_call_replaces_handler(self):
        first = configure_logging(logging.INFO, stream=io.StringIO())
        second = configure_logging(logging.INFO, stream=io.StringIO())

        handlers = logging.getLogger().handlers
        assert second in handlers
        assert first not in handlers
