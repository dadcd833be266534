"""
Unit tests for structured logging processors.
"""

import structlog

from shared.logging.logger import (
    _censor_secrets,
    _renderer,
    _service_context,
    _shared_processors,
)


class TestCensorSecrets:
    """Tests for secret redaction."""

    def test_redacts_sensitive_keys(self) -> None:
        event = {"event": "neo4j_driver_created", "password": "hunter2", "uri": "bolt://db:7687"}

        result = _censor_secrets(None, "info", event)  # type: ignore[arg-type]

        assert result["password"] == "***REDACTED***"
        assert result["uri"] == "bolt://db:7687"

    def test_redacts_nested_keys(self) -> None:
        event = {"event": "x", "config": {"auth_token": "abc", "host": "db"}}

        result = _censor_secrets(None, "info", event)  # type: ignore[arg-type]

        assert result["config"] == {"auth_token": "***REDACTED***", "host": "db"}


class TestServiceContext:
    """Tests for service stamping."""

    def test_adds_service_and_version(self) -> None:
        processor = _service_context("graph-gateway", "1.2.3")

        result = processor(None, "info", {"event": "x"})  # type: ignore[arg-type]

        assert result["service"] == "graph-gateway"
        assert result["version"] == "1.2.3"

    def test_keeps_explicit_values(self) -> None:
        processor = _service_context("graph-gateway", "1.2.3")

        result = processor(None, "info", {"event": "x", "service": "other"})  # type: ignore[arg-type]

        assert result["service"] == "other"


class TestProcessorChain:
    """Tests for the chain selection."""

    def test_json_chain(self) -> None:
        processors = _shared_processors("graph-gateway", "0.1.0", json_logs=True)

        assert processors[-1] is structlog.processors.format_exc_info
        assert _censor_secrets in processors
        assert isinstance(_renderer(True), structlog.processors.JSONRenderer)

    def test_console_chain(self) -> None:
        processors = _shared_processors("graph-gateway", "0.1.0", json_logs=False)

        assert processors[-1] is structlog.dev.set_exc_info
        assert isinstance(_renderer(False), structlog.dev.ConsoleRenderer)
