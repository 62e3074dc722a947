"""Unit tests for observability logging."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator

import pytest
import structlog
from structlog.testing import capture_logs

from hashed_password.kernel.security import DEFAULT_SENSITIVE_FIELDS
from hashed_password.observability.logging import (
    JsonLoggerFactory,
    SensitiveFieldsFilter,
    get_logger,
)
from hashed_password.security.passwords import PasswordHashService


class TestSensitiveFieldsFilter:
    def test_redacts_password(self) -> None:
        out = SensitiveFieldsFilter().redact_deep({"password": "hunter2", "user": "bob"})
        assert out == {"password": "[REDACTED]", "user": "bob"}

    def test_case_insensitive(self) -> None:
        out = SensitiveFieldsFilter().redact_deep({"Password": "x"})
        assert out["Password"] == "[REDACTED]"

    def test_nested_dicts(self) -> None:
        out = SensitiveFieldsFilter().redact_deep({"form": {"candidate": "x", "remember": True}})
        assert out == {"form": {"candidate": "[REDACTED]", "remember": True}}

    def test_custom_fields(self) -> None:
        f = SensitiveFieldsFilter(frozenset({"PIN"}))
        assert f.redact_deep({"pin": "1234", "password": "p"}) == {"pin": "[REDACTED]", "password": "p"}

    def test_defaults_cover_hash_inputs(self) -> None:
        assert {"password", "candidate", "plaintext", "stored"} <= DEFAULT_SENSITIVE_FIELDS

    def test_is_structlog_processor(self) -> None:
        event = SensitiveFieldsFilter()(None, "info", {"event": "login", "password": "p"})
        assert event == {"event": "login", "password": "[REDACTED]"}


@pytest.fixture()
def restore_logging() -> Iterator[None]:
    root = logging.getLogger()
    level = root.level
    yield
    structlog.reset_defaults()
    for handler in list(root.handlers):
        if isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter):
            root.removeHandler(handler)
    root.setLevel(level)


class TestJsonLoggerFactory:
    def test_emits_json_with_redaction(self, capsys: pytest.CaptureFixture[str], restore_logging: None) -> None:
        JsonLoggerFactory.configure(level=logging.DEBUG)
        get_logger("tests.auth").info("login.attempt", user="bob", password="hunter2")
        line = capsys.readouterr().err.strip().splitlines()[-1]
        record = json.loads(line)
        assert record["event"] == "login.attempt"
        assert record["password"] == "[REDACTED]"
        assert record["user"] == "bob"
        assert record["level"] == "info"

    def test_get_logger_binds_values(self) -> None:
        with capture_logs() as logs:
            get_logger("tests", component="auth").info("ping")
        assert logs == [{"component": "auth", "event": "ping", "log_level": "info"}]


class TestHasherLogging:
    def test_hash_logs_scheme_never_plaintext(self, hasher: PasswordHashService) -> None:
        with capture_logs() as logs:
            stored = hasher.hash("s3cr3t!")
        assert {"event": "password.hashed", "scheme": hasher.choice.name, "log_level": "debug"} in logs
        assert "s3cr3t!" not in repr(logs)
        assert stored not in repr(logs)

    def test_already_hashed_logged(self, hasher: PasswordHashService) -> None:
        stored = hasher.hash("s3cr3t!")
        with capture_logs() as logs:
            hasher.hash(stored)
        assert logs[0]["event"] == "password.already_hashed"

    def test_malformed_logged_as_warning(self, hasher: PasswordHashService) -> None:
        from hashed_password.kernel.errors import MalformedHashError

        with capture_logs() as logs, pytest.raises(MalformedHashError):
            hasher.verify("pw", "not-a-valid-hash")
        assert logs[0]["event"] == "password.malformed_hash"
        assert logs[0]["log_level"] == "warning"
