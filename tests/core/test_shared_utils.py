"""
Tests for cpi_shared: time.py, result.py, errors.py, log.py, version.py.
"""
from __future__ import annotations

import json
import logging
from enum import Enum

from cpi_shared import errors as errors_mod
from cpi_shared import log as log_mod
from cpi_shared import result as result_mod
from cpi_shared import time as time_mod
from cpi_shared import version as version_mod
from cpi_shared.types import ErrorCode


# ─── time.py ───────────────────────────────────────────────────────────────


def test_timer_with_logger(caplog):
    log = logging.getLogger("test_timer")
    with caplog.at_level(logging.DEBUG, logger="test_timer"):
        with time_mod.timer("op", log):
            pass
    assert any("op took" in r.message for r in caplog.records)


def test_timer_without_logger(capsys):
    with time_mod.timer("myop"):
        pass
    captured = capsys.readouterr()
    assert "myop" in captured.out


# ─── result.py ─────────────────────────────────────────────────────────────


class _EC(Enum):
    NOT_FOUND = "NOT_FOUND"


def test_result_err_with_enum_code():
    r = result_mod.Result.Err(_EC.NOT_FOUND, "file missing")
    assert not r.ok
    assert r.code == "NOT_FOUND"
    assert r.error == "file missing"


def test_result_err_with_error_code_keeps_meta():
    r = result_mod.Result.Err(ErrorCode.INVALID_FORMAT, "bad", limit=3)
    assert r.code == "INVALID_FORMAT"
    assert r.meta == {"limit": 3}


def test_result_ok_carries_meta():
    r = result_mod.Result.Ok({"positive_prompt": None}, chunk_count=2)
    assert r.ok and r.code == "OK" and r.error is None
    assert r.meta == {"chunk_count": 2}


# ─── log.py ────────────────────────────────────────────────────────────────


def test_get_logger_does_not_duplicate_correlation_filter() -> None:
    logger = log_mod.get_logger("test_shared_utils_logger")
    logger = log_mod.get_logger("test_shared_utils_logger")
    filters = [f for f in list(logger.filters or []) if isinstance(f, log_mod.CorrelationFilter)]
    assert len(filters) == 1
    assert len(logger.handlers) == 1


def test_get_logger_strips_package_prefix() -> None:
    logger = log_mod.get_logger("cpi_backend.features.pnginfo.chunks")
    assert logger.name == "cpi.features.pnginfo.chunks"


def test_formatter_includes_request_id() -> None:
    record = logging.LogRecord("cpi.x", logging.WARNING, __file__, 1, "hello", None, None)
    token = log_mod.request_id_var.set("rid-1")
    try:
        log_mod.CorrelationFilter().filter(record)
    finally:
        log_mod.request_id_var.reset(token)
    line = log_mod.EmojiFormatter().format(record)
    assert log_mod.PREFIX in line
    assert "[rid-1]" in line
    assert line.endswith("hello")


def test_log_structured_emits_json() -> None:
    captured: list[str] = []

    class _Logger:
        def log(self, level, message):
            captured.append(message)

    log_mod.log_structured(_Logger(), logging.INFO, "done", path="/cpi/pnginfo")  # type: ignore[arg-type]
    payload = json.loads(captured[0])
    assert payload["message"] == "done"
    assert payload["context"] == {"path": "/cpi/pnginfo"}


# ─── errors.py ─────────────────────────────────────────────────────────────


def test_format_error_carries_machine_readable_code() -> None:
    err = errors_mod.FormatError()
    assert isinstance(err, ValueError)
    assert err.code == ErrorCode.INVALID_FORMAT
    assert str(err) == "not a recognized image container"


def test_sanitize_error_message_masks_paths() -> None:
    msg = errors_mod.sanitize_error_message(OSError("cannot open /home/user/secret.png"), "Upload failed")
    assert msg.startswith("Upload failed: ")
    assert "/home/user" not in msg


def test_sanitize_error_message_does_not_mask_mime_type() -> None:
    msg = errors_mod.sanitize_error_message(ValueError("application/json parse failed"), "bad")
    assert "application/json" in msg


def test_sanitize_error_message_fallbacks() -> None:
    assert errors_mod.sanitize_error_message(None, "bad") == "bad"
    assert errors_mod.sanitize_error_message(ValueError(""), "") == "An error occurred"


# ─── version.py ────────────────────────────────────────────────────────────


def test_version_info_reads_pyproject(monkeypatch) -> None:
    monkeypatch.delenv("CPI_CHANNEL", raising=False)
    monkeypatch.delenv("CPI_BRANCH", raising=False)
    info = version_mod.get_version_info()
    assert info["branch"] == "main"
    assert info["version"] != "0.0.0"


def test_version_info_nightly_channel(monkeypatch) -> None:
    monkeypatch.setenv("CPI_CHANNEL", "nightly")
    assert version_mod.get_version_info() == {"version": "nightly", "branch": "nightly"}
