import importlib

import pytest

from cpi_backend import config as config_mod
from cpi_backend import utils


@pytest.fixture
def reload_config(monkeypatch):
    yield lambda: importlib.reload(config_mod)
    monkeypatch.undo()
    importlib.reload(config_mod)


def test_defaults(monkeypatch, reload_config) -> None:
    for name in ("CPI_MAX_UPLOAD_BYTES", "CPI_HOST", "CPI_PORT", "CPI_INCLUDE_CHUNKS", "CPI_DEBUG"):
        monkeypatch.delenv(name, raising=False)
    cfg = reload_config()
    assert cfg.MAX_UPLOAD_BYTES == cfg.DEFAULT_MAX_UPLOAD_BYTES
    assert cfg.SERVER_HOST == "127.0.0.1"
    assert cfg.SERVER_PORT == 8190
    assert cfg.INCLUDE_CHUNKS is True
    assert cfg.DEBUG is False


def test_env_overrides_and_clamping(monkeypatch, reload_config) -> None:
    monkeypatch.setenv("CPI_MAX_UPLOAD_BYTES", "10")
    monkeypatch.setenv("CPI_PORT", "99999")
    monkeypatch.setenv("CPI_HOST", " 0.0.0.0 ")
    monkeypatch.setenv("CPI_INCLUDE_CHUNKS", "off")
    cfg = reload_config()
    assert cfg.MAX_UPLOAD_BYTES == cfg.MIN_UPLOAD_BYTES
    assert cfg.SERVER_PORT == 65535
    assert cfg.SERVER_HOST == "0.0.0.0"
    assert cfg.INCLUDE_CHUNKS is False


def test_invalid_integer_falls_back_to_default(monkeypatch, reload_config) -> None:
    monkeypatch.setenv("CPI_PORT", "not-a-port")
    cfg = reload_config()
    assert cfg.SERVER_PORT == 8190


def test_parse_bool_values() -> None:
    assert utils.parse_bool("yes") is True
    assert utils.parse_bool("disabled", True) is False
    assert utils.parse_bool("0.5") is True
    assert utils.parse_bool("maybe", True) is True
    assert utils.parse_bool(None, False) is False
    assert utils.parse_bool(0) is False
