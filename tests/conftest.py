import json
import logging
import os
from pathlib import Path
import pytest

from shipper.models import Settings

ENDPOINT = "https://api.airbox.test/v1/ingest"

@pytest.fixture(autouse=True)
def _isolate_env(tmp_path, monkeypatch):
    # No SHIPPER_* overrides or .env files from the developer machine
    for key in list(os.environ):
        if key.startswith("SHIPPER_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)

    # configure_logging() detaches the package logger from root; undo that for caplog
    logger = logging.getLogger("shipper")
    saved_handlers = logger.handlers[:]
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    yield
    logger.handlers[:] = saved_handlers

@pytest.fixture()
def inbox(tmp_path) -> Path:
    d = tmp_path / "inbox"
    d.mkdir()
    return d

@pytest.fixture()
def write_json(inbox):
    def _write(name: str, content) -> Path:
        p = inbox / name
        if isinstance(content, (bytes, str)):
            p.write_bytes(content if isinstance(content, bytes) else content.encode("utf-8"))
        else:
            p.write_text(json.dumps(content), encoding="utf-8")
        return p
    return _write

@pytest.fixture()
def make_settings(inbox):
    def _make(**overrides) -> Settings:
        values = {
            "path_pattern": str(inbox / "*.json"),
            "max_files": 5,
            "api_endpoint": ENDPOINT,
            "api_token": "test_token",
            "server_key": "test_server_key",
            "check_interval": "10s",
            "request_timeout": "5s",
        }
        values.update(overrides)
        return Settings.model_validate(values)
    return _make
