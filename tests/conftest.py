"""Pytest configuration for tests."""

from pathlib import Path

import orjson
import pytest

from results_cleaner.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Drop cached settings and environment overrides between tests."""
    for name in (
        "RESULTS_CLEANER_LOG_LEVEL",
        "RESULTS_CLEANER_LOG_FORMAT",
        "RESULTS_CLEANER_MAX_INPUT_BYTES",
        "RESULTS_CLEANER_MAX_JSON_DEPTH",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def workspace(tmp_path, monkeypatch) -> Path:
    """Run the test from an empty working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def write_input(workspace):
    def _write(content) -> Path:
        path = workspace / "input.json"
        if isinstance(content, (bytes, str)):
            data = content.encode("utf-8") if isinstance(content, str) else content
        else:
            data = orjson.dumps(content)
        path.write_bytes(data)
        return path

    return _write
