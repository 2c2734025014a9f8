"""
Pytest configuration and shared fixtures.
"""
import json
import os
import tempfile

# Keep test runs from writing into ./logs
os.environ.setdefault("LANGREDIRECT_LOG_DIR", tempfile.mkdtemp(prefix="langredirect-logs-"))
os.environ.setdefault("CI", "true")

import pytest

from langredirect.locales.loader import build_tables


HOST = "www.myexpenses.mobi"


@pytest.fixture
def host():
    return HOST


@pytest.fixture
def tables():
    """Built-in locale tables"""
    return build_tables()


@pytest.fixture
def small_tables():
    """Tiny tables so membership edge cases are easy to read"""
    return build_tables({
        "site": ["en", "de", "zh-tw"],
        "tutorial": ["en", "de"],
        "names": {"en": "My Expenses", "de": "Meine Ausgaben", "zh-tw": "開支助手"},
        "external": {"paypal": "https://pay.example/", "flattr": "https://flattr.example/"},
    })


@pytest.fixture
def locales_json(tmp_path):
    """Write a locales.json and return its path"""
    def _write(payload):
        path = tmp_path / "locales.json"
        if isinstance(payload, str):
            path.write_text(payload, encoding="utf-8")
        else:
            path.write_text(json.dumps(payload), encoding="utf-8")
        return str(path)
    return _write
