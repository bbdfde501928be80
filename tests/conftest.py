"""
Pytest configuration: puts services/ on sys.path so the packages import
from a plain checkout, and keeps formatter env settings out of each test.
"""

import os
import sys

import pytest

_REPO = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, os.path.join(_REPO, "services"))


@pytest.fixture(autouse=True)
def _clean_formatter_env(monkeypatch):
    """Each test starts without pipeline overrides from the environment."""
    monkeypatch.delenv("FORMATTER_PIPELINE_CONFIG", raising=False)
    monkeypatch.delenv("FORMATTER_VALIDATE_OUTPUT", raising=False)
    monkeypatch.delenv("LOG_FILE", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    yield


@pytest.fixture
def access_log_record():
    """Nested gunicorn access-log record as shipped by a containerised service."""
    return {
        "level": 6,
        "container_name": "/test-logging-container",
        "levelname": "info",
        "source_project": "manually-deployed",
        "source_version": "1234",
        "timestamp": 1755230259,
        "service_name": "testing-service",
        "source_service": "testing-service",
        "container_id": "1b5be6c72732",
        "message": {
            "taskName": None,
            "filename": "glogging.py",
            "funcName": "access",
            "levelname": "INFO",
            "lineno": 123,
            "name": "gunicorn.access",
            "message": {
                "remote_ip": "69.12.252.27",
                "method": "GET",
                "path": "/v2/path/thing",
                "status": "200",
                "user_agent": "python-requests/2.32.4",
                "duration_in_ms": 15,
            },
            "source.env": "not-sandbox",
            "source.service": "some-fake-service",
            "source.version": "678869c6",
        },
        "time": "2025-08-15T03:57:39.123456Z",
        "source": "stdout",
        "source_env": "sandbox",
    }
