# tests/unit/conftest.py
"""
Test fixtures for unit tests.

Provides pact files on disk and a fake provider reachable through
``httpx.MockTransport``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import pytest

from fakes import FakeProvider, events_pact_document


@pytest.fixture
def pact_document() -> Dict[str, Any]:
    return events_pact_document()


@pytest.fixture
def pact_file(tmp_path: Path, pact_document: Dict[str, Any]) -> Path:
    path = tmp_path / "event_api_consumer-event_api.json"
    path.write_text(json.dumps(pact_document), encoding="utf-8")
    return path


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def write_pact(tmp_path: Path) -> Callable[..., Path]:
    """Write an arbitrary pact document and return its path."""

    def _write(document: Dict[str, Any], name: Optional[str] = None) -> Path:
        path = tmp_path / (name or "pact.json")
        path.write_text(json.dumps(document), encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def _no_broker_token(monkeypatch):
    monkeypatch.delenv("PACT_BROKER_TOKEN", raising=False)
