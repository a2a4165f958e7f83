# tests/conftest.py
"""
Root conftest.

Test Tiers (for CI/CD optimization):
=====================================
- tier1: Pure logic tests - builder, parsing, matching, settings (no HTTP)
         Run: pytest -m tier1
- tier2: Tests that talk to fake HTTP servers via httpx.MockTransport
         Run: pytest -m "tier1 or tier2"
"""

from __future__ import annotations

TIER2_PATTERNS = [
    "test_broker_client",
    "test_resolver",
    "test_http_engine",
    "test_verify_end_to_end",
    "test_cli",
]


def pytest_collection_modifyitems(items):
    """Add tier markers to tests based on the module they live in."""
    import pytest

    for item in items:
        module = item.module.__name__.rsplit(".", 1)[-1]
        if any(module.startswith(pattern) for pattern in TIER2_PATTERNS):
            item.add_marker(pytest.mark.tier2)
        else:
            item.add_marker(pytest.mark.tier1)
