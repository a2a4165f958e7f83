# pactverify/engine/__init__.py
"""Verification engines: replay recorded interactions against a live provider."""

from .base import VerificationEngine
from .http_engine import HttpVerificationEngine, build_request, select_interactions
from .matching import compare_body, compare_response

__all__ = [
    "VerificationEngine",
    "HttpVerificationEngine",
    "build_request",
    "select_interactions",
    "compare_body",
    "compare_response",
]
