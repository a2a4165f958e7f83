# pactverify/contracts/__init__.py
"""
Pact documents and where they come from.

Source resolution lives in ``pactverify.contracts.resolver`` and is imported
from there; it depends on the broker client, which depends on this model.
"""

from .pact import (
    NO_BODY,
    ExpectedRequest,
    ExpectedResponse,
    Interaction,
    Pact,
    ProviderState,
    parse_pact,
    parse_pact_text,
)

__all__ = [
    "NO_BODY",
    "Pact",
    "Interaction",
    "ProviderState",
    "ExpectedRequest",
    "ExpectedResponse",
    "parse_pact",
    "parse_pact_text",
]
