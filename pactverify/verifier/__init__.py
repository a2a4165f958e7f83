# pactverify/verifier/__init__.py
"""Staged builder for provider-side pact verification."""

from .stages import ConsumerDefined, PactVerifier, ProviderDefined, SourceDefined

__all__ = [
    "PactVerifier",
    "ProviderDefined",
    "ConsumerDefined",
    "SourceDefined",
]
