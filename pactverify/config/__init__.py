# pactverify/config/__init__.py
"""Settings file support: YAML → validated settings → builder chain."""

from .loader import build_verifier, deep_merge, load_settings, load_settings_file, merge_source
from .schema import (
    AuthSettings,
    BrokerSourceSettings,
    FileSourceSettings,
    UriSourceSettings,
    VerifierSettings,
)

__all__ = [
    "VerifierSettings",
    "AuthSettings",
    "FileSourceSettings",
    "UriSourceSettings",
    "BrokerSourceSettings",
    "load_settings",
    "load_settings_file",
    "build_verifier",
    "deep_merge",
    "merge_source",
]
