# pactverify/core/validation.py
"""
Syntactic validation for values supplied to builder stages.

Only checks that need no I/O live here. Existence and reachability checks
(file exists, broker answers, provider answers) belong to verify().
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

import httpx

from pactverify.core.exceptions import InvalidConfigurationError

ALLOWED_SCHEMES = ("http", "https")


def require_name(value: object, field: str) -> str:
    """
    Return a stripped, non-empty identity string.

    Raises:
        InvalidConfigurationError: If the value is not a string or is blank.
    """
    if not isinstance(value, str):
        raise InvalidConfigurationError(f"{field} must be a string, got {type(value).__name__}")

    stripped = value.strip()
    if not stripped:
        raise InvalidConfigurationError(f"{field} must not be empty")

    return stripped


def require_absolute_uri(value: object, field: str) -> str:
    """
    Return a normalised absolute http(s) URI.

    Examples:
        >>> require_absolute_uri("http://localhost:5000", "base_uri")
        'http://localhost:5000'
        >>> require_absolute_uri("/relative", "base_uri")
        Traceback (most recent call last):
        ...
        InvalidConfigurationError: base_uri must be an absolute http(s) URI, got '/relative'

    Raises:
        InvalidConfigurationError: If the URI is empty, relative or malformed.
    """
    text = require_name(value, field)

    try:
        url = httpx.URL(text)
    except (httpx.InvalidURL, TypeError) as exc:
        raise InvalidConfigurationError(f"{field} is not a valid URI: {text!r}") from exc

    if url.scheme not in ALLOWED_SCHEMES or not url.host:
        raise InvalidConfigurationError(
            f"{field} must be an absolute http(s) URI, got {text!r}"
        )

    return text.rstrip("/") if url.path in ("", "/") else text


def require_path(value: Union[str, Path], field: str) -> Path:
    """Return a Path for a non-empty path value. The file need not exist yet."""
    if isinstance(value, Path):
        if not str(value).strip() or str(value) == ".":
            raise InvalidConfigurationError(f"{field} must not be empty")
        return value

    return Path(require_name(value, field))
