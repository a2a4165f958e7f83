# pactverify/core/http.py
"""
Centralized HTTP client factory for verification traffic.

Every outbound request (provider replay, provider-state setup, pact download,
broker calls) goes through a client created here, so timeouts, credentials and
error translation are configured in one place.

Usage:
    from pactverify.core.http import http_client, translate_http_error

    with http_client("http://localhost:5000", auth=BearerAuth("t")) as client:
        response = client.get("/products/1")

Tests pass an ``httpx.MockTransport`` through ``transport`` to fake servers.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Dict, Generator, Optional, Type

import httpx

from pactverify.core.exceptions import VerifierError
from pactverify.core.sources import AuthOptions, BasicAuth, BearerAuth
from pactverify.logging import get_logger

logger = get_logger(__name__)

# =============================================================================
# Default Configuration
# =============================================================================

DEFAULT_TIMEOUT = 30.0

USER_AGENT = "pactverify"


# =============================================================================
# Client Factory
# =============================================================================


def auth_headers(auth: Optional[AuthOptions]) -> Dict[str, str]:
    """Authorization header for bearer credentials. Basic auth goes through httpx."""
    if isinstance(auth, BearerAuth):
        return {"Authorization": f"Bearer {auth.token}"}
    return {}


def create_client(
    base_url: str = "",
    auth: Optional[AuthOptions] = None,
    timeout: Optional[float] = None,
    headers: Optional[Dict[str, str]] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> httpx.Client:
    """
    Create a configured HTTP client.

    Args:
        base_url: Base URL for relative requests (may be empty)
        auth: Basic or bearer credentials (optional)
        timeout: Request timeout in seconds (default: DEFAULT_TIMEOUT)
        headers: Additional default headers
        transport: Custom transport, e.g. httpx.MockTransport in tests

    Returns:
        Configured httpx.Client instance
    """
    final_headers = {"User-Agent": USER_AGENT}
    final_headers.update(auth_headers(auth))
    if headers:
        final_headers.update(headers)

    basic = httpx.BasicAuth(auth.username, auth.password) if isinstance(auth, BasicAuth) else None

    client = httpx.Client(
        base_url=base_url,
        auth=basic,
        headers=final_headers,
        timeout=timeout if timeout is not None else DEFAULT_TIMEOUT,
        transport=transport,
        follow_redirects=False,
    )

    logger.debug(f"Created HTTP client for {base_url or '<absolute urls>'}")

    return client


@contextmanager
def http_client(base_url: str = "", **kwargs) -> Generator[httpx.Client, None, None]:
    """
    Context manager for an HTTP client with automatic cleanup.

    Usage:
        with http_client("https://broker.example.com", auth=auth) as client:
            response = client.get("/pacts/...")
    """
    client = create_client(base_url, **kwargs)
    try:
        yield client
    finally:
        client.close()


# =============================================================================
# Error Handling
# =============================================================================


def is_connection_failure(exc: Exception) -> bool:
    """True for errors meaning the remote end could not be reached at all."""
    return isinstance(exc, (httpx.ConnectError, httpx.TimeoutException, httpx.NetworkError))


def translate_http_error(
    exc: Exception,
    error_cls: Type[VerifierError],
    target: str,
) -> VerifierError:
    """
    Convert an httpx exception into a verifier error.

    Args:
        exc: The original exception
        error_cls: Verifier error class to raise
        target: Human-readable name of what was being contacted

    Returns:
        An instance of ``error_cls`` describing the failure

    Example:
        try:
            response = client.get(uri)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise translate_http_error(exc, ContractFetchError, uri) from exc
    """
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        detail = exc.response.text[:200] if exc.response.text else ""
        message = f"{target} answered HTTP {status}"
        if detail:
            message = f"{message} - {detail}"
        return error_cls(message)

    if isinstance(exc, httpx.TimeoutException):
        return error_cls(f"{target} timed out")

    if isinstance(exc, httpx.ConnectError):
        return error_cls(f"Failed to connect to {target}: {exc}")

    return error_cls(f"Request to {target} failed: {exc}")
