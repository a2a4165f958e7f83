# pactverify/contracts/resolver.py
"""
Contract source resolution.

Turns the ``ContractSource`` recorded by the builder into parsed pacts. This is
where the lazy checks happen: the file must exist now, the URI or broker must
answer now.
"""

from __future__ import annotations

from typing import List, Optional

import httpx

from pactverify import logging_tags
from pactverify.broker.client import PactBrokerClient
from pactverify.contracts.pact import Pact, parse_pact_text
from pactverify.core.exceptions import (
    ContractFetchError,
    ContractFormatError,
    ContractSourceError,
    PactFileNotFoundError,
)
from pactverify.core.http import http_client, translate_http_error
from pactverify.core.sources import BrokerSource, ContractSource, FileSource, UriSource
from pactverify.logging import get_logger

logger = get_logger(__name__)


def resolve_contracts(
    source: ContractSource,
    consumer: str,
    provider: str,
    transport: Optional[httpx.BaseTransport] = None,
    timeout: Optional[float] = None,
) -> List[Pact]:
    """
    Load the pact(s) a source points at and check they belong to this pair.

    Args:
        source: Contract source recorded by the builder
        consumer: Configured consumer name
        provider: Configured provider name
        transport: Optional httpx transport (tests)
        timeout: Optional request timeout in seconds

    Returns:
        One pact for file and URI sources, one or more for broker sources.

    Raises:
        PactFileNotFoundError: File source does not exist.
        ContractFetchError: URI source could not be downloaded.
        BrokerUnavailableError / ContractNotFoundError: Broker source failures.
        ContractFormatError: Document is malformed or names another pair.
    """
    if isinstance(source, FileSource):
        pacts = [_load_file(source)]
    elif isinstance(source, UriSource):
        pacts = [_load_uri(source, transport, timeout)]
    elif isinstance(source, BrokerSource):
        with PactBrokerClient(
            source.base_uri,
            auth=source.options.auth,
            timeout=timeout,
            transport=transport,
        ) as broker:
            pacts = broker.fetch_pacts(provider, consumer, source.options.consumer_version_tags)
    else:
        raise TypeError(f"Unsupported contract source: {source!r}")

    for pact in pacts:
        _check_participants(pact, consumer, provider, source.describe())

    logger.debug(
        f"{logging_tags.RESOLVER} Resolved {sum(len(p.interactions) for p in pacts)} "
        f"interaction(s) from {source.kind} {source.describe()}"
    )
    return pacts


def _load_file(source: FileSource) -> Pact:
    path = source.path
    if not path.is_file():
        raise PactFileNotFoundError(str(path))

    logger.info(f"{logging_tags.RESOLVER} Reading pact file {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise PactFileNotFoundError(str(path)) from exc
    except UnicodeDecodeError as exc:
        raise ContractFormatError(f"{path} is not UTF-8 encoded: {exc}") from exc
    except OSError as exc:
        raise ContractSourceError(f"Could not read pact file {path}: {exc}") from exc
    return parse_pact_text(text, str(path))


def _load_uri(
    source: UriSource,
    transport: Optional[httpx.BaseTransport],
    timeout: Optional[float],
) -> Pact:
    logger.info(f"{logging_tags.RESOLVER} Downloading pact from {source.uri}")
    with http_client(
        auth=source.auth,
        timeout=timeout,
        headers={"Accept": "application/json"},
        transport=transport,
    ) as client:
        try:
            response = client.get(source.uri)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise translate_http_error(exc, ContractFetchError, source.uri) from exc

    return parse_pact_text(response.text, source.uri)


def _check_participants(pact: Pact, consumer: str, provider: str, origin: str) -> None:
    if pact.consumer != consumer or pact.provider != provider:
        raise ContractFormatError(
            f"{origin} is a pact between {pact.consumer} and {pact.provider}, "
            f"expected {consumer} and {provider}"
        )
