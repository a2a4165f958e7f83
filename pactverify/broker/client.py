# pactverify/broker/client.py
"""
Pact Broker client.

Only the two broker calls a provider verifier makes are implemented:

    GET  /pacts/provider/{provider}/consumer/{consumer}/latest[/{tag}]
    POST <pb:publish-verification-results link of a fetched pact>
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import quote

import httpx

from pactverify import logging_tags
from pactverify.contracts.pact import Pact, parse_pact
from pactverify.core.exceptions import BrokerUnavailableError, ContractNotFoundError
from pactverify.core.http import create_client, translate_http_error
from pactverify.core.sources import AuthOptions
from pactverify.logging import get_logger

logger = get_logger(__name__)

PUBLISH_RELATION = "pb:publish-verification-results"

HAL_HEADERS = {"Accept": "application/hal+json, application/json"}


class PactBrokerClient:
    """
    Client for a Pact Broker.

    Usage:
        with PactBrokerClient("https://broker.example.com", auth=BearerAuth(token)) as broker:
            pacts = broker.fetch_pacts("Event API", "Event API Consumer", tags=["main"])
    """

    def __init__(
        self,
        base_uri: str,
        auth: Optional[AuthOptions] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_uri = base_uri.rstrip("/")
        self.client = create_client(
            self.base_uri,
            auth=auth,
            timeout=timeout,
            headers=HAL_HEADERS,
            transport=transport,
        )

    def __enter__(self) -> "PactBrokerClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.client.close()

    # -------------------------------------------------------------------------
    # Fetching
    # -------------------------------------------------------------------------

    def latest_pact_path(self, provider: str, consumer: str, tag: Optional[str] = None) -> str:
        path = f"/pacts/provider/{quote(provider, safe='')}/consumer/{quote(consumer, safe='')}/latest"
        if tag:
            path = f"{path}/{quote(tag, safe='')}"
        return path

    def fetch_pacts(self, provider: str, consumer: str, tags: Sequence[str] = ()) -> List[Pact]:
        """
        Fetch the latest pact, or the latest pact for each tag.

        Pacts returned for several tags that point at the same pact version are
        returned once.

        Raises:
            BrokerUnavailableError: Broker unreachable, erroring or refusing credentials.
            ContractNotFoundError: No pact exists for any requested tag.
        """
        pacts: List[Pact] = []
        seen: set = set()

        for tag in tags or (None,):
            pact = self._fetch_latest(provider, consumer, tag)
            if pact is None:
                continue

            key = pact.link("self") or (tag, len(pacts))
            if key in seen:
                logger.debug(f"{logging_tags.BROKER} Skipping duplicate pact {key}")
                continue
            seen.add(key)
            pacts.append(pact)

        if not pacts:
            wanted = f" tagged {', '.join(tags)}" if tags else ""
            raise ContractNotFoundError(
                f"Broker {self.base_uri} has no pact{wanted} between {consumer} and {provider}"
            )

        logger.info(f"{logging_tags.BROKER} Fetched {len(pacts)} pact(s) from {self.base_uri}")
        return pacts

    def _fetch_latest(self, provider: str, consumer: str, tag: Optional[str]) -> Optional[Pact]:
        path = self.latest_pact_path(provider, consumer, tag)
        target = f"pact broker {self.base_uri}"

        try:
            response = self.client.get(path)
        except httpx.HTTPError as exc:
            raise translate_http_error(exc, BrokerUnavailableError, target) from exc

        if response.status_code == 404:
            logger.info(f"{logging_tags.BROKER} No pact at {path}")
            return None

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise translate_http_error(exc, BrokerUnavailableError, target) from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise BrokerUnavailableError(f"{target} returned a non-JSON pact for {path}") from exc

        return parse_pact(data, f"{self.base_uri}{path}")

    # -------------------------------------------------------------------------
    # Publishing
    # -------------------------------------------------------------------------

    def publish_verification_result(
        self,
        pact: Pact,
        success: bool,
        provider_version: str,
        provider_version_branch: Optional[str] = None,
    ) -> bool:
        """
        Publish a verification result for a fetched pact.

        Returns:
            True if the broker accepted the result, False if the pact carries
            no publish link.

        Raises:
            BrokerUnavailableError: The broker rejected or did not receive the result.
        """
        href = pact.link(PUBLISH_RELATION)
        if not href:
            logger.warning(
                f"{logging_tags.BROKER} Pact {pact.consumer} -> {pact.provider} has no "
                f"{PUBLISH_RELATION} link; result not published"
            )
            return False

        payload: Dict[str, Any] = {
            "success": success,
            "providerApplicationVersion": provider_version,
            "verifiedBy": {"implementation": "pactverify"},
        }
        if provider_version_branch:
            payload["providerVersionBranch"] = provider_version_branch

        try:
            response = self.client.post(href, json=payload)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise translate_http_error(exc, BrokerUnavailableError, f"pact broker {self.base_uri}") from exc

        logger.info(
            f"{logging_tags.BROKER} Published {'successful' if success else 'failed'} "
            f"verification of {pact.consumer} -> {pact.provider} as {provider_version}"
        )
        return True
