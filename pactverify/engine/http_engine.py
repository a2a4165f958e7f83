# pactverify/engine/http_engine.py
"""
HTTP verification engine.

Replays every recorded interaction against the running provider and compares
the live response with the recorded one.

Flow:
    resolve pact(s) → apply filter → for each interaction:
        set up provider states → send request → compare response
    → (broker sources) publish verification results

Connection failures abort the run with ProviderUnreachableError. There are no
retries.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Sequence, Tuple

import httpx

from pactverify import logging_tags
from pactverify.broker.client import PactBrokerClient
from pactverify.contracts.pact import NO_BODY, ExpectedRequest, Interaction, Pact
from pactverify.contracts.resolver import resolve_contracts
from pactverify.core.configuration import InteractionFilter, VerifierConfiguration
from pactverify.core.exceptions import BrokerUnavailableError, ProviderUnreachableError
from pactverify.core.http import http_client, translate_http_error
from pactverify.core.outcome import InteractionResult, VerificationOutcome
from pactverify.core.sources import BrokerSource
from pactverify.engine.matching import compare_response
from pactverify.engine.provider_states import setup_provider_states
from pactverify.logging import TRACE, get_logger, scoped_level

logger = get_logger(__name__)


def select_interactions(
    interactions: Sequence[Interaction],
    interaction_filter: Optional[InteractionFilter],
) -> List[Interaction]:
    """
    Apply an interaction filter.

    Description and provider state are exact matches; an empty provider state
    selects interactions without any state.
    """
    if interaction_filter is None:
        return list(interactions)

    selected = []
    for interaction in interactions:
        if (
            interaction_filter.description is not None
            and interaction.description != interaction_filter.description
        ):
            continue

        wanted_state = interaction_filter.provider_state
        if wanted_state is not None:
            if wanted_state == "":
                if interaction.provider_states:
                    continue
            elif wanted_state not in interaction.state_names:
                continue

        selected.append(interaction)
    return selected


def build_request(request: ExpectedRequest) -> Dict[str, Any]:
    """Keyword arguments for ``httpx.Client.request`` reproducing a recorded request."""
    headers = dict(request.headers)
    kwargs: Dict[str, Any] = {
        "method": request.method,
        "url": request.path,
        "headers": headers,
    }
    if request.query:
        kwargs["params"] = request.query

    if request.body is not NO_BODY:
        if isinstance(request.body, str):
            kwargs["content"] = request.body
        else:
            if not any(name.lower() == "content-type" for name in headers):
                headers["Content-Type"] = "application/json"
            kwargs["content"] = json.dumps(request.body)

    return kwargs


class HttpVerificationEngine:
    """
    Default engine: replays interactions over HTTP with httpx.

    Args:
        transport: Optional httpx transport shared by every request the engine
            makes (provider, state URL, pact URI, broker). Tests pass an
            ``httpx.MockTransport`` here.
        timeout: Request timeout in seconds.
    """

    def __init__(
        self,
        transport: Optional[httpx.BaseTransport] = None,
        timeout: Optional[float] = None,
    ):
        self.transport = transport
        self.timeout = timeout

    def run(self, configuration: VerifierConfiguration) -> VerificationOutcome:
        level = configuration.log_level.to_logging_level() if configuration.log_level else None

        with scoped_level(level):
            logger.info(
                f"{logging_tags.ENGINE} Verifying that {configuration.provider_name} honours "
                f"its pact with {configuration.consumer_name}"
            )

            pacts = resolve_contracts(
                configuration.contract_source,
                consumer=configuration.consumer_name,
                provider=configuration.provider_name,
                transport=self.transport,
                timeout=self.timeout,
            )

            per_pact: List[Tuple[Pact, List[InteractionResult]]] = []
            with http_client(
                configuration.provider_base_uri,
                timeout=self.timeout,
                transport=self.transport,
            ) as client:
                for pact in pacts:
                    interactions = select_interactions(pact.interactions, configuration.filter)
                    if configuration.filter is not None:
                        logger.info(
                            f"{logging_tags.ENGINE} Filter selected {len(interactions)} of "
                            f"{len(pact.interactions)} interaction(s)"
                        )
                    results = [
                        self._verify_interaction(client, configuration, interaction)
                        for interaction in interactions
                    ]
                    per_pact.append((pact, results))

            outcome = VerificationOutcome(
                provider=configuration.provider_name,
                consumer=configuration.consumer_name,
                results=tuple(result for _, results in per_pact for result in results),
            )

            source = configuration.contract_source
            if isinstance(source, BrokerSource) and source.options.publish_verification_results:
                self._publish(source, per_pact)

            if outcome.success:
                logger.info(
                    f"{logging_tags.ENGINE} {outcome.interaction_count} interaction(s) verified"
                )
            else:
                logger.warning(
                    f"{logging_tags.ENGINE} {len(outcome.failed_results)} of "
                    f"{outcome.interaction_count} interaction(s) failed"
                )

        return outcome

    def _verify_interaction(
        self,
        client: httpx.Client,
        configuration: VerifierConfiguration,
        interaction: Interaction,
    ) -> InteractionResult:
        state_mismatches = setup_provider_states(
            client,
            configuration.provider_state_url,
            configuration.consumer_name,
            interaction,
        )
        if state_mismatches:
            return InteractionResult(
                description=interaction.description,
                provider_states=interaction.state_names,
                mismatches=tuple(state_mismatches),
            )

        request = build_request(interaction.request)
        logger.log(TRACE, f"{logging_tags.ENGINE} -> {request['method']} {request['url']}")

        try:
            response = client.request(**request)
        except httpx.HTTPError as exc:
            raise translate_http_error(
                exc, ProviderUnreachableError, f"provider {configuration.provider_base_uri}"
            ) from exc

        logger.log(TRACE, f"{logging_tags.ENGINE} <- {response.status_code} {response.text[:500]}")

        mismatches = compare_response(interaction.description, interaction.response, response)
        for mismatch in mismatches:
            logger.debug(f"{logging_tags.MATCHING} {mismatch}")

        return InteractionResult(
            description=interaction.description,
            provider_states=interaction.state_names,
            mismatches=tuple(mismatches),
        )

    def _publish(
        self,
        source: BrokerSource,
        per_pact: Sequence[Tuple[Pact, List[InteractionResult]]],
    ) -> None:
        options = source.options
        with PactBrokerClient(
            source.base_uri,
            auth=options.auth,
            timeout=self.timeout,
            transport=self.transport,
        ) as broker:
            for pact, results in per_pact:
                success = all(result.success for result in results)
                try:
                    broker.publish_verification_result(
                        pact,
                        success,
                        options.provider_version,
                        options.provider_version_branch,
                    )
                except BrokerUnavailableError as exc:
                    logger.warning(f"{logging_tags.BROKER} Could not publish verification result: {exc}")
