# pactverify/engine/provider_states.py
"""Provider-state setup calls made before an interaction is replayed."""

from __future__ import annotations

from typing import List, Optional

import httpx

from pactverify import logging_tags
from pactverify.contracts.pact import Interaction
from pactverify.core.exceptions import ProviderUnreachableError
from pactverify.core.http import translate_http_error
from pactverify.core.outcome import Mismatch
from pactverify.logging import get_logger

logger = get_logger(__name__)


def state_payload(consumer: str, interaction: Interaction, index: int) -> dict:
    """
    Body POSTed to the provider-state URL for one state.

    Carries both the single-state (``state``/``params``) and the list
    (``states``) shapes so either style of state handler can read it.
    """
    state = interaction.provider_states[index]
    return {
        "consumer": consumer,
        "state": state.name,
        "states": list(interaction.state_names),
        "params": dict(state.params),
        "action": "setup",
    }


def setup_provider_states(
    client: httpx.Client,
    state_url: Optional[str],
    consumer: str,
    interaction: Interaction,
) -> List[Mismatch]:
    """
    Ask the provider to establish each provider state of an interaction.

    Returns:
        A ``provider_state`` mismatch for each state the provider refused.

    Raises:
        ProviderUnreachableError: The state URL could not be contacted.
    """
    if not interaction.provider_states:
        return []

    if not state_url:
        logger.debug(
            f"{logging_tags.STATE} No provider state URL; assuming '{', '.join(interaction.state_names)}' "
            f"is already set up for '{interaction.description}'"
        )
        return []

    mismatches = []
    for index, state in enumerate(interaction.provider_states):
        logger.info(f"{logging_tags.STATE} Setting up '{state.name}' for '{interaction.description}'")
        try:
            response = client.post(state_url, json=state_payload(consumer, interaction, index))
        except httpx.HTTPError as exc:
            raise translate_http_error(exc, ProviderUnreachableError, f"provider state URL {state_url}") from exc

        if response.is_success:
            continue

        mismatches.append(
            Mismatch(
                interaction=interaction.description,
                kind="provider_state",
                path=f"providerStates[{index}]",
                expected=state.name,
                actual=response.status_code,
                message=(
                    f"provider state '{state.name}' could not be set up "
                    f"(HTTP {response.status_code})"
                ),
            )
        )

    return mismatches
