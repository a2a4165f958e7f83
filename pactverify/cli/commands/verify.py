# pactverify/cli/commands/verify.py
"""
Verify command.

Usage:
    pactverify verify -c pactverify.yaml
    pactverify verify --provider "Event API" --provider-base-url http://localhost:5000 \\
        --consumer "Event API Consumer" --pact-file pacts/consumer-provider.json
    pactverify verify -c pactverify.yaml --broker-url https://broker --tag main --tag prod
    pactverify verify -c pactverify.yaml --publish --provider-version 1.4.2 --tag main

Exit codes:
    0  every interaction verified
    1  the provider does not honour the pact
    2  invalid configuration
    3  pact or provider could not be reached
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import typer

from pactverify import logging_tags
from pactverify.cli.ui import ui
from pactverify.config.loader import build_verifier, load_settings
from pactverify.core.configuration import LogLevel
from pactverify.core.exceptions import (
    ContractSourceError,
    InvalidConfigurationError,
    ProviderUnreachableError,
    VerificationFailedError,
)
from pactverify.logging import configure_logging, get_logger

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG = 2
EXIT_UNREACHABLE = 3


# =============================================================================
# Option → Settings
# =============================================================================


def _auth_override(token: Optional[str], username: Optional[str], password: Optional[str]) -> Optional[dict]:
    if token:
        return {"token": token}
    if username is not None or password is not None:
        return {"username": username or "", "password": password or ""}
    return None


def build_overrides(
    provider: Optional[str] = None,
    provider_base_url: Optional[str] = None,
    consumer: Optional[str] = None,
    pact_file: Optional[Path] = None,
    pact_url: Optional[str] = None,
    broker_url: Optional[str] = None,
    token: Optional[str] = None,
    username: Optional[str] = None,
    password: Optional[str] = None,
    tags: Optional[List[str]] = None,
    publish: bool = False,
    provider_version: Optional[str] = None,
    provider_version_branch: Optional[str] = None,
    provider_states_url: Optional[str] = None,
    filter_description: Optional[str] = None,
    filter_state: Optional[str] = None,
    log_level: Optional[str] = None,
    timeout: Optional[float] = None,
) -> Dict[str, Any]:
    """
    Translate CLI options into a settings override mapping.

    Auth, tag and publishing options without a source option produce a
    partial ``source`` that refines the settings file's source.

    Raises:
        InvalidConfigurationError: If more than one contract source option is given.
    """
    chosen = [name for name, value in (
        ("--pact-file", pact_file),
        ("--pact-url", pact_url),
        ("--broker-url", broker_url),
    ) if value]
    if len(chosen) > 1:
        raise InvalidConfigurationError(f"Choose one contract source, got {' and '.join(chosen)}")

    # Unset options stay None so they never erase values from the settings file
    refinements = {
        "auth": _auth_override(token, username, password),
        "tags": list(tags) if tags else None,
        "publish_verification_results": True if publish else None,
        "provider_version": provider_version,
        "provider_version_branch": provider_version_branch,
    }
    source: Optional[dict] = None
    if pact_file:
        source = {"type": "file", "path": str(pact_file), **refinements}
    elif pact_url:
        source = {"type": "uri", "uri": pact_url, **refinements}
    elif broker_url:
        source = {"type": "broker", "url": broker_url, **refinements}
    elif any(value is not None for value in refinements.values()):
        # Refines the source from the settings file
        source = dict(refinements)
    if source is not None:
        source = {key: value for key, value in source.items() if value is not None}

    filter_override = None
    if filter_description is not None or filter_state is not None:
        filter_override = {"description": filter_description, "provider_state": filter_state}

    return {
        "provider": {"name": provider, "base_url": provider_base_url},
        "consumer": {"name": consumer},
        "source": source,
        "provider_state_url": provider_states_url,
        "filter": filter_override,
        "log_level": log_level,
        "timeout": timeout,
    }


def _strip_empty(data: Dict[str, Any]) -> Dict[str, Any]:
    """Drop nested mappings whose values are all None so they don't create partial sections."""
    cleaned = {}
    for key, value in data.items():
        if isinstance(value, dict):
            if all(item is None for item in value.values()):
                continue
            value = {k: v for k, v in value.items() if v is not None}
        cleaned[key] = value
    return cleaned


# =============================================================================
# Main Command
# =============================================================================


def command(
    config: Optional[Path] = None,
    provider: Optional[str] = None,
    provider_base_url: Optional[str] = None,
    consumer: Optional[str] = None,
    pact_file: Optional[Path] = None,
    pact_url: Optional[str] = None,
    broker_url: Optional[str] = None,
    token: Optional[str] = None,
    username: Optional[str] = None,
    password: Optional[str] = None,
    tags: Optional[List[str]] = None,
    publish: bool = False,
    provider_version: Optional[str] = None,
    provider_version_branch: Optional[str] = None,
    provider_states_url: Optional[str] = None,
    filter_description: Optional[str] = None,
    filter_state: Optional[str] = None,
    log_level: Optional[str] = None,
    timeout: Optional[float] = None,
) -> None:
    """Assemble a verifier from a settings file and/or options, then verify."""
    try:
        overrides = _strip_empty(
            build_overrides(
                provider=provider,
                provider_base_url=provider_base_url,
                consumer=consumer,
                pact_file=pact_file,
                pact_url=pact_url,
                broker_url=broker_url,
                token=token,
                username=username,
                password=password,
                tags=tags,
                publish=publish,
                provider_version=provider_version,
                provider_version_branch=provider_version_branch,
                provider_states_url=provider_states_url,
                filter_description=filter_description,
                filter_state=filter_state,
                log_level=log_level,
                timeout=timeout,
            )
        )
        settings = load_settings(config, overrides)
        verifier = build_verifier(settings)
    except InvalidConfigurationError as e:
        ui.error(str(e))
        raise typer.Exit(EXIT_CONFIG)

    level = verifier.configuration.log_level or LogLevel.WARN
    configure_logging(level.to_logging_level())
    logger.debug(f"{logging_tags.CLI} Verifier assembled from {config or 'options'}")

    configuration = verifier.configuration
    ui.header(
        f"Verifying {configuration.provider_name}",
        f"pact with {configuration.consumer_name} from "
        f"{configuration.contract_source.kind} {configuration.contract_source.describe()}",
    )

    try:
        outcome = verifier.verify()
    except VerificationFailedError as e:
        ui.outcome(e.outcome)
        ui.error(str(e))
        raise typer.Exit(EXIT_FAILED)
    except (ContractSourceError, ProviderUnreachableError) as e:
        ui.error(str(e))
        raise typer.Exit(EXIT_UNREACHABLE)

    ui.outcome(outcome)
    ui.success(f"{outcome.interaction_count} interaction(s) verified")
