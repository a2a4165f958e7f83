# pactverify/config/loader.py
"""
Layered settings loading for the verifier.

Merge strategy:
    1. Settings file (pactverify.yaml), if given
    2. Explicit overrides (CLI options) - override the file
       (the source is replaced when its type changes, refined otherwise)

``${VAR}`` references in string values are expanded from the environment, and
``PACT_BROKER_TOKEN`` supplies broker credentials when none are configured.

Usage:
    from pactverify.config.loader import load_settings, build_verifier

    settings = load_settings(Path("pactverify.yaml"))
    outcome = build_verifier(settings).verify()
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

import yaml
from pydantic import ValidationError

from pactverify import logging_tags
from pactverify.config.schema import (
    BrokerSourceSettings,
    FileSourceSettings,
    UriSourceSettings,
    VerifierSettings,
)
from pactverify.core.exceptions import InvalidConfigurationError
from pactverify.logging import get_logger
from pactverify.verifier.stages import PactVerifier, SourceDefined

if TYPE_CHECKING:
    from pactverify.engine.base import VerificationEngine

logger = get_logger(__name__)

BROKER_TOKEN_ENV = "PACT_BROKER_TOKEN"


# =============================================================================
# Deep Merge
# =============================================================================


def deep_merge(base: dict, override: dict) -> dict:
    """
    Deep merge two dictionaries.

    Values from `override` take precedence over `base`. Nested dicts are
    merged recursively, lists are replaced, and ``None`` overrides are ignored
    so unset CLI options do not erase file values.

    Examples:
        >>> deep_merge({"a": 1, "b": {"c": 2, "d": 3}}, {"b": {"c": 10}, "a": None})
        {'a': 1, 'b': {'c': 10, 'd': 3}}
    """
    result = base.copy()

    for key, value in override.items():
        if value is None:
            continue
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


_SOURCE_MODELS = {
    "file": FileSourceSettings,
    "uri": UriSourceSettings,
    "broker": BrokerSourceSettings,
}


def merge_source(base: Any, override: dict) -> dict:
    """
    Apply a source override to the settings file's source.

    An override naming a different ``type`` replaces the source. An override
    of the same type, or one without a ``type``, refines it; ``auth`` is
    replaced as a whole rather than merged.

    Raises:
        InvalidConfigurationError: The override has no source to refine, or
            sets fields the resulting source type does not accept.
    """
    kind = override.get("type")
    if kind is None:
        if not isinstance(base, dict) or not base.get("type"):
            raise InvalidConfigurationError(
                f"{', '.join(sorted(override))} need a contract source: pass --pact-file, "
                "--pact-url or --broker-url, or set source in the settings file"
            )
        kind = base["type"]

    model = _SOURCE_MODELS.get(kind)
    if model is not None:
        unsupported = sorted(set(override) - set(model.model_fields))
        if unsupported:
            raise InvalidConfigurationError(
                f"{', '.join(unsupported)} cannot be used with a {kind} contract source"
            )

    if not isinstance(base, dict) or base.get("type") != kind:
        return dict(override)

    refined = dict(base)
    if "auth" in override:
        refined.pop("auth", None)
    return deep_merge(refined, override)


def expand_env(value: Any) -> Any:
    """Expand ``$VAR`` / ``${VAR}`` in every string of a nested structure."""
    if isinstance(value, str):
        return os.path.expandvars(value)
    if isinstance(value, dict):
        return {key: expand_env(item) for key, item in value.items()}
    if isinstance(value, list):
        return [expand_env(item) for item in value]
    return value


# =============================================================================
# Loading Functions
# =============================================================================


def load_settings_file(path: Path) -> dict[str, Any]:
    """
    Read a YAML settings file.

    Raises:
        InvalidConfigurationError: If the file is missing or not a YAML mapping.
    """
    if not path.is_file():
        raise InvalidConfigurationError(f"Settings file not found: {path}")

    with path.open("r", encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise InvalidConfigurationError(f"{path} is not valid YAML: {exc}") from exc

    if not isinstance(raw, dict):
        raise InvalidConfigurationError(f"{path} must contain a YAML mapping")

    logger.debug(f"{logging_tags.CONFIG} Loaded settings from {path}")
    return raw


def load_settings(
    path: Optional[Path] = None,
    overrides: Optional[dict[str, Any]] = None,
) -> VerifierSettings:
    """
    Load and validate verifier settings.

    Args:
        path: Optional YAML settings file
        overrides: Values that take precedence over the file (e.g. CLI options)

    Returns:
        Validated VerifierSettings

    Raises:
        InvalidConfigurationError: Missing file, bad YAML or schema violations.
    """
    raw = load_settings_file(path) if path is not None else {}
    overrides = dict(overrides or {})

    source_override = overrides.pop("source", None)
    merged = deep_merge(raw, overrides)
    if source_override:
        merged["source"] = merge_source(merged.get("source"), source_override)
    merged = expand_env(merged)

    source = merged.get("source")
    token = os.environ.get(BROKER_TOKEN_ENV)
    if isinstance(source, dict) and source.get("type") == "broker" and token and not source.get("auth"):
        source["auth"] = {"token": token}
        logger.debug(f"{logging_tags.CONFIG} Using broker token from {BROKER_TOKEN_ENV}")

    try:
        return VerifierSettings.model_validate(merged)
    except ValidationError as exc:
        raise InvalidConfigurationError(f"Invalid verifier settings:\n{exc}") from exc


# =============================================================================
# Settings -> Builder
# =============================================================================


def build_verifier(
    settings: VerifierSettings,
    engine: Optional["VerificationEngine"] = None,
) -> SourceDefined:
    """
    Walk the builder stages with the values from a settings object.

    Every value passes the same validation as a hand-written builder chain.
    """
    if engine is None and settings.timeout is not None:
        from pactverify.engine.http_engine import HttpVerificationEngine

        engine = HttpVerificationEngine(timeout=settings.timeout)

    consumer_stage = (
        PactVerifier(engine=engine)
        .service_provider(settings.provider.name, settings.provider.base_url)
        .honours_pact_with(settings.consumer.name)
    )

    source = settings.source
    if isinstance(source, FileSourceSettings):
        verifier = consumer_stage.from_contract_file(source.path)
    elif isinstance(source, UriSourceSettings):
        verifier = consumer_stage.from_contract_uri(
            source.uri,
            auth=source.auth.to_auth() if source.auth else None,
        )
    elif isinstance(source, BrokerSourceSettings):
        verifier = consumer_stage.from_contract_broker(
            source.url,
            {
                "auth": source.auth.to_auth() if source.auth else None,
                "consumer_version_tags": source.tags,
                "publish_verification_results": source.publish_verification_results,
                "provider_version": source.provider_version,
                "provider_version_branch": source.provider_version_branch,
            },
        )
    else:
        raise InvalidConfigurationError(f"Unsupported source settings: {source!r}")

    if settings.provider_state_url:
        verifier = verifier.with_provider_state_url(settings.provider_state_url)
    if settings.filter is not None:
        verifier = verifier.with_filter(settings.filter.description, settings.filter.provider_state)
    if settings.log_level:
        verifier = verifier.with_log_level(settings.log_level)

    return verifier
