# pactverify/core/configuration.py
"""Immutable verifier configuration handed from the builder to an engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from pactverify.core.exceptions import InvalidConfigurationError
from pactverify.core.sources import ContractSource
from pactverify.logging import TRACE


class LogLevel(str, Enum):
    """Verbosity of the verification run."""

    TRACE = "trace"
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    NONE = "none"

    @classmethod
    def parse(cls, value: Union["LogLevel", str]) -> "LogLevel":
        """Accept an enum member or its (case-insensitive) name."""
        if isinstance(value, LogLevel):
            return value
        if isinstance(value, str):
            normalised = value.strip().lower()
            if normalised == "warning":
                normalised = "warn"
            for member in cls:
                if member.value == normalised:
                    return member
        raise InvalidConfigurationError(
            f"Unknown log level {value!r}; expected one of {', '.join(m.value for m in cls)}"
        )

    def to_logging_level(self) -> int:
        return _LOGGING_LEVELS[self]


_LOGGING_LEVELS = {
    LogLevel.TRACE: TRACE,
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.NONE: logging.CRITICAL + 10,
}


@dataclass(frozen=True)
class InteractionFilter:
    """
    Narrows the interactions replayed during verification.

    Both fields are exact matches. An empty ``provider_state`` selects the
    interactions that have no provider state at all.
    """

    description: Optional[str] = None
    provider_state: Optional[str] = None

    def __post_init__(self):
        for name in ("description", "provider_state"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise InvalidConfigurationError(
                    f"Filter {name} must be a string, got {type(value).__name__}"
                )
        if self.description is None and self.provider_state is None:
            raise InvalidConfigurationError(
                "A filter needs a description, a provider state, or both"
            )
        if self.description is not None and not self.description.strip():
            raise InvalidConfigurationError("Filter description must not be empty")


@dataclass(frozen=True)
class VerifierConfiguration:
    """
    A structurally complete verifier configuration.

    Instances are produced by ``SourceDefined.configuration`` once the builder
    has collected the provider, consumer and exactly one contract source.
    """

    provider_name: str
    provider_base_uri: str
    consumer_name: str
    contract_source: ContractSource
    provider_state_url: Optional[str] = None
    filter: Optional[InteractionFilter] = None
    log_level: Optional[LogLevel] = None
