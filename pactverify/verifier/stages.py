# pactverify/verifier/stages.py
"""
Staged verifier builder.

Each stage is its own frozen type and exposes only the calls that are legal
at that point, so an incomplete or contradictory configuration cannot be
written down:

    PactVerifier ──service_provider──▶ ProviderDefined
    ProviderDefined ──honours_pact_with──▶ ConsumerDefined
    ConsumerDefined ──from_contract_file | from_contract_uri | from_contract_broker──▶ SourceDefined
    SourceDefined ──with_provider_state_url | with_filter | with_log_level──▶ SourceDefined
    SourceDefined ──verify──▶ VerificationOutcome

Transitions return new values and never mutate the receiver. Keeping an
intermediate stage and branching from it twice yields two independent
configurations.

Usage:
    outcome = (
        PactVerifier()
        .service_provider("Event API", "http://localhost:5000")
        .honours_pact_with("Event API Consumer")
        .from_contract_file("pacts/event_api_consumer-event_api.json")
        .with_provider_state_url("http://localhost:5000/provider-states")
        .verify()
    )
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any, Mapping, Optional, Union

from pactverify import logging_tags
from pactverify.core.configuration import InteractionFilter, LogLevel, VerifierConfiguration
from pactverify.core.exceptions import InvalidConfigurationError, VerificationFailedError
from pactverify.core.outcome import VerificationOutcome
from pactverify.core.sources import (
    AuthOptions,
    BasicAuth,
    BearerAuth,
    BrokerOptions,
    BrokerSource,
    ContractSource,
    FileSource,
    UriSource,
)
from pactverify.core.validation import require_absolute_uri, require_name, require_path
from pactverify.logging import get_logger

if TYPE_CHECKING:
    from pactverify.engine.base import VerificationEngine

logger = get_logger(__name__)


# =============================================================================
# Stage 1: Initial
# =============================================================================


@dataclass(frozen=True)
class PactVerifier:
    """
    Entry point of the builder.

    Args:
        engine: Engine that runs the verification. Defaults to
            ``HttpVerificationEngine`` when ``verify()`` is called.
    """

    engine: Optional["VerificationEngine"] = field(default=None, repr=False, compare=False)

    def service_provider(self, provider_name: str, base_uri: str) -> "ProviderDefined":
        """
        Name the provider under test and where it is listening.

        Raises:
            InvalidConfigurationError: If the name is empty or the URI is not absolute.
        """
        return ProviderDefined(
            provider_name=require_name(provider_name, "provider_name"),
            provider_base_uri=require_absolute_uri(base_uri, "base_uri"),
            engine=self.engine,
        )


# =============================================================================
# Stage 2: Provider defined
# =============================================================================


@dataclass(frozen=True)
class ProviderDefined:
    provider_name: str
    provider_base_uri: str
    engine: Optional["VerificationEngine"] = field(default=None, repr=False, compare=False)

    def honours_pact_with(self, consumer_name: str) -> "ConsumerDefined":
        """Name the consumer whose pact the provider must honour."""
        return ConsumerDefined(
            provider_name=self.provider_name,
            provider_base_uri=self.provider_base_uri,
            consumer_name=require_name(consumer_name, "consumer_name"),
            engine=self.engine,
        )


# =============================================================================
# Stage 3: Consumer defined
# =============================================================================


@dataclass(frozen=True)
class ConsumerDefined:
    """
    Choose where the pact comes from. Exactly one source call is possible,
    because each one returns ``SourceDefined``, which has no source calls.
    """

    provider_name: str
    provider_base_uri: str
    consumer_name: str
    engine: Optional["VerificationEngine"] = field(default=None, repr=False, compare=False)

    def from_contract_file(self, path: Union[str, Path]) -> "SourceDefined":
        """
        Read the pact from a local file.

        The file is not opened here; a missing file is reported by ``verify()``
        so that pipelines can produce it after the verifier is assembled.
        """
        return self._with_source(FileSource(require_path(path, "path")))

    def from_contract_uri(self, uri: str, auth: Optional[AuthOptions] = None) -> "SourceDefined":
        """Download the pact from a URI, optionally with basic or bearer credentials."""
        if auth is not None and not isinstance(auth, (BasicAuth, BearerAuth)):
            raise InvalidConfigurationError("auth must be BasicAuth or BearerAuth")
        return self._with_source(UriSource(require_absolute_uri(uri, "uri"), auth))

    def from_contract_broker(
        self,
        broker_base_uri: str,
        options: Optional[Union[BrokerOptions, Mapping[str, Any]]] = None,
    ) -> "SourceDefined":
        """
        Fetch the latest pact(s) for this consumer/provider pair from a Pact Broker.

        Args:
            broker_base_uri: Broker root URI
            options: ``BrokerOptions`` or a mapping of its fields
                (auth, consumer_version_tags, publish_verification_results,
                provider_version, provider_version_branch)
        """
        base_uri = require_absolute_uri(broker_base_uri, "broker_base_uri")
        return self._with_source(BrokerSource(base_uri, BrokerOptions.from_mapping(options)))

    def _with_source(self, source: ContractSource) -> "SourceDefined":
        logger.debug(
            f"{logging_tags.BUILDER} {self.provider_name} <- {self.consumer_name} "
            f"from {source.kind} {source.describe()}"
        )
        return SourceDefined(
            configuration=VerifierConfiguration(
                provider_name=self.provider_name,
                provider_base_uri=self.provider_base_uri,
                consumer_name=self.consumer_name,
                contract_source=source,
            ),
            engine=self.engine,
        )


# =============================================================================
# Stage 4: Source defined (refinements + verify)
# =============================================================================


@dataclass(frozen=True)
class SourceDefined:
    """
    A complete configuration, open to optional refinements.

    Refinements may be called any number of times in any order; the most
    recent call for each refinement wins.
    """

    configuration: VerifierConfiguration
    engine: Optional["VerificationEngine"] = field(default=None, repr=False, compare=False)

    def with_provider_state_url(self, uri: str) -> "SourceDefined":
        """URL the engine POSTs to before each interaction to set up its provider state."""
        return self._refine(provider_state_url=require_absolute_uri(uri, "provider_state_url"))

    def with_filter(
        self,
        description: Optional[str] = None,
        provider_state: Optional[str] = None,
    ) -> "SourceDefined":
        """Only replay interactions matching this description and/or provider state."""
        return self._refine(filter=InteractionFilter(description, provider_state))

    def with_log_level(self, level: Union[LogLevel, str]) -> "SourceDefined":
        return self._refine(log_level=LogLevel.parse(level))

    def verify(self) -> VerificationOutcome:
        """
        Run the verification.

        Returns:
            The outcome when every interaction was honoured.

        Raises:
            VerificationFailedError: One or more interactions did not match.
            ProviderUnreachableError: The provider could not be contacted.
            ContractSourceError: The pact could not be resolved (missing file,
                unreachable broker, ...).
        """
        engine = self.engine
        if engine is None:
            from pactverify.engine.http_engine import HttpVerificationEngine

            engine = HttpVerificationEngine()

        outcome = engine.run(self.configuration)
        if not outcome.success:
            raise VerificationFailedError(outcome)
        return outcome

    def _refine(self, **changes: Any) -> "SourceDefined":
        return replace(self, configuration=replace(self.configuration, **changes))
