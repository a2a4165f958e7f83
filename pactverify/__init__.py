# pactverify/__init__.py
"""
pactverify - Provider-side consumer-driven contract verification.

A staged builder makes invalid verifier configurations impossible to write:
provider first, then consumer, then exactly one contract source, then optional
refinements, then verify.

Quick Start:
    >>> from pactverify import PactVerifier
    >>> outcome = (
    ...     PactVerifier()
    ...     .service_provider("Event API", "http://localhost:5000")
    ...     .honours_pact_with("Event API Consumer")
    ...     .from_contract_file("pacts/event_api_consumer-event_api.json")
    ...     .with_provider_state_url("http://localhost:5000/provider-states")
    ...     .verify()
    ... )
    >>> outcome.success
    True

Architecture:
    pactverify/
    ├── core/         # Configuration values, sources, outcomes, errors, HTTP
    ├── verifier/     # The staged builder
    ├── contracts/    # Pact model and source resolution
    ├── broker/       # Pact Broker client
    ├── engine/       # Interaction replay and response matching
    ├── config/       # YAML settings → builder
    └── cli/          # `pactverify verify`
"""

from pactverify.core import (
    BasicAuth,
    BearerAuth,
    BrokerOptions,
    BrokerSource,
    BrokerUnavailableError,
    ContractFetchError,
    ContractFormatError,
    ContractNotFoundError,
    ContractSourceError,
    FileSource,
    InteractionFilter,
    InteractionResult,
    InvalidConfigurationError,
    LogLevel,
    Mismatch,
    PactFileNotFoundError,
    ProviderUnreachableError,
    UriSource,
    VerificationFailedError,
    VerificationOutcome,
    VerifierConfiguration,
    VerifierError,
)
from pactverify.verifier import ConsumerDefined, PactVerifier, ProviderDefined, SourceDefined

__version__ = "0.3.0"

__all__ = [
    "__version__",
    # Builder
    "PactVerifier",
    "ProviderDefined",
    "ConsumerDefined",
    "SourceDefined",
    # Configuration
    "VerifierConfiguration",
    "FileSource",
    "UriSource",
    "BrokerSource",
    "BrokerOptions",
    "BasicAuth",
    "BearerAuth",
    "InteractionFilter",
    "LogLevel",
    # Results
    "VerificationOutcome",
    "InteractionResult",
    "Mismatch",
    # Exceptions
    "VerifierError",
    "InvalidConfigurationError",
    "ContractSourceError",
    "PactFileNotFoundError",
    "ContractFetchError",
    "ContractNotFoundError",
    "ContractFormatError",
    "BrokerUnavailableError",
    "ProviderUnreachableError",
    "VerificationFailedError",
]
