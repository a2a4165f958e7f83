# pactverify/core/__init__.py
"""
pactverify core - values shared by the builder, the resolver and the engines.

Public API:
    - VerifierConfiguration: Complete configuration handed to an engine
    - ContractSource: FileSource | UriSource | BrokerSource
    - BasicAuth / BearerAuth: Credentials for remote pacts
    - BrokerOptions: Pact Broker selection and publishing options
    - InteractionFilter / LogLevel: Optional refinements
    - VerificationOutcome / InteractionResult / Mismatch: Results
    - Exceptions: Standard error hierarchy
"""

from .configuration import InteractionFilter, LogLevel, VerifierConfiguration
from .exceptions import (
    BrokerUnavailableError,
    ContractFetchError,
    ContractFormatError,
    ContractNotFoundError,
    ContractSourceError,
    InvalidConfigurationError,
    PactFileNotFoundError,
    ProviderUnreachableError,
    VerificationFailedError,
    VerifierError,
)
from .outcome import InteractionResult, Mismatch, VerificationOutcome
from .sources import (
    AuthOptions,
    BasicAuth,
    BearerAuth,
    BrokerOptions,
    BrokerSource,
    ContractSource,
    FileSource,
    UriSource,
    auth_from_mapping,
)

__all__ = [
    # Configuration
    "VerifierConfiguration",
    "InteractionFilter",
    "LogLevel",
    # Sources
    "ContractSource",
    "FileSource",
    "UriSource",
    "BrokerSource",
    "BrokerOptions",
    "AuthOptions",
    "BasicAuth",
    "BearerAuth",
    "auth_from_mapping",
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
