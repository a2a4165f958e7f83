# pactverify/core/exceptions.py
"""
Exceptions for contract verification.

Hierarchy:
    VerifierError
    ├── InvalidConfigurationError - Bad value passed to a builder stage (eager)
    ├── ContractSourceError - Contract could not be resolved at verify() (lazy)
    │   ├── PactFileNotFoundError - Local pact file does not exist
    │   ├── ContractFetchError - Remote pact URI could not be fetched
    │   ├── ContractNotFoundError - Broker has no pact for the pair
    │   ├── ContractFormatError - Pact document is malformed
    │   └── BrokerUnavailableError - Broker unreachable or refusing requests
    ├── ProviderUnreachableError - Provider (or its state endpoint) unreachable
    └── VerificationFailedError - Provider did not honour the contract

Construction-time errors are raised by the stage call that introduces the bad
value. Everything that needs the network or the filesystem is raised by
``verify()``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from pactverify.core.outcome import Mismatch, VerificationOutcome


class VerifierError(Exception):
    """
    Base exception for all verifier errors.

    Examples:
        >>> try:
        ...     verifier.verify()
        ... except VerifierError as e:
        ...     print(f"Verification did not pass: {e}")
    """

    pass


class InvalidConfigurationError(VerifierError, ValueError):
    """
    A stage transition received a malformed value.

    Raised for empty identity strings, relative or unparseable URIs, unknown
    broker options and similar problems that are detectable without I/O.
    """

    pass


# =============================================================================
# Contract Source Errors
# =============================================================================


class ContractSourceError(VerifierError):
    """The configured contract source could not be resolved."""

    pass


class PactFileNotFoundError(ContractSourceError, FileNotFoundError):
    """The local pact file does not exist at verification time."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Pact file not found: {path}")


class ContractFetchError(ContractSourceError):
    """A pact URI could not be downloaded."""

    pass


class ContractNotFoundError(ContractSourceError):
    """The broker has no pact between the configured consumer and provider."""

    pass


class ContractFormatError(ContractSourceError):
    """The pact document is not valid JSON or does not have the pact shape."""

    pass


class BrokerUnavailableError(ContractSourceError):
    """The pact broker could not be contacted or refused the request."""

    pass


# =============================================================================
# Verification Errors
# =============================================================================


class ProviderUnreachableError(VerifierError):
    """The provider under test, or its provider-state endpoint, could not be contacted."""

    pass


class VerificationFailedError(VerifierError):
    """
    The provider's live responses did not satisfy the recorded interactions.

    This is an expected outcome, not a programming error. The full outcome is
    attached so callers can report which interactions failed and why.

    Examples:
        >>> try:
        ...     verifier.verify()
        ... except VerificationFailedError as e:
        ...     for mismatch in e.mismatches:
        ...         print(mismatch.interaction, mismatch.message)
    """

    def __init__(self, outcome: "VerificationOutcome"):
        self.outcome = outcome
        failed = len(outcome.failed_results)
        super().__init__(
            f"{outcome.provider} does not honour its pact with {outcome.consumer}: "
            f"{failed} of {outcome.interaction_count} interaction(s) failed"
        )

    @property
    def mismatches(self) -> List["Mismatch"]:
        return self.outcome.mismatches
