# pactverify/engine/base.py
"""
VerificationEngine Protocol - what ``SourceDefined.verify()`` hands its configuration to.

The builder only guarantees the configuration is complete and unambiguous.
How interactions are replayed and judged is up to the engine.
"""

from typing import Protocol, runtime_checkable

from pactverify.core.configuration import VerifierConfiguration
from pactverify.core.outcome import VerificationOutcome


@runtime_checkable
class VerificationEngine(Protocol):
    """
    Runs a verification described by a complete configuration.

    Examples:
        >>> engine = HttpVerificationEngine()
        >>> outcome = engine.run(configuration)
        >>> outcome.success
        True
    """

    def run(self, configuration: VerifierConfiguration) -> VerificationOutcome:
        """
        Replay the configured pact against the provider.

        Returns:
            The outcome, successful or not. Mismatches are data, not exceptions.

        Raises:
            ContractSourceError: The pact could not be resolved.
            ProviderUnreachableError: The provider could not be contacted.
        """
        ...
