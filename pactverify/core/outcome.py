# pactverify/core/outcome.py
"""Verification results: per-interaction mismatches rolled up into an outcome."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Literal, Tuple

MismatchKind = Literal["status", "header", "body", "provider_state"]


@dataclass(frozen=True)
class Mismatch:
    """One difference between what the contract expects and what the provider did."""

    interaction: str
    kind: MismatchKind
    path: str
    expected: Any
    actual: Any
    message: str

    def __str__(self) -> str:
        return f"{self.interaction}: {self.message}"


@dataclass(frozen=True)
class InteractionResult:
    """Result of replaying a single interaction."""

    description: str
    provider_states: Tuple[str, ...] = ()
    mismatches: Tuple[Mismatch, ...] = ()

    @property
    def success(self) -> bool:
        return not self.mismatches


@dataclass(frozen=True)
class VerificationOutcome:
    """
    Result of a full verification run.

    Examples:
        >>> outcome = verifier.verify()
        >>> outcome.success
        True
        >>> outcome.interaction_count
        3
    """

    provider: str
    consumer: str
    results: Tuple[InteractionResult, ...] = field(default_factory=tuple)

    @property
    def success(self) -> bool:
        return all(result.success for result in self.results)

    @property
    def interaction_count(self) -> int:
        return len(self.results)

    @property
    def failed_results(self) -> List[InteractionResult]:
        return [result for result in self.results if not result.success]

    @property
    def mismatches(self) -> List[Mismatch]:
        return [mismatch for result in self.results for mismatch in result.mismatches]
