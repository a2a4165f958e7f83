# tests/unit/test_verify_end_to_end.py
"""
End-to-end: builder chain → HTTP engine → fake provider.

Mirrors how a provider team would wire the verifier into its test suite.
"""

import pytest

from fakes import CONSUMER, PROVIDER, PROVIDER_BASE_URL, PROVIDER_STATES_URL, FakeProvider
from pactverify import PactVerifier
from pactverify.core.exceptions import PactFileNotFoundError, VerificationFailedError
from pactverify.engine.http_engine import HttpVerificationEngine


def verifier_for(fake: FakeProvider):
    return (
        PactVerifier(engine=HttpVerificationEngine(transport=fake.transport()))
        .service_provider(PROVIDER, PROVIDER_BASE_URL)
        .honours_pact_with(CONSUMER)
    )


def test_provider_honours_pact(pact_file, fake_provider: FakeProvider):
    outcome = (
        verifier_for(fake_provider)
        .from_contract_file(pact_file)
        .with_provider_state_url(PROVIDER_STATES_URL)
        .verify()
    )

    assert outcome.success
    assert outcome.mismatches == []
    assert outcome.interaction_count == 2
    assert len(fake_provider.state_calls) == 2


def test_single_differing_field_fails_with_one_mismatch(pact_file, fake_provider: FakeProvider):
    fake_provider.events[1]["eventType"] = "SearchView"

    with pytest.raises(VerificationFailedError) as excinfo:
        verifier_for(fake_provider).from_contract_file(pact_file).verify()

    (mismatch,) = excinfo.value.mismatches
    assert mismatch.interaction == "a request for all events"
    assert mismatch.path == "$[1].eventType"
    assert mismatch.expected == "DetailsView"
    assert mismatch.actual == "SearchView"
    assert "1 of 2 interaction(s) failed" in str(excinfo.value)


def test_missing_pact_file_fails_only_at_verify(tmp_path, fake_provider: FakeProvider):
    verifier = verifier_for(fake_provider).from_contract_file(tmp_path / "not-yet-written.json")

    with pytest.raises(PactFileNotFoundError):
        verifier.verify()


def test_filtered_run_verifies_one_interaction(pact_file, fake_provider: FakeProvider):
    fake_provider.events = []

    outcome = (
        verifier_for(fake_provider)
        .from_contract_file(pact_file)
        .with_filter(description="a request for an event by id")
        .with_log_level("debug")
        .verify()
    )

    assert [r.description for r in outcome.results] == ["a request for an event by id"]


def test_reusing_a_configured_verifier(pact_file, fake_provider: FakeProvider):
    verifier = verifier_for(fake_provider).from_contract_file(pact_file)

    first = verifier.verify()
    second = verifier.verify()

    assert first == second
