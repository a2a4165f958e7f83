# tests/unit/test_broker_client.py
"""Test the Pact Broker client."""

import json

import httpx
import pytest

from fakes import CONSUMER, PROVIDER, FakeProvider, events_pact_document
from pactverify.broker.client import PUBLISH_RELATION, PactBrokerClient
from pactverify.contracts.pact import parse_pact
from pactverify.core.exceptions import BrokerUnavailableError, ContractNotFoundError
from pactverify.core.sources import BearerAuth

BROKER = "https://broker.example.com"
LATEST = f"broker.example.com/pacts/provider/{PROVIDER}/consumer/{CONSUMER}/latest"


def broker_pact(version: str) -> dict:
    document = events_pact_document()
    document["_links"] = {
        "self": {"href": f"{BROKER}/pacts/provider/Event%20API/consumer/Event%20API%20Consumer/version/{version}"},
        PUBLISH_RELATION: {"href": f"{BROKER}/results/{version}"},
    }
    return document


def test_latest_pact_path_quotes_names():
    with PactBrokerClient(BROKER) as broker:
        path = broker.latest_pact_path(PROVIDER, CONSUMER, "feat/x")

    assert path == "/pacts/provider/Event%20API/consumer/Event%20API%20Consumer/latest/feat%2Fx"


def test_fetch_latest_without_tags(fake_provider: FakeProvider):
    fake_provider.route(LATEST, lambda request: httpx.Response(200, json=broker_pact("1.0.0")))

    with PactBrokerClient(BROKER, auth=BearerAuth("t0k3n"), transport=fake_provider.transport()) as broker:
        (pact,) = broker.fetch_pacts(PROVIDER, CONSUMER)

    assert pact.link(PUBLISH_RELATION) == f"{BROKER}/results/1.0.0"
    request = fake_provider.requests[0]
    assert request.headers["Authorization"] == "Bearer t0k3n"
    assert "application/hal+json" in request.headers["Accept"]


def test_fetch_by_tag_deduplicates_same_pact(fake_provider: FakeProvider):
    fake_provider.route(f"{LATEST}/main", lambda request: httpx.Response(200, json=broker_pact("1.0.0")))
    fake_provider.route(f"{LATEST}/prod", lambda request: httpx.Response(200, json=broker_pact("1.0.0")))
    fake_provider.route(f"{LATEST}/next", lambda request: httpx.Response(200, json=broker_pact("1.1.0")))

    with PactBrokerClient(BROKER, transport=fake_provider.transport()) as broker:
        pacts = broker.fetch_pacts(PROVIDER, CONSUMER, ["main", "prod", "next"])

    assert [pact.link("self").rsplit("/", 1)[-1] for pact in pacts] == ["1.0.0", "1.1.0"]


def test_missing_tags_are_skipped(fake_provider: FakeProvider):
    fake_provider.route(f"{LATEST}/main", lambda request: httpx.Response(200, json=broker_pact("1.0.0")))
    fake_provider.route(f"{LATEST}/prod", lambda request: httpx.Response(404))

    with PactBrokerClient(BROKER, transport=fake_provider.transport()) as broker:
        pacts = broker.fetch_pacts(PROVIDER, CONSUMER, ["prod", "main"])

    assert len(pacts) == 1


def test_no_pact_for_any_tag(fake_provider: FakeProvider):
    fake_provider.route(f"{LATEST}/prod", lambda request: httpx.Response(404))

    with PactBrokerClient(BROKER, transport=fake_provider.transport()) as broker:
        with pytest.raises(ContractNotFoundError, match="tagged prod"):
            broker.fetch_pacts(PROVIDER, CONSUMER, ["prod"])


@pytest.mark.parametrize("status", [401, 403, 500, 503])
def test_broker_errors(fake_provider: FakeProvider, status):
    fake_provider.route(LATEST, lambda request: httpx.Response(status, text="nope"))

    with PactBrokerClient(BROKER, transport=fake_provider.transport()) as broker:
        with pytest.raises(BrokerUnavailableError, match=str(status)):
            broker.fetch_pacts(PROVIDER, CONSUMER)


def test_broker_unreachable():
    def refuse(request):
        raise httpx.ConnectError("Connection refused", request=request)

    with PactBrokerClient(BROKER, transport=httpx.MockTransport(refuse)) as broker:
        with pytest.raises(BrokerUnavailableError):
            broker.fetch_pacts(PROVIDER, CONSUMER)


def test_publish_verification_result(fake_provider: FakeProvider):
    received = []

    def accept(request):
        received.append(json.loads(request.content))
        return httpx.Response(201)

    fake_provider.route("broker.example.com/results/1.0.0", accept)
    pact = parse_pact(broker_pact("1.0.0"), "broker")

    with PactBrokerClient(BROKER, transport=fake_provider.transport()) as broker:
        assert broker.publish_verification_result(pact, True, "2.3.4", "main") is True

    assert received == [
        {
            "success": True,
            "providerApplicationVersion": "2.3.4",
            "verifiedBy": {"implementation": "pactverify"},
            "providerVersionBranch": "main",
        }
    ]


def test_publish_without_link_is_skipped(fake_provider: FakeProvider):
    pact = parse_pact(events_pact_document(), "local")

    with PactBrokerClient(BROKER, transport=fake_provider.transport()) as broker:
        assert broker.publish_verification_result(pact, False, "2.3.4") is False

    assert fake_provider.requests == []


def test_publish_rejected(fake_provider: FakeProvider):
    fake_provider.route("broker.example.com/results/1.0.0", lambda request: httpx.Response(400))
    pact = parse_pact(broker_pact("1.0.0"), "broker")

    with PactBrokerClient(BROKER, transport=fake_provider.transport()) as broker:
        with pytest.raises(BrokerUnavailableError):
            broker.publish_verification_result(pact, True, "2.3.4")
