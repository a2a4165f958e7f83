# pactverify/contracts/pact.py
"""
Pact document model.

Parses the subset of the Pact JSON format (specification 1.1 to 3.0) that a
provider verifier needs: participants, interactions, their provider states,
the expected request and the expected response. Matching rules and generators
are not interpreted.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple
from urllib.parse import parse_qs

from pactverify.core.exceptions import ContractFormatError


class _NoBody:
    """Marks a pact that does not specify a body, as opposed to a JSON null body."""

    def __repr__(self) -> str:
        return "NO_BODY"


NO_BODY: Any = _NoBody()


@dataclass(frozen=True)
class ProviderState:
    name: str
    params: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ExpectedRequest:
    method: str
    path: str
    query: Dict[str, List[str]] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    body: Any = NO_BODY


@dataclass(frozen=True)
class ExpectedResponse:
    status: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: Any = NO_BODY


@dataclass(frozen=True)
class Interaction:
    description: str
    request: ExpectedRequest
    response: ExpectedResponse
    provider_states: Tuple[ProviderState, ...] = ()

    @property
    def state_names(self) -> Tuple[str, ...]:
        return tuple(state.name for state in self.provider_states)


@dataclass(frozen=True)
class Pact:
    """A parsed pact between one consumer and one provider."""

    consumer: str
    provider: str
    interactions: Tuple[Interaction, ...]
    specification_version: str = "2.0.0"
    links: Dict[str, Any] = field(default_factory=dict)

    def link(self, relation: str) -> Optional[str]:
        """Return the href of a broker HAL link, if present."""
        entry = self.links.get(relation)
        if isinstance(entry, Mapping):
            return entry.get("href")
        return None


# =============================================================================
# Parsing
# =============================================================================


def parse_pact_text(text: str, origin: str) -> Pact:
    """Parse pact JSON text. ``origin`` names the source in error messages."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ContractFormatError(f"{origin} is not valid JSON: {exc}") from exc
    return parse_pact(data, origin)


def parse_pact(data: Any, origin: str) -> Pact:
    """
    Build a Pact from decoded JSON.

    Raises:
        ContractFormatError: If required fields are missing or mistyped.
    """
    if not isinstance(data, Mapping):
        raise ContractFormatError(f"{origin}: pact must be a JSON object")

    consumer = _participant(data, "consumer", origin)
    provider = _participant(data, "provider", origin)

    raw_interactions = data.get("interactions", [])
    if not isinstance(raw_interactions, list):
        raise ContractFormatError(f"{origin}: 'interactions' must be a list")

    interactions = tuple(
        _parse_interaction(raw, f"{origin} interaction #{index}")
        for index, raw in enumerate(raw_interactions)
    )

    links = data.get("_links") or {}
    if not isinstance(links, Mapping):
        raise ContractFormatError(f"{origin}: '_links' must be a JSON object")

    return Pact(
        consumer=consumer,
        provider=provider,
        interactions=interactions,
        specification_version=_specification_version(data, origin),
        links=dict(links),
    )


def _participant(data: Mapping[str, Any], key: str, origin: str) -> str:
    entry = data.get(key)
    name = entry.get("name") if isinstance(entry, Mapping) else None
    if not isinstance(name, str) or not name:
        raise ContractFormatError(f"{origin}: missing {key}.name")
    return name


def _specification_version(data: Mapping[str, Any], origin: str) -> str:
    metadata = data.get("metadata") or {}
    if not isinstance(metadata, Mapping):
        raise ContractFormatError(f"{origin}: 'metadata' must be a JSON object")
    for key in ("pactSpecification", "pact-specification"):
        spec = metadata.get(key)
        if isinstance(spec, Mapping) and spec.get("version"):
            return str(spec["version"])
    version = metadata.get("pactSpecificationVersion")
    return str(version) if version else "2.0.0"


def _parse_interaction(raw: Any, origin: str) -> Interaction:
    if not isinstance(raw, Mapping):
        raise ContractFormatError(f"{origin}: must be a JSON object")

    description = raw.get("description")
    if not isinstance(description, str) or not description:
        raise ContractFormatError(f"{origin}: missing description")

    request = raw.get("request")
    response = raw.get("response")
    if not isinstance(request, Mapping) or not isinstance(response, Mapping):
        raise ContractFormatError(f"{description}: request and response are required")

    return Interaction(
        description=description,
        request=_parse_request(request, description),
        response=_parse_response(response, description),
        provider_states=_parse_states(raw, description),
    )


def _parse_states(raw: Mapping[str, Any], description: str) -> Tuple[ProviderState, ...]:
    # v3: providerStates list of {name, params}; v2: providerState string
    states = raw.get("providerStates")
    if isinstance(states, list):
        parsed = []
        for index, entry in enumerate(states):
            name = entry.get("name") if isinstance(entry, Mapping) else None
            if not isinstance(name, str) or not name:
                raise ContractFormatError(f"{description}: providerStates[{index}].name must be a string")
            params = entry.get("params") or {}
            if not isinstance(params, Mapping):
                raise ContractFormatError(f"{description}: providerStates[{index}].params must be a JSON object")
            parsed.append(ProviderState(name=name, params=dict(params)))
        return tuple(parsed)

    state = raw.get("providerState") or raw.get("provider_state")
    if state is None or state == "":
        return ()
    if not isinstance(state, str):
        raise ContractFormatError(f"{description}: providerState must be a string")
    return (ProviderState(name=state),)


def _parse_request(raw: Mapping[str, Any], description: str) -> ExpectedRequest:
    method = raw.get("method")
    if not isinstance(method, str) or not method:
        raise ContractFormatError(f"{description}: request.method is required")

    path = raw.get("path") or "/"
    if not isinstance(path, str):
        raise ContractFormatError(f"{description}: request.path must be a string")

    return ExpectedRequest(
        method=method.upper(),
        path=path,
        query=_parse_query(raw.get("query")),
        headers=_parse_headers(raw.get("headers")),
        body=raw["body"] if "body" in raw else NO_BODY,
    )


def _parse_response(raw: Mapping[str, Any], description: str) -> ExpectedResponse:
    status = raw.get("status", 200)
    if not isinstance(status, int) or isinstance(status, bool):
        raise ContractFormatError(f"{description}: response.status must be an integer")

    return ExpectedResponse(
        status=status,
        headers=_parse_headers(raw.get("headers")),
        body=raw["body"] if "body" in raw else NO_BODY,
    )


def _parse_headers(raw: Any) -> Dict[str, str]:
    if not isinstance(raw, Mapping):
        return {}
    headers = {}
    for name, value in raw.items():
        # v3 allows a list of values per header
        headers[str(name)] = ", ".join(map(str, value)) if isinstance(value, list) else str(value)
    return headers


def _parse_query(raw: Any) -> Dict[str, List[str]]:
    if not raw:
        return {}
    if isinstance(raw, str):
        # v2: raw query string
        return dict(parse_qs(raw, keep_blank_values=True))
    if isinstance(raw, Mapping):
        return {
            str(key): [str(v) for v in value] if isinstance(value, list) else [str(value)]
            for key, value in raw.items()
        }
    return {}
