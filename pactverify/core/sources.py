# pactverify/core/sources.py
"""
Contract source variants.

A verifier reads its pact from exactly one place. Each place is its own frozen
dataclass, and ``ContractSource`` is the union of them, so a configuration can
hold one source and never two:

    FileSource(path)                  - pact JSON on local disk
    UriSource(uri, auth)              - pact JSON served over HTTP
    BrokerSource(base_uri, options)   - latest pact(s) from a Pact Broker

Credentials follow the same pattern: ``BasicAuth`` or ``BearerAuth``, never both.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Mapping, Optional, Tuple, Union

from pactverify.core.exceptions import InvalidConfigurationError
from pactverify.core.validation import require_name

# =============================================================================
# Credentials
# =============================================================================


@dataclass(frozen=True)
class BasicAuth:
    """HTTP basic credentials."""

    username: str
    password: str

    def __post_init__(self):
        require_name(self.username, "username")
        if not isinstance(self.password, str):
            raise InvalidConfigurationError("password must be a string")

    def __repr__(self) -> str:
        return f"BasicAuth(username={self.username!r}, password='***')"


@dataclass(frozen=True)
class BearerAuth:
    """HTTP bearer token."""

    token: str

    def __post_init__(self):
        require_name(self.token, "token")

    def __repr__(self) -> str:
        return "BearerAuth(token='***')"


AuthOptions = Union[BasicAuth, BearerAuth]


def auth_from_mapping(data: Mapping[str, Any]) -> AuthOptions:
    """
    Build credentials from ``{"basic": (user, pass)}`` or ``{"bearer": token}``.

    Raises:
        InvalidConfigurationError: If neither or both shapes are given.
    """
    keys = set(data) & {"basic", "bearer"}
    unknown = set(data) - {"basic", "bearer"}
    if unknown:
        raise InvalidConfigurationError(f"Unknown auth option(s): {', '.join(sorted(unknown))}")
    if len(keys) != 1:
        raise InvalidConfigurationError("Auth options take exactly one of 'basic' or 'bearer'")

    if "bearer" in data:
        return BearerAuth(data["bearer"])

    basic = data["basic"]
    if isinstance(basic, Mapping):
        return BasicAuth(basic.get("username", ""), basic.get("password", ""))
    if isinstance(basic, str):
        raise InvalidConfigurationError("basic auth must be a (username, password) pair")
    try:
        username, password = basic
    except (TypeError, ValueError) as exc:
        raise InvalidConfigurationError("basic auth must be a (username, password) pair") from exc
    return BasicAuth(username, password)


# =============================================================================
# Broker Options
# =============================================================================


@dataclass(frozen=True)
class BrokerOptions:
    """Options controlling how pacts are selected from (and reported to) a broker."""

    auth: Optional[AuthOptions] = None
    consumer_version_tags: Tuple[str, ...] = ()
    publish_verification_results: bool = False
    provider_version: Optional[str] = None
    provider_version_branch: Optional[str] = None

    def __post_init__(self):
        if self.publish_verification_results and not self.provider_version:
            raise InvalidConfigurationError(
                "provider_version is required when publish_verification_results is enabled"
            )
        for tag in self.consumer_version_tags:
            require_name(tag, "consumer_version_tags entry")

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "BrokerOptions":
        """
        Build options from a plain mapping.

        Recognised keys: auth, consumer_version_tags (or tags),
        publish_verification_results, provider_version, provider_version_branch.

        Raises:
            InvalidConfigurationError: On unknown keys or invalid values.
        """
        if data is None:
            return cls()
        if isinstance(data, BrokerOptions):
            return data

        known = {
            "auth",
            "tags",
            "consumer_version_tags",
            "publish_verification_results",
            "provider_version",
            "provider_version_branch",
        }
        unknown = set(data) - known
        if unknown:
            raise InvalidConfigurationError(
                f"Unknown broker option(s): {', '.join(sorted(unknown))}"
            )

        auth = data.get("auth")
        if isinstance(auth, Mapping):
            auth = auth_from_mapping(auth)
        elif auth is not None and not isinstance(auth, (BasicAuth, BearerAuth)):
            raise InvalidConfigurationError("broker auth must be BasicAuth, BearerAuth or a mapping")

        tags = data.get("consumer_version_tags", data.get("tags", ()))
        if isinstance(tags, str):
            tags = (tags,)

        return cls(
            auth=auth,
            consumer_version_tags=tuple(tags),
            publish_verification_results=bool(data.get("publish_verification_results", False)),
            provider_version=data.get("provider_version"),
            provider_version_branch=data.get("provider_version_branch"),
        )


# =============================================================================
# Sources
# =============================================================================


@dataclass(frozen=True)
class FileSource:
    """Pact file on local disk. Existence is checked when the pact is resolved."""

    path: Path
    kind: Literal["file"] = field(default="file", init=False)

    def describe(self) -> str:
        return str(self.path)


@dataclass(frozen=True)
class UriSource:
    """Pact file served over HTTP."""

    uri: str
    auth: Optional[AuthOptions] = None
    kind: Literal["uri"] = field(default="uri", init=False)

    def describe(self) -> str:
        return self.uri


@dataclass(frozen=True)
class BrokerSource:
    """Pact Broker holding the pacts for a consumer/provider pair."""

    base_uri: str
    options: BrokerOptions = field(default_factory=BrokerOptions)
    kind: Literal["broker"] = field(default="broker", init=False)

    def describe(self) -> str:
        return self.base_uri


ContractSource = Union[FileSource, UriSource, BrokerSource]
