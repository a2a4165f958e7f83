# pactverify/config/schema.py
"""
Pydantic schema for the verifier settings file.

Example YAML (pactverify.yaml):
    provider:
      name: Event API
      base_url: http://localhost:5000
    consumer:
      name: Event API Consumer
    source:
      type: broker            # file | uri | broker
      url: https://broker.example.com
      auth:
        token: ${PACT_BROKER_TOKEN}
      tags: [main]
      publish_verification_results: true
      provider_version: 1.4.2
    provider_state_url: http://localhost:5000/provider-states
    filter:
      description: a request for all events
    log_level: debug

Only the shape is checked here. Names and URIs are validated by the builder
stages when the settings are turned into a verifier.
"""

from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from pactverify.core.sources import AuthOptions, BasicAuth, BearerAuth


class _Strict(BaseModel):
    model_config = ConfigDict(extra="forbid")


class AuthSettings(_Strict):
    """Either ``token`` (bearer) or ``username`` + ``password`` (basic)."""

    token: Optional[str] = Field(default=None, description="Bearer token")
    username: Optional[str] = Field(default=None, description="Basic auth user")
    password: Optional[str] = Field(default=None, description="Basic auth password")

    @model_validator(mode="after")
    def _one_shape(self) -> "AuthSettings":
        has_basic = self.username is not None or self.password is not None
        if self.token is not None and has_basic:
            raise ValueError("auth takes either token or username/password, not both")
        if self.token is None and not has_basic:
            raise ValueError("auth needs a token or a username/password")
        return self

    def to_auth(self) -> AuthOptions:
        if self.token is not None:
            return BearerAuth(self.token)
        return BasicAuth(self.username or "", self.password or "")


class ProviderSettings(_Strict):
    name: str
    base_url: str


class ConsumerSettings(_Strict):
    name: str


class FileSourceSettings(_Strict):
    type: Literal["file"] = "file"
    path: str


class UriSourceSettings(_Strict):
    type: Literal["uri"] = "uri"
    uri: str
    auth: Optional[AuthSettings] = None


class BrokerSourceSettings(_Strict):
    type: Literal["broker"] = "broker"
    url: str
    auth: Optional[AuthSettings] = None
    tags: List[str] = Field(default_factory=list, description="Consumer version tags")
    publish_verification_results: bool = False
    provider_version: Optional[str] = None
    provider_version_branch: Optional[str] = None


SourceSettings = Annotated[
    Union[FileSourceSettings, UriSourceSettings, BrokerSourceSettings],
    Field(discriminator="type"),
]


class FilterSettings(_Strict):
    description: Optional[str] = None
    provider_state: Optional[str] = None


class VerifierSettings(_Strict):
    """Complete settings for one verification run."""

    provider: ProviderSettings
    consumer: ConsumerSettings
    source: SourceSettings
    provider_state_url: Optional[str] = None
    filter: Optional[FilterSettings] = None
    log_level: Optional[str] = None
    timeout: Optional[float] = Field(default=None, gt=0, description="HTTP timeout in seconds")
