# pactverify/broker/__init__.py
"""Pact Broker integration."""

from .client import PUBLISH_RELATION, PactBrokerClient

__all__ = ["PactBrokerClient", "PUBLISH_RELATION"]
