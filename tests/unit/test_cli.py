# tests/unit/test_cli.py
"""
Tests for the pactverify CLI.

The HTTP engine is swapped for one wired to the fake provider by patching
``build_verifier`` where the verify command imported it.
"""

import json

import httpx
import pytest
import yaml
from typer.testing import CliRunner

from fakes import CONSUMER, PROVIDER, PROVIDER_BASE_URL, PROVIDER_STATES_URL, FakeProvider
from pactverify import __version__
from pactverify.cli import app
from pactverify.cli.commands import verify as verify_command
from pactverify.config.loader import build_verifier
from pactverify.engine.http_engine import HttpVerificationEngine

runner = CliRunner()


@pytest.fixture
def use_fake_provider(monkeypatch, fake_provider: FakeProvider) -> FakeProvider:
    def build_with_fake(settings, engine=None):
        return build_verifier(settings, engine=HttpVerificationEngine(transport=fake_provider.transport()))

    monkeypatch.setattr("pactverify.cli.commands.verify.build_verifier", build_with_fake)
    return fake_provider


def options(*extra: str) -> list:
    return [
        "verify",
        "--provider",
        PROVIDER,
        "--provider-base-url",
        PROVIDER_BASE_URL,
        "--consumer",
        CONSUMER,
        *extra,
    ]


# =============================================================================
# Smoke
# =============================================================================


def test_root_help():
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    assert "verify" in result.stdout


def test_verify_help():
    result = runner.invoke(app, ["verify", "--help"])

    assert result.exit_code == 0
    assert "--pact-file" in result.stdout


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert f"pactverify version {__version__}" in result.stdout


# =============================================================================
# Verify
# =============================================================================


def test_verify_success(use_fake_provider, pact_file):
    result = runner.invoke(
        app, options("--pact-file", str(pact_file), "--provider-states-url", PROVIDER_STATES_URL)
    )

    assert result.exit_code == verify_command.EXIT_OK, result.stdout
    assert "2 interaction(s) verified" in result.stdout
    assert len(use_fake_provider.state_calls) == 2


def test_verify_failure(use_fake_provider, pact_file):
    use_fake_provider.event_45["timestamp"] = "2020-01-01T00:00:00"

    result = runner.invoke(app, options("--pact-file", str(pact_file)))

    assert result.exit_code == verify_command.EXIT_FAILED
    assert "Mismatches" in result.stdout


def test_verify_from_settings_file(use_fake_provider, pact_file, tmp_path):
    settings = tmp_path / "pactverify.yaml"
    settings.write_text(
        yaml.safe_dump(
            {
                "provider": {"name": PROVIDER, "base_url": PROVIDER_BASE_URL},
                "consumer": {"name": CONSUMER},
                "source": {"type": "file", "path": str(pact_file)},
                "filter": {"description": "a request for all events"},
            }
        ),
        encoding="utf-8",
    )

    result = runner.invoke(app, ["verify", "-c", str(settings)])

    assert result.exit_code == verify_command.EXIT_OK, result.stdout
    assert "1 interaction(s) verified" in result.stdout


def test_broker_options_refine_settings_file_source(use_fake_provider, pact_document, tmp_path):
    pact_document["_links"] = {
        "pb:publish-verification-results": {"href": "https://broker.example.com/results/1"}
    }
    use_fake_provider.route(
        f"broker.example.com/pacts/provider/{PROVIDER}/consumer/{CONSUMER}/latest/main",
        lambda request: httpx.Response(200, json=pact_document),
    )
    published = []

    def record(request):
        published.append(json.loads(request.content))
        return httpx.Response(201)

    use_fake_provider.route("broker.example.com/results/1", record)

    settings = tmp_path / "pactverify.yaml"
    settings.write_text(
        yaml.safe_dump(
            {
                "provider": {"name": PROVIDER, "base_url": PROVIDER_BASE_URL},
                "consumer": {"name": CONSUMER},
                "source": {"type": "broker", "url": "https://broker.example.com"},
            }
        ),
        encoding="utf-8",
    )

    result = runner.invoke(
        app,
        [
            "verify",
            "-c",
            str(settings),
            "--publish",
            "--provider-version",
            "1.2.3",
            "--tag",
            "main",
            "--broker-token",
            "tok",
        ],
    )

    assert result.exit_code == verify_command.EXIT_OK, result.stdout
    broker_request = next(r for r in use_fake_provider.requests if r.url.host == "broker.example.com")
    assert broker_request.headers["Authorization"] == "Bearer tok"
    assert published == [
        {
            "success": True,
            "providerApplicationVersion": "1.2.3",
            "verifiedBy": {"implementation": "pactverify"},
        }
    ]


def test_source_options_without_a_source_are_a_config_error():
    result = runner.invoke(app, options("--tag", "main"))

    assert result.exit_code == verify_command.EXIT_CONFIG
    assert "need a contract source" in result.stdout


def test_broker_options_with_a_pact_file_are_a_config_error(pact_file):
    result = runner.invoke(app, options("--pact-file", str(pact_file), "--tag", "main"))

    assert result.exit_code == verify_command.EXIT_CONFIG
    assert "tags cannot be used with a file contract source" in result.stdout


def test_missing_pact_file_is_unreachable(use_fake_provider, tmp_path):
    result = runner.invoke(app, options("--pact-file", str(tmp_path / "missing.json")))

    assert result.exit_code == verify_command.EXIT_UNREACHABLE


def test_unreachable_provider(use_fake_provider, pact_file):
    use_fake_provider.unreachable = True

    result = runner.invoke(app, options("--pact-file", str(pact_file)))

    assert result.exit_code == verify_command.EXIT_UNREACHABLE


def test_two_sources_is_a_config_error(pact_file):
    result = runner.invoke(
        app, options("--pact-file", str(pact_file), "--pact-url", "https://pacts.example.com/p.json")
    )

    assert result.exit_code == verify_command.EXIT_CONFIG
    assert "Choose one contract source" in result.stdout


def test_missing_provider_is_a_config_error(pact_file):
    result = runner.invoke(app, ["verify", "--consumer", CONSUMER, "--pact-file", str(pact_file)])

    assert result.exit_code == verify_command.EXIT_CONFIG


def test_invalid_log_level_is_a_config_error(pact_file):
    result = runner.invoke(app, options("--pact-file", str(pact_file), "--log-level", "loud"))

    assert result.exit_code == verify_command.EXIT_CONFIG


# =============================================================================
# Option translation
# =============================================================================


def test_build_overrides_for_broker():
    overrides = verify_command.build_overrides(
        broker_url="https://broker.example.com",
        token="t0k3n",
        tags=["main"],
        publish=True,
        provider_version="1.4.2",
    )

    assert overrides["source"] == {
        "type": "broker",
        "url": "https://broker.example.com",
        "auth": {"token": "t0k3n"},
        "tags": ["main"],
        "publish_verification_results": True,
        "provider_version": "1.4.2",
    }


def test_build_overrides_without_source_option_refines_file_source():
    overrides = verify_command.build_overrides(tags=["main"], publish=True, provider_version="1.2.3")

    assert overrides["source"] == {
        "tags": ["main"],
        "publish_verification_results": True,
        "provider_version": "1.2.3",
    }


def test_unset_flags_do_not_reach_the_source():
    assert verify_command.build_overrides()["source"] is None
    assert "publish_verification_results" not in verify_command.build_overrides(broker_url="https://b.example.com")["source"]


def test_strip_empty_drops_unset_sections():
    cleaned = verify_command._strip_empty(verify_command.build_overrides(consumer=CONSUMER))

    assert cleaned["consumer"] == {"name": CONSUMER}
    assert "provider" not in cleaned
    assert "filter" not in cleaned
