# pactverify/cli/cli.py
"""
pactverify CLI - Main application.

Commands:
    pactverify verify     Verify a provider against its consumer pact(s)
    pactverify version    Show the installed version

NOTE: Commands use lazy loading - the verifier stack is only imported when a
command is invoked.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

app = typer.Typer(
    name="pactverify",
    help="pactverify - check that a provider honours its consumer contracts.",
    no_args_is_help=True,
    add_completion=False,
)


@app.command("verify")
def verify(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML settings file."),
    provider: Optional[str] = typer.Option(None, "--provider", help="Provider name."),
    provider_base_url: Optional[str] = typer.Option(None, "--provider-base-url", help="Where the provider is listening."),
    consumer: Optional[str] = typer.Option(None, "--consumer", help="Consumer name."),
    pact_file: Optional[Path] = typer.Option(None, "--pact-file", help="Local pact file."),
    pact_url: Optional[str] = typer.Option(None, "--pact-url", help="Pact file URL."),
    broker_url: Optional[str] = typer.Option(None, "--broker-url", help="Pact Broker base URL."),
    token: Optional[str] = typer.Option(None, "--token", "--broker-token", help="Bearer token for the pact URL or broker."),
    username: Optional[str] = typer.Option(None, "--username", help="Basic auth user for the pact URL or broker."),
    password: Optional[str] = typer.Option(None, "--password", help="Basic auth password."),
    tags: Optional[List[str]] = typer.Option(None, "--tag", "-t", help="Consumer version tag (repeatable)."),
    publish: bool = typer.Option(False, "--publish", help="Publish results to the broker."),
    provider_version: Optional[str] = typer.Option(None, "--provider-version", help="Provider version to publish."),
    provider_version_branch: Optional[str] = typer.Option(None, "--provider-version-branch", help="Provider branch to publish."),
    provider_states_url: Optional[str] = typer.Option(None, "--provider-states-url", help="Provider state setup URL."),
    filter_description: Optional[str] = typer.Option(None, "--filter-description", help="Only verify this interaction."),
    filter_state: Optional[str] = typer.Option(None, "--filter-state", help="Only verify interactions in this provider state."),
    log_level: Optional[str] = typer.Option(None, "--log-level", "-l", help="trace, debug, info, warn, error or none."),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="HTTP timeout in seconds."),
) -> None:
    """Verify that a provider honours its pact with a consumer."""
    from pactverify.cli.commands import verify as mod

    mod.command(
        config=config,
        provider=provider,
        provider_base_url=provider_base_url,
        consumer=consumer,
        pact_file=pact_file,
        pact_url=pact_url,
        broker_url=broker_url,
        token=token,
        username=username,
        password=password,
        tags=tags,
        publish=publish,
        provider_version=provider_version,
        provider_version_branch=provider_version_branch,
        provider_states_url=provider_states_url,
        filter_description=filter_description,
        filter_state=filter_state,
        log_level=log_level,
        timeout=timeout,
    )


@app.command("version")
def version() -> None:
    """Show the installed version."""
    from pactverify import __version__

    typer.echo(f"pactverify version {__version__}")


if __name__ == "__main__":
    app()
