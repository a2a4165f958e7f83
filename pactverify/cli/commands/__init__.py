# pactverify/cli/commands/__init__.py
"""CLI command implementations (imported lazily by pactverify.cli.cli)."""
