# pactverify/__main__.py
"""Allow ``python -m pactverify``."""

from pactverify.cli.cli import app

if __name__ == "__main__":
    app()
