"""Entry point for running cloudsm_client as a module.

This allows the package to be executed as:
    python -m cloudsm_client
"""

from cloudsm_client.cli.main import cli

if __name__ == "__main__":
    cli()
