"""The cloudsm command group and its config and version subcommands."""

from pathlib import Path
from typing import Optional

import click

from cloudsm_client import __version__
from cloudsm_client.cli.ticket_commands import contacts_group, request_group, worklog_group
from cloudsm_client.config import load_config
from cloudsm_client.logging_audit import configure_logging
from cloudsm_client.utils.exceptions import ConfigurationError


@click.group()
@click.version_option(version=__version__, prog_name="cloudsm")
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: ./config/config.json)",
)
@click.option("--verbose", is_flag=True, help="Enable verbose logging (DEBUG level)")
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to log file (overrides config file)",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    verbose: bool,
    log_file: Optional[Path],
) -> None:
    """CloudSM Client - command-line access to CloudSM service desk web services.

    Logs and updates service requests, adds worklogs and searches contacts.
    The service account password is read from the CLOUDSM_PASSWORD
    environment variable (or a .env file).

    Common usage:

        # Log a new service request
        cloudsm request log --summary "Printer offline" --requester jdoe

        # Add a worklog to an existing ticket
        cloudsm worklog add 12345 --description "Replaced toner"

        # Search contacts
        cloudsm contacts list jdoe

        # Use custom configuration file
        cloudsm --config custom/config.json contacts list jdoe

    Use --help with any command for more information.
    """
    ctx.ensure_object(dict)

    try:
        config_obj = load_config(config)
        ctx.obj["config"] = config_obj
    except ConfigurationError as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        ctx.exit(1)

    ctx.obj["verbose"] = verbose
    ctx.obj["log_file"] = log_file

    # Precedence: CLI flags > config file > defaults
    log_level = "DEBUG" if verbose else config_obj.logging.level
    log_file_path = log_file if log_file else config_obj.logging.log_file

    configure_logging(
        level=log_level,
        log_file=log_file_path,
        redact_credentials=config_obj.logging.redact_credentials,
    )


cli.add_command(request_group)
cli.add_command(worklog_group)
cli.add_command(contacts_group)


@cli.group()
def config() -> None:
    """Configuration management commands."""
    pass


@config.command()
@click.argument("config_file", type=click.Path(exists=True, path_type=Path))
def validate(config_file: Path) -> None:
    """Validate a configuration file.

    Example:
        cloudsm config validate config/config.json
    """
    try:
        config_obj = load_config(config_file)

        click.echo(click.style("✓", fg="green", bold=True) + " Configuration is valid")
        click.echo(f"\nConfiguration file: {config_file}")

        click.echo("\nService:")
        click.echo(f"  Host name:       {config_obj.service.host_name}")
        click.echo(f"  User name:       {config_obj.service.user_name or 'Not configured'}")
        click.echo(f"  Response format: {config_obj.service.response_format}")

        click.echo("\nTransport:")
        click.echo(f"  Verify TLS:  {config_obj.transport.verify_tls}")
        click.echo(
            f"  Timeouts:    {config_obj.transport.timeout_connect}s connect, "
            f"{config_obj.transport.timeout_read}s read"
        )
        click.echo(f"  User-Agent:  {config_obj.transport.user_agent}")

        click.echo("\nLogging:")
        click.echo(f"  Level:              {config_obj.logging.level}")
        click.echo(f"  Log file:           {config_obj.logging.log_file}")
        click.echo(f"  Redact credentials: {config_obj.logging.redact_credentials}")

    except ConfigurationError as e:
        click.echo(click.style("✗", fg="red", bold=True) + " Configuration validation failed")
        click.echo(f"\n{e}", err=True)
        raise click.exceptions.Exit(1)


@cli.command()
def version() -> None:
    """Display version information."""
    click.echo(f"cloudsm version {__version__}")


if __name__ == "__main__":
    cli()
