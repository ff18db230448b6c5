"""Service desk CLI commands module.

This module provides Click-based CLI commands for the CloudSM web service
operations: logging and updating service requests, adding worklogs and
listing contacts.

Exit Codes:
    0: Call completed (business errors are shown, not treated as failures)
    1: Configuration or validation error
    2: Transport error (network, TLS, timeout, HTTP status)
    3: Response could not be parsed
"""

import json
import logging
import sys
from typing import Callable, Optional

import click
import requests
from lxml import etree

from cloudsm_client.config.manager import get_password, load_config
from cloudsm_client.config.schema import Config
from cloudsm_client.models.records import ServiceRequest, Worklog
from cloudsm_client.models.results import Result
from cloudsm_client.transactions.soap_client import CloudSMClient
from cloudsm_client.utils.exceptions import ConfigurationError, ValidationError

logger = logging.getLogger(__name__)


def _ticket_field_options(func: Callable) -> Callable:
    """Attach the common service request field options to a command."""
    options = [
        click.option("--summary", default=None, help="Ticket summary (ticket_description)"),
        click.option("--description", default=None, help="Long description (description_long)"),
        click.option("--class", "ccti_class", default=None, help="CCTI class"),
        click.option("--category", default=None, help="CCTI category"),
        click.option("--requester", default=None, help="Requester user ID (requester_name)"),
        click.option(
            "--field",
            "extra_fields",
            multiple=True,
            metavar="NAME=VALUE",
            help="Any other ServiceRequest field (repeatable)",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


_json_option = click.option(
    "--json", "as_json", is_flag=True, help="Print the result as JSON"
)


@click.group(name="request")
def request_group() -> None:
    """Service request commands.

    Use these commands to log new service requests (tickets) and update
    existing ones.
    """
    pass


@request_group.command(name="log")
@_ticket_field_options
@_json_option
@click.pass_context
def log_request(
    ctx: click.Context,
    summary: Optional[str],
    description: Optional[str],
    ccti_class: Optional[str],
    category: Optional[str],
    requester: Optional[str],
    extra_fields: tuple[str, ...],
    as_json: bool,
) -> None:
    """Log a new service request.

    Examples:
        # Minimal ticket
        $ cloudsm request log --summary "Printer offline" --requester jdoe

        # Classified ticket with an extra field
        $ cloudsm request log --summary "VPN down" --class Network \\
            --category VPN --field ticket_priority=2
    """
    _run_ticket_command(
        ctx,
        "Log service request",
        lambda: _build_service_request(
            summary, description, ccti_class, category, requester, extra_fields
        ),
        CloudSMClient.log_service_request,
        as_json,
    )


@request_group.command(name="update")
@click.argument("ticket_id")
@_ticket_field_options
@_json_option
@click.pass_context
def update_request(
    ctx: click.Context,
    ticket_id: str,
    summary: Optional[str],
    description: Optional[str],
    ccti_class: Optional[str],
    category: Optional[str],
    requester: Optional[str],
    extra_fields: tuple[str, ...],
    as_json: bool,
) -> None:
    """Update an existing service request.

    Only the fields given on the command line are sent.

    Examples:
        $ cloudsm request update 12345 --field ticket_status=Closed
    """
    _run_ticket_command(
        ctx,
        f"Update service request {ticket_id}",
        lambda: _build_service_request(
            summary, description, ccti_class, category, requester, extra_fields,
            ticket_id=ticket_id,
        ),
        CloudSMClient.update_service_request,
        as_json,
    )


@click.group(name="worklog")
def worklog_group() -> None:
    """Worklog commands."""
    pass


@worklog_group.command(name="add")
@click.argument("ticket_id")
@click.option("--description", required=True, help="Worklog text (work_description)")
@_json_option
@click.pass_context
def add_worklog(
    ctx: click.Context,
    ticket_id: str,
    description: str,
    as_json: bool,
) -> None:
    """Add a worklog entry to a ticket.

    Examples:
        $ cloudsm worklog add 12345 --description "Replaced toner"
    """
    _run_ticket_command(
        ctx,
        f"Add worklog to {ticket_id}",
        lambda: Worklog(ticket_identifier=ticket_id, work_description=description),
        CloudSMClient.add_worklog,
        as_json,
    )


@click.group(name="contacts")
def contacts_group() -> None:
    """Contact commands."""
    pass


@contacts_group.command(name="list")
@click.argument("search_text")
@_json_option
@click.pass_context
def list_contacts(ctx: click.Context, search_text: str, as_json: bool) -> None:
    """Search contacts.

    Examples:
        $ cloudsm contacts list jdoe
    """
    _run_ticket_command(
        ctx,
        f"List contacts matching {search_text!r}",
        lambda: search_text,
        CloudSMClient.list_contacts,
        as_json,
    )


def _parse_field_assignments(assignments: tuple[str, ...]) -> dict[str, str]:
    """Parse repeated NAME=VALUE options.

    Raises:
        ValidationError: If an assignment has no '=' or an empty name
    """
    parsed: dict[str, str] = {}
    for assignment in assignments:
        name, sep, value = assignment.partition("=")
        name = name.strip()
        if not sep or not name:
            raise ValidationError(
                f"Invalid --field value: {assignment!r}. Use NAME=VALUE."
            )
        parsed[name] = value
    return parsed


def _build_service_request(
    summary: Optional[str],
    description: Optional[str],
    ccti_class: Optional[str],
    category: Optional[str],
    requester: Optional[str],
    extra_fields: tuple[str, ...],
    ticket_id: Optional[str] = None,
) -> ServiceRequest:
    """Build a ServiceRequest from the command line options.

    Named options win over --field assignments for the same field.

    Raises:
        ValidationError: If a --field is malformed or names an unknown field
    """
    values = _parse_field_assignments(extra_fields)
    named = {
        "ticket_identifier": ticket_id,
        "ticket_description": summary,
        "description_long": description,
        "ccti_class": ccti_class,
        "ccti_category": category,
        "requester_name": requester,
    }
    values.update({name: value for name, value in named.items() if value is not None})

    try:
        return ServiceRequest.from_dict(values)
    except ValueError as e:
        raise ValidationError(str(e)) from e


def _create_client(ctx: click.Context) -> CloudSMClient:
    """Create a client from the group configuration.

    A transport placed in the context object under "transport" is used
    instead of the default HTTP transport.

    Raises:
        ConfigurationError: If the password is not available
    """
    obj = ctx.obj or {}
    config_obj: Config = obj.get("config") or load_config()
    password = get_password(config_obj)
    return CloudSMClient.from_config(
        config_obj, password=password, transport=obj.get("transport")
    )


def _run_ticket_command(
    ctx: click.Context,
    label: str,
    build_payload: Callable,
    call: Callable[[CloudSMClient, object], Result],
    as_json: bool,
) -> None:
    """Build the payload, run the call and display the result.

    Raises:
        SystemExit: With the exit code for the error kind
    """
    try:
        payload = build_payload()
        client = _create_client(ctx)

        logger.info(f"{label} on {client.host_name}")
        result = call(client, payload)

    except (ConfigurationError, ValidationError) as e:
        logger.error(f"Validation error: {e}")
        click.echo(
            click.style("✗ Validation Error: ", fg="red", bold=True) + str(e),
            err=True
        )
        sys.exit(1)

    except requests.RequestException as e:
        logger.error(f"Transport error: {e}")
        click.echo(
            click.style("✗ Transport Error: ", fg="red", bold=True) + str(e),
            err=True
        )
        click.echo(
            "\nRemediation: Check host_name, network connectivity and credentials.",
            err=True
        )
        sys.exit(2)

    except etree.XMLSyntaxError as e:
        logger.error(f"Response parse error: {e}")
        click.echo(
            click.style("✗ Response Error: ", fg="red", bold=True)
            + f"Service response is not well-formed XML: {e}",
            err=True
        )
        sys.exit(3)

    _display_result(label, result, as_json)


def _display_result(label: str, result: Result, as_json: bool) -> None:
    """Print the non-empty result fields, or the whole result as JSON."""
    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    if result.has_errors:
        click.echo(click.style(f"✗ {label}: service reported errors", fg="yellow", bold=True))
    else:
        click.echo(click.style(f"✓ {label}", fg="green", bold=True))

    populated = {name: value for name, value in result.to_dict().items() if value}
    if not populated:
        click.echo("  (no result fields in response)")
        return

    width = max(len(name) for name in populated)
    for name, value in populated.items():
        click.echo(f"  {name:<{width}}  {value}")
