"""CloudSM Service Desk Example.

This example demonstrates using the CloudSMClient class to work with
CloudSM service desk tickets via SOAP.

Key features demonstrated:
- Logging a new service request
- Updating a service request (only set fields are sent)
- Adding a worklog entry
- Searching contacts
- Handling transport and response errors

Prerequisites:
- A CloudSM account with web service access
- CLOUDSM_PASSWORD set in the environment (or in .env)
"""

import os
import sys
from pathlib import Path

import requests
from lxml import etree

# Add src to path for running as standalone script
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cloudsm_client.logging_audit import configure_logging
from cloudsm_client.models.records import ServiceRequest, Worklog
from cloudsm_client.models.results import Result
from cloudsm_client.transactions.soap_client import CloudSMClient


def print_result(title: str, result: Result) -> None:
    """Print the populated fields of a result."""
    print(f"\n{title}")
    print("-" * len(title))
    for name, value in result.to_dict().items():
        if value:
            print(f"  {name}: {value}")
    if result.has_errors:
        print("  (the service reported errors)")


def main() -> int:
    configure_logging(level="INFO", log_file=Path("logs/example.log"))

    client = CloudSMClient(
        host_name=os.getenv("CLOUDSM_HOST_NAME", "sm1s.saas.ca.com"),
        user_name=os.getenv("CLOUDSM_USER_NAME", "user@test.com"),
        password=os.getenv("CLOUDSM_PASSWORD"),
        response_format="XML",
    )

    srq = ServiceRequest(
        ticket_description="Summary",
        description_long="New Details",
        ccti_class="Server",
        ccti_category="Maintenance",
        requester_name="userID",
    )

    try:
        print_result("Log service request", client.log_service_request(srq))

        print_result("List contacts", client.list_contacts("userID"))

        update = ServiceRequest(
            ticket_identifier="100-23405",
            description_long="Details Updated",
        )
        print_result("Update service request", client.update_service_request(update))

        worklog = Worklog(ticket_identifier="100-23429", work_description="Some updates")
        print_result("Add worklog", client.add_worklog(worklog))

    except requests.RequestException as e:
        print(f"Transport error: {e}")
        return 2
    except etree.XMLSyntaxError as e:
        print(f"Unparseable response: {e}")
        return 3

    return 0


if __name__ == "__main__":
    sys.exit(main())
