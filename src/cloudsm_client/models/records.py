"""Service desk record data models.

This module defines the ServiceRequest and Worklog records submitted to the
CloudSM web services. Every attribute name is the exact element name the
service expects inside the bean, so the records can be serialized without any
renaming table.
"""

from dataclasses import dataclass, fields
from typing import Any, Mapping, TypeVar

_RecordT = TypeVar("_RecordT", bound="_FieldBag")


class _FieldBag:
    """Shared behaviour for flat records whose fields are optional strings."""

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        """Return the record's field names in wire order."""
        return tuple(f.name for f in fields(cls))

    def to_dict(self) -> dict[str, str]:
        """Return only the fields that are set.

        Returns:
            Dictionary of field name to value, omitting fields that are None
        """
        return {
            name: getattr(self, name)
            for name in self.field_names()
            if getattr(self, name) is not None
        }

    @classmethod
    def from_dict(cls: type[_RecordT], data: Mapping[str, Any]) -> _RecordT:
        """Build a record from a mapping of field names to values.

        Args:
            data: Field values keyed by wire field name

        Returns:
            New record instance

        Raises:
            ValueError: If data contains names that are not record fields

        Example:
            >>> srq = ServiceRequest.from_dict({"ticket_description": "Summary"})
            >>> srq.ticket_description
            'Summary'
        """
        known = set(cls.field_names())
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(
                f"Unknown {cls.__name__} field(s): {', '.join(unknown)}"
            )
        return cls(**{
            name: None if value is None else str(value)
            for name, value in data.items()
        })


@dataclass
class ServiceRequest(_FieldBag):
    """Service request (ticket) fields accepted by logServiceRequest and
    updateServiceRequest.

    Unset fields are left out of the request, which the service treats as
    "leave unchanged" on update.
    """

    affected_ci_id: str | None = None
    affected_ci_identifier: str | None = None
    affected_ci_name: str | None = None
    assigned_contact_id: str | None = None
    assigned_group_id: str | None = None
    assigned_to_group_name: str | None = None
    assigned_to_individual_name: str | None = None
    case_id: str | None = None
    cause: str | None = None
    ccti_category: str | None = None
    ccti_class: str | None = None
    ccti_id: str | None = None
    ccti_item: str | None = None
    ccti_type: str | None = None
    description_long: str | None = None
    parent_row_id: str | None = None
    parent_ticket_identifier: str | None = None
    person1_address_id: str | None = None
    person1_alt_email: str | None = None
    person1_alt_phone: str | None = None
    person1_contact_id: str | None = None
    person1_lvl1_org_name: str | None = None
    person1_lvl2_org_name: str | None = None
    person1_lvl3_org_name: str | None = None
    person1_org_id: str | None = None
    person2_address_id: str | None = None
    person2_alt_email: str | None = None
    person2_alt_phone: str | None = None
    person2_contact_id: str | None = None
    person2_lvl1_org_name: str | None = None
    person2_lvl2_org_name: str | None = None
    person2_lvl3_org_name: str | None = None
    person2_org_id: str | None = None
    requested_for_name: str | None = None
    requester_name: str | None = None
    resolution: str | None = None
    row_id: str | None = None
    solution_used_from_item_case: str | None = None
    solution_used_from_item_id: str | None = None
    support_email_address: str | None = None
    ticket_description: str | None = None
    ticket_identifier: str | None = None
    ticket_impact: str | None = None
    ticket_impact_code: str | None = None
    ticket_last_action_used_id: str | None = None
    ticket_phase: str | None = None
    ticket_priority: str | None = None
    ticket_priority_code: str | None = None
    ticket_reason_code: str | None = None
    ticket_solution_id: str | None = None
    ticket_source: str | None = None
    ticket_source_code: str | None = None
    ticket_status: str | None = None
    ticket_urgency: str | None = None
    ticket_urgency_code: str | None = None
    vip_flag_person1: str | None = None
    vip_flag_person2: str | None = None


@dataclass
class Worklog(_FieldBag):
    """Worklog entry fields accepted by addWorklog."""

    item_id: str | None = None
    row_id: str | None = None
    ticket_identifier: str | None = None
    ticket_type: str | None = None
    work_actual_date: str | None = None
    work_created_by: str | None = None
    work_created_by_contact_id: str | None = None
    work_created_date: str | None = None
    work_description: str | None = None
    work_modified_by: str | None = None
    work_modified_by_contact_id: str | None = None
    work_modified_date: str | None = None
    work_time_spent: str | None = None
    work_type: str | None = None
    work_type_code: str | None = None
    work_view_type: str | None = None
