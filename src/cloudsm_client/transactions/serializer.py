"""XML serialization of CloudSM request envelopes.

Element namespaces are looked up in FIELD_NAMESPACES; any element not listed
there is a bean field and goes in the beans namespace. Adding a field to a
record therefore never requires a change here.
"""

import logging
from collections.abc import Mapping
from types import MappingProxyType

from lxml import etree

from cloudsm_client.models.envelope import BEANS_NS, WRAPPERS_NS, Envelope

logger = logging.getLogger(__name__)

# Prefixes used in the serialized document
NSMAP_PREFIXES = {
    WRAPPERS_NS: "wrap",
    BEANS_NS: "xsd",
}

FIELD_NAMESPACES = MappingProxyType({
    "credentials": WRAPPERS_NS,
    "extendedSettings": WRAPPERS_NS,
    "searchText": WRAPPERS_NS,
    "srqBean": WRAPPERS_NS,
    "workglogBean": WRAPPERS_NS,
    "userName": BEANS_NS,
    "userPassword": BEANS_NS,
    "responseFormat": BEANS_NS,
})

DEFAULT_FIELD_NS = BEANS_NS


def field_namespace(name: str) -> str:
    """Return the namespace an element is serialized in.

    Args:
        name: Element name (e.g. "credentials", "ticket_description")

    Returns:
        Namespace URI for the element
    """
    return FIELD_NAMESPACES.get(name, DEFAULT_FIELD_NS)


def serialize_envelope(envelope: Envelope) -> str:
    """Serialize an envelope to an XML document string.

    The output carries no XML declaration. Fields whose value is None are
    omitted, so an update request only touches the fields the caller set.

    Args:
        envelope: Envelope built by build_envelope()

    Returns:
        Pretty-printed XML document

    Example:
        >>> xml = serialize_envelope(envelope)
        >>> xml.startswith("<soap:Envelope")
        True
    """
    descriptor = envelope.descriptor
    soap_ns = descriptor.envelope_ns
    nsmap = {"soap": soap_ns}
    nsmap.update({prefix: uri for uri, prefix in NSMAP_PREFIXES.items()})

    root = etree.Element(f"{{{soap_ns}}}Envelope", nsmap=nsmap)
    etree.SubElement(root, f"{{{soap_ns}}}Header")
    body = etree.SubElement(root, f"{{{soap_ns}}}Body")
    wrapper = etree.SubElement(body, f"{{{WRAPPERS_NS}}}{descriptor.name}")

    for name, value in envelope.wrapper_fields().items():
        _append_field(wrapper, name, value)

    xml_text = etree.tostring(root, encoding="unicode", pretty_print=True)
    logger.debug(f"Serialized {descriptor.name} envelope ({len(xml_text)} chars)")
    return xml_text


def _append_field(parent: etree._Element, name: str, value: object) -> None:
    """Append one field, recursing into nested mappings; None is skipped."""
    if value is None:
        return

    element = etree.SubElement(parent, f"{{{field_namespace(name)}}}{name}")
    if isinstance(value, Mapping):
        for child_name, child_value in value.items():
            _append_field(element, child_name, child_value)
    else:
        element.text = str(value)
