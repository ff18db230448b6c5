"""Response parsing for CloudSM web service results."""

import logging

from lxml import etree

from cloudsm_client.models.results import KNOWN_FIELDS, RESULT_FIELD_SLOTS, Result

logger = logging.getLogger(__name__)

# Responses are untrusted: no entity expansion, no network access.
# Input is always re-encoded as UTF-8, overriding any XML declaration;
# huge_tree lifts libxml2's 10 MB text node limit.
_PARSER = etree.XMLParser(
    resolve_entities=False,
    no_network=True,
    huge_tree=True,
    encoding="utf-8",
)


def local_name(tag: str) -> str:
    """Return a tag's lowercase name without namespace or prefix.

    Handles both lxml's ``{uri}name`` form and a literal ``prefix:name``.

    Example:
        >>> local_name("{http://example.com/ns}StatusCode")
        'statuscode'
        >>> local_name("ns1:StatusCode")
        'statuscode'
    """
    if tag.startswith("{"):
        tag = tag.split("}", 1)[1]
    return tag.split(":", 1)[-1].lower()


def extract_result(xml_text: str) -> Result:
    """Extract the known result fields from a response document.

    Elements are visited in document order. The first element whose local
    name matches a result field sets that field to its trimmed text; later
    elements with the same name are ignored, as are unknown elements.

    Args:
        xml_text: Normalized response XML

    Returns:
        Result with matching fields populated and all others empty

    Raises:
        etree.XMLSyntaxError: If xml_text is not well-formed XML

    Example:
        >>> result = extract_result(
        ...     "<r><ns:statusCode xmlns:ns='urn:x'>0</ns:statusCode></r>"
        ... )
        >>> result.status_code
        '0'
    """
    root = etree.fromstring(xml_text.encode("utf-8"), parser=_PARSER)

    result = Result()
    found: set[str] = set()
    for element in root.iter(etree.Element):
        name = local_name(element.tag)
        if name not in KNOWN_FIELDS or name in found:
            continue
        found.add(name)
        setattr(result, RESULT_FIELD_SLOTS[name], (element.text or "").strip())

    logger.debug(f"Extracted result fields: {sorted(found) or 'none'}")
    return result
