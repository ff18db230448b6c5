"""Normalization of multipart/related (MTOM) responses.

Some CloudSM endpoints answer with a multipart/related body even when there is
no attachment. The XML part is recovered by dropping MIME framing line by
line, without full MIME parsing.
"""

import logging
import re

logger = logging.getLogger(__name__)

MULTIPART_CONTENT_TYPE = "multipart/related"

# Boundary markers, part headers and blank lines
MIME_FRAMING_PATTERN = re.compile(r"^--MIMEBoundary.*$|^Content-[^:]+:.*$|^\s*$")


def is_multipart(content_type: str | None) -> bool:
    """Check if a Content-Type declares a multipart/related body."""
    return bool(content_type) and MULTIPART_CONTENT_TYPE in content_type.lower()


def strip_mime_framing(body: str) -> str:
    """Remove MIME boundary, part header and blank lines from a body.

    Surviving lines are joined with no separator.

    Args:
        body: Raw multipart response body

    Returns:
        Concatenated content lines

    Example:
        >>> strip_mime_framing(
        ...     "--MIMEBoundary123\\nContent-Type: text/xml\\n\\n"
        ...     "<Envelope/>\\n--MIMEBoundary123--"
        ... )
        '<Envelope/>'
    """
    kept = []
    for line in body.split("\n"):
        line = line.rstrip("\r")
        if MIME_FRAMING_PATTERN.match(line):
            continue
        kept.append(line)
    return "".join(kept)


def normalize_response(body: str, content_type: str | None) -> str:
    """Turn a raw response body into a single XML document string.

    Args:
        body: Response body text
        content_type: Declared response Content-Type

    Returns:
        XML document text, stripped of surrounding whitespace
    """
    if is_multipart(content_type):
        logger.debug("Stripping MIME framing from multipart/related response")
        return strip_mime_framing(body).strip()
    return body.strip()
