"""
Content negotiation with fixed precedence rules.

Multi-value and quality-weighted headers are not ranked: any comma or
``q=`` in the header selects a fixed default.
"""

JSON = "application/json"
XML = "application/xml"

GZIP = "gzip"
DEFLATE = "deflate"
IDENTITY = "none"


def _is_multi_value(value: str) -> bool:
    return "," in value or "q=" in value


def negotiate_content_type(accept: str) -> str:
    """Pick JSON or XML from a raw Accept header value."""
    accept = accept.lower()
    if _is_multi_value(accept):
        return JSON
    if XML in accept:
        return XML
    return JSON


def negotiate_encoding(accept_encoding: str) -> str:
    """Pick a content encoding from a raw Accept-Encoding header value.

    Unknown encodings fall back to gzip, not to identity; only the exact
    value "none" disables compression.
    """
    accept_encoding = accept_encoding.lower()
    if _is_multi_value(accept_encoding):
        return GZIP
    if DEFLATE in accept_encoding:
        return DEFLATE
    if GZIP in accept_encoding:
        return GZIP
    if accept_encoding == IDENTITY:
        return IDENTITY
    return GZIP
