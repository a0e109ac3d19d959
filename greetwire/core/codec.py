"""
Request/response codec for the raw HTTP wire format.

Encoders produce CRLF-delimited text headers followed by the raw body.
Decoders are lenient: a malformed start line leaves its fields empty and
malformed header lines are skipped, so decoding never raises on bad input.
"""

from typing import Dict, List, Tuple

from .framer import HEADER_TERMINATOR
from .message import Request, Response

CRLF = "\r\n"
STATUS_TEXT = "OK"
NO_ENCODING = "none"

REQUEST_HEADERS = ("host", "accept", "accept-encoding")
RESPONSE_HEADERS = ("content-type", "content-encoding", "content-length")


def split_message(raw: bytes) -> Tuple[List[str], bytes]:
    """Split raw bytes into head lines and body bytes.

    The body is taken by offset from the first terminator and never
    re-joined from text, so binary bodies survive intact.
    """
    index = raw.find(HEADER_TERMINATOR)
    if index == -1:
        head, body = raw, b""
    else:
        head, body = raw[:index], raw[index + len(HEADER_TERMINATOR):]
    return head.decode("utf-8", errors="replace").split(CRLF), body


def parse_headers(lines: List[str], wanted: Tuple[str, ...]) -> Dict[str, str]:
    """Build a lower-cased header map from header lines.

    Args:
        lines: Header lines following the start line
        wanted: Lower-cased header names to keep

    Returns:
        Mapping of header name to value; a repeated header keeps its
        last occurrence and lines without a ``": "`` separator are skipped
    """
    headers: Dict[str, str] = {}
    for line in lines:
        if line == "":
            break
        if ": " not in line:
            continue
        name, value = line.split(": ", 1)
        name = name.lower()
        if name in wanted:
            headers[name] = value
    return headers


def encode_request(request: Request) -> bytes:
    parts = [
        f"{request.method} {request.target} {request.version}{CRLF}",
        f"Host: {request.host}{CRLF}",
        f"Accept: {request.accept}{CRLF}",
    ]
    if request.accept_encoding != NO_ENCODING:
        parts.append(f"Accept-Encoding: {request.accept_encoding}{CRLF}")
    parts.append(CRLF)
    return "".join(parts).encode("utf-8")


def decode_request(raw: bytes) -> Request:
    lines, _ = split_message(raw)

    method = target = version = ""
    tokens = lines[0].split(" ")
    if len(tokens) >= 3:
        method, target, version = tokens[0], tokens[1], tokens[2]

    headers = parse_headers(lines[1:], REQUEST_HEADERS)
    return Request(
        method=method,
        target=target,
        version=version,
        host=headers.get("host", ""),
        accept=headers.get("accept", ""),
        accept_encoding=headers.get("accept-encoding") or NO_ENCODING,
    )


def encode_response(response: Response) -> bytes:
    """Serialize a response.

    The status line always carries the reason phrase "OK", whatever the
    status code. Content-Length is computed from ``response.data``.
    """
    parts = [f"{response.version} {response.status} {STATUS_TEXT}{CRLF}"]
    if response.content_type:
        parts.append(f"Content-Type: {response.content_type}{CRLF}")
    if response.content_encoding and response.content_encoding != NO_ENCODING:
        parts.append(f"Content-Encoding: {response.content_encoding}{CRLF}")
    parts.append(f"Content-Length: {len(response.data)}{CRLF}")
    parts.append(CRLF)
    return "".join(parts).encode("utf-8") + bytes(response.data)


def decode_response(raw: bytes) -> Response:
    lines, body = split_message(raw)

    version = status = ""
    tokens = lines[0].split(" ")
    if len(tokens) >= 3:
        version, status = tokens[0], tokens[1]

    headers = parse_headers(lines[1:], RESPONSE_HEADERS)
    try:
        content_length = int(headers.get("content-length", "0"))
    except ValueError:
        content_length = 0

    return Response(
        version=version,
        status=status,
        content_type=headers.get("content-type", ""),
        content_encoding=headers.get("content-encoding", ""),
        content_length=content_length,
        data=body,
    )
