"""
Message model for the raw HTTP exchange.

Plain records only: building, encoding and decoding live in the codec.
"""

from dataclasses import dataclass

HTTP_VERSION = "HTTP/1.1"


@dataclass(frozen=True)
class Request:
    """A single GET request as it travels between client and server.

    Attributes:
        method: Request method, always "GET" in this system
        target: Path plus optional query string, starting with "/"
        version: Protocol version string
        host: "host:port" of the server being addressed
        accept: Raw Accept header value
        accept_encoding: Raw Accept-Encoding value, or the literal "none"
    """
    method: str = ""
    target: str = ""
    version: str = ""
    host: str = ""
    accept: str = ""
    accept_encoding: str = "none"


@dataclass(frozen=True)
class Response:
    """A response record.

    ``content_length`` mirrors what was decoded from the wire. The encoder
    never trusts it and always writes ``len(data)``.
    """
    version: str = ""
    status: str = ""
    content_type: str = ""
    content_encoding: str = ""
    content_length: int = 0
    data: bytes = b""


def build_response(status: str, content_type: str = "", content_encoding: str = "",
                   data: bytes = b"") -> Response:
    """Create an HTTP/1.1 response whose length matches its body."""
    return Response(
        version=HTTP_VERSION,
        status=status,
        content_type=content_type,
        content_encoding=content_encoding,
        content_length=len(data),
        data=data,
    )
