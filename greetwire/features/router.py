"""
Request routing for the greeting server.

Two routes are served:
- ``/`` returns a static HTML greeting page
- ``/greet/<id>`` returns the greeting payload for the configured student

Everything else is a 404. Route failures are raised internally and mapped
to bodiless responses by ``handle_request``.
"""

"""
Copyright 2025 Chris Bunting
File: router.py | Purpose: Greeting server routes
@author Chris Bunting | @version 1.0.0

CHANGELOG:
2025-09-02 - Chris Bunting: Initial implementation
"""

import logging
import re
from typing import Tuple
from urllib.parse import urlsplit, unquote, parse_qs

from ..core.config import ServerConfig
from ..core.message import Request, Response, build_response
from ..core.negotiator import negotiate_content_type, negotiate_encoding, IDENTITY
from .compression import compress
from .greeting import Greeting, Student, MarshalError, marshal

logger = logging.getLogger("greetwire.server")

GREET_PREFIX = "/greet/"
ROOT_PAGE = "<html><body><h1>Halo, dunia! Aku {name} sedang mengerjakan A03</h1></body></html>"

_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_CONTROL_CHAR = re.compile(r"[\x00-\x1f\x7f]")


class InvalidTarget(Exception):
    """Raised when a request target cannot be parsed as a URL"""
    pass


class RouteNotFound(Exception):
    """Raised when no route matches the request path"""
    pass


def parse_target(target: str) -> Tuple[str, dict]:
    """Split a request target into its decoded path and query parameters.

    Query pairs with malformed escapes are dropped, not rejected.

    Raises:
        InvalidTarget: On control characters, malformed escapes in the
            path, or unparsable URLs
    """
    if _CONTROL_CHAR.search(target):
        raise InvalidTarget(f"Control character in target: {target!r}")
    try:
        parts = urlsplit(target)
    except ValueError as e:
        raise InvalidTarget(str(e)) from e
    if _BAD_ESCAPE.search(parts.path):
        raise InvalidTarget(f"Invalid escape in path: {parts.path!r}")

    pairs = [pair for pair in parts.query.split("&") if not _BAD_ESCAPE.search(pair)]
    return unquote(parts.path), parse_qs("&".join(pairs))


def root_page(config: ServerConfig) -> Response:
    body = ROOT_PAGE.format(name=config.student_name).encode("utf-8")
    return build_response("200", "text/html", IDENTITY, body)


def greet(request: Request, path: str, query: dict, config: ServerConfig) -> Response:
    """Build the greeting response for ``/greet/<id>``.

    Raises:
        RouteNotFound: If the id does not match the configured student
        MarshalError: If the greeting cannot be serialized
    """
    segments = path.split("/")
    if len(segments) < 3 or segments[2] != config.student_id:
        raise RouteNotFound(path)

    greeter = query.get("name", [""])[0] or config.student_name
    greeting = Greeting(
        student=Student(name=config.student_name, id=config.student_id),
        greeter=greeter,
    )

    content_type = negotiate_content_type(request.accept)
    data = marshal(greeting, content_type)

    encoding = negotiate_encoding(request.accept_encoding)
    data = compress(data, encoding)
    return build_response("200", content_type, encoding, data)


def route(request: Request, config: ServerConfig) -> Response:
    """Dispatch a request to its route, raising on failure."""
    path, query = parse_target(request.target)
    if path == "/":
        return root_page(config)
    if path.startswith(GREET_PREFIX):
        return greet(request, path, query, config)
    raise RouteNotFound(path)


def handle_request(request: Request, config: ServerConfig) -> Response:
    """Produce the response for a decoded request.

    Never raises for request-level failures: bad targets become 400,
    unknown routes 404 and marshalling failures 500.
    """
    try:
        return route(request, config)
    except InvalidTarget as e:
        logger.warning(f"Invalid request target: {e}")
        return build_response("400")
    except RouteNotFound:
        return build_response("404")
    except MarshalError:
        logger.exception("Failed to marshal greeting")
        return build_response("500")
