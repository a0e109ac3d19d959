"""
Interactive greeting client.

Performs exactly one exchange per run: connect, write the request, read
until the framer reports a complete response, close. There is no retry
and no timeout, so a peer that never answers blocks the call.
"""

import asyncio
import logging
from typing import Callable, List, Optional, Tuple
from urllib.parse import urlsplit

from .codec import encode_request, decode_response
from .config import ClientConfig
from .framer import read_message
from .message import Request, Response, HTTP_VERSION
from .negotiator import IDENTITY, GZIP, DEFLATE
from .server_utils import configure_client_socket, configure_logging, setup_uvloop
from ..features.compression import decompress, CompressionError
from ..features.greeting import unmarshal, MarshalError

logger = logging.getLogger("greetwire.client")

ACCEPTED_ENCODINGS = (IDENTITY, GZIP, DEFLATE)
DEFAULT_PORT = 80


class FetchError(Exception):
    """Raised when the connection fails while exchanging a request"""
    pass


def build_request(url: str, accept: str, accept_encoding: str) -> Tuple[Request, str, int]:
    """Turn user input into a GET request and the address to send it to.

    Args:
        url: Absolute URL such as ``http://127.0.0.1:6636/greet/1?name=Ada``
        accept: Raw Accept header value
        accept_encoding: Raw Accept-Encoding value, or "none"

    Returns:
        Tuple of (request, host, port)

    Raises:
        ValueError: If the URL has no host or an invalid port
    """
    parts = urlsplit(url)
    host = parts.hostname
    if not host:
        raise ValueError(f"URL has no host: {url!r}")
    port = parts.port or DEFAULT_PORT

    target = parts.path or "/"
    if parts.query:
        target += "?" + parts.query

    request = Request(
        method="GET",
        target=target,
        version=HTTP_VERSION,
        host=f"{host}:{port}",
        accept=accept,
        accept_encoding=accept_encoding,
    )
    return request, host, port


async def fetch(request: Request, host: str, port: int,
                config: Optional[ClientConfig] = None) -> Response:
    """Send ``request`` to ``host:port`` and decode the reply.

    Raises:
        FetchError: If connecting, writing or reading fails
    """
    config = config or ClientConfig()
    try:
        reader, writer = await asyncio.open_connection(host, port)
    except OSError as e:
        raise FetchError(f"Error connecting to server {host}:{port}: {e}") from e

    configure_client_socket(writer)
    try:
        writer.write(encode_request(request))
        await writer.drain()
        raw = await read_message(reader, config.buffer_size)
    except OSError as e:
        raise FetchError(f"Error exchanging request with {host}:{port}: {e}") from e
    finally:
        writer.close()
        try:
            await writer.wait_closed()
        except OSError as e:
            logger.debug(f"Error closing connection: {e}")

    return decode_response(raw)


def describe_response(response: Response) -> List[str]:
    """Render a response as the lines the client prints."""
    lines = [f"Status Code: {response.status}"]

    data = response.data
    encoding = response.content_encoding
    if encoding and encoding != IDENTITY:
        lines.append(f"Encoded: {encoding}")
        try:
            data = decompress(data, encoding)
        except CompressionError as e:
            logger.warning(str(e))

    lines.append(f"Body: {data.decode('utf-8', errors='replace').strip()}")

    if data:
        try:
            greeting = unmarshal(data, response.content_type)
        except MarshalError as e:
            logger.debug(f"Body is not a greeting: {e}")
        else:
            lines.append(f"Parsed: {greeting}")
    return lines


def prompt_encoding(ask: Callable[[str], str] = input) -> str:
    """Ask for an Accept-Encoding value until it is one we can decode."""
    while True:
        value = ask('Input Accept Encoding (write "none" if no special encoding can be accepted): ').strip()
        if value in ACCEPTED_ENCODINGS:
            return value
        print(f"Unsupported encoding {value!r}, choose one of: {', '.join(ACCEPTED_ENCODINGS)}")


def main(ask: Callable[[str], str] = input) -> int:
    configure_logging()
    setup_uvloop()

    url = ask("Input URL: ").strip()
    accept = ask("Input Content Type: ").strip()
    accept_encoding = prompt_encoding(ask)

    try:
        request, host, port = build_request(url, accept, accept_encoding)
    except ValueError as e:
        logger.error(f"Error parsing URL: {e}")
        return 1

    try:
        response = asyncio.run(fetch(request, host, port))
    except FetchError as e:
        logger.error(str(e))
        return 1

    for line in describe_response(response):
        print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
