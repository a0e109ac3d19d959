"""
Per-connection request handling for the greeting server.

Each accepted connection runs one strictly sequential exchange:
- Read until the framer reports a complete message
- Decode the request leniently
- Route it and build the response
- Encode, write and close

Failures are logged and confined to their connection.
"""

import asyncio
import logging
import uuid

from .codec import decode_request, encode_response
from .config import ServerConfig
from .framer import read_message
from .server_utils import access_log_payload
from ..features.metrics import REQ_TOTAL, REQ_ERRORS, REQ_IN_FLIGHT, REQ_LATENCY
from ..features.router import handle_request

logger = logging.getLogger("greetwire.server")


class GreetHandler:
    """Handles a single request/response exchange on one connection."""

    def __init__(self, config: ServerConfig):
        self.config = config

    async def handle_request(self,
                             reader: asyncio.StreamReader,
                             writer: asyncio.StreamWriter) -> None:
        """Serve one request and close the connection.

        Args:
            reader: StreamReader for receiving the request
            writer: StreamWriter for sending the response
        """
        peer = writer.get_extra_info("peername")
        client = f"{peer[0]}:{peer[1]}" if peer else "unknown"
        request_id = str(uuid.uuid4())
        loop = asyncio.get_running_loop()
        start_time = loop.time()
        REQ_IN_FLIGHT.inc()

        served = None
        try:
            raw = await read_message(reader, self.config.buffer_size)
            request = decode_request(raw)
            response = handle_request(request, self.config)

            writer.write(encode_response(response))
            await writer.drain()

            REQ_TOTAL.labels(status=response.status).inc()
            served = (request.method, request.target, response.status, len(response.data))
        except (ConnectionResetError, BrokenPipeError) as e:
            REQ_ERRORS.inc()
            logger.warning(f"Connection to {client} lost: {e}")
        except Exception:
            REQ_ERRORS.inc()
            logger.exception(f"Error processing request from {client}")
        finally:
            duration = loop.time() - start_time
            REQ_IN_FLIGHT.dec()
            REQ_LATENCY.observe(duration)
            if served:
                method, path, status, length = served
                payload = access_log_payload(method, path, status, length, duration, client, request_id)
                logger.info("request served", extra=payload)
            await self._close(writer, client)

    async def _close(self, writer: asyncio.StreamWriter, client: str) -> None:
        writer.close()
        try:
            await writer.wait_closed()
        except (ConnectionResetError, BrokenPipeError) as e:
            logger.debug(f"Error closing connection to {client}: {e}")
