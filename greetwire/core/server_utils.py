"""
Utility functions for server and client operation.

This module provides:
- Structured JSON logging setup
- Event loop setup with uvloop
- Server kwargs for asyncio.start_server
- Access log payloads
"""

import sys
import socket
import asyncio
import logging
from typing import Dict, Any, Optional

from pythonjsonlogger.json import JsonFormatter

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

# Try to import uvloop for better performance on Linux/macOS
try:
    import uvloop

    UVLOOP_AVAILABLE = True
except ImportError:
    UVLOOP_AVAILABLE = False


class ServerConfigError(Exception):
    """Raised when the event loop or listening socket cannot be set up"""

    pass


def configure_logging(name: str = "greetwire", level=logging.INFO,
                      log_file: Optional[str] = None) -> logging.Logger:
    """Configure JSON logging for a greetwire logger.

    Args:
        name: Logger name; child loggers propagate to it
        level: Logging level (default: INFO)
        log_file: Optional path to log file

    Returns:
        Configured logger instance

    Calling this more than once does not stack handlers.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    if logger.handlers:
        return logger

    formatter = JsonFormatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


logger = logging.getLogger("greetwire.utils")


def setup_uvloop() -> None:
    """Configure uvloop for improved event loop performance.

    Raises:
        ServerConfigError: If uvloop is installed but cannot be set up

    Falls back to the default asyncio loop on Windows or when uvloop is
    not installed.
    """
    if not UVLOOP_AVAILABLE or sys.platform == "win32":
        logger.info("uvloop not available, using default event loop")
        return
    try:
        asyncio.set_event_loop_policy(uvloop.EventLoopPolicy())
        logger.info("Using uvloop event loop")
    except Exception as e:
        logger.error(f"Failed to setup uvloop: {e}")
        raise ServerConfigError("Failed to initialize event loop") from e


def get_server_kwargs(backlog: int = 2048) -> Dict[str, Any]:
    """Get asyncio.start_server arguments for the listening socket."""
    kwargs: Dict[str, Any] = {
        "reuse_address": True,
        "backlog": backlog,
        "start_serving": True,
    }
    return kwargs


def configure_client_socket(writer: asyncio.StreamWriter) -> None:
    """Disable Nagle on an accepted or connected stream."""
    sock = writer.get_extra_info("socket")
    if sock is not None:
        try:
            sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
        except OSError as e:
            logger.warning(f"Failed to set TCP_NODELAY: {e}")


def access_log_payload(method: str, path: str, status: str, length: int,
                       duration: float, client: str, request_id: str) -> Dict[str, Any]:
    return {
        "method": method,
        "path": path,
        "status": status,
        "length": length,
        "duration_s": round(duration, 6),
        "client": client,
        "request_id": request_id,
    }
