"""
Core protocol components
"""

from .message import Request, Response, build_response
from .framer import MessageFramer, read_message
from .codec import encode_request, decode_request, encode_response, decode_response
from .negotiator import negotiate_content_type, negotiate_encoding
from .config import ServerConfig, ClientConfig
from .server_core import GreetServer
from .client import fetch, build_request, FetchError

# Expose public interface
__all__ = [
    "Request", "Response", "build_response",
    "MessageFramer", "read_message",
    "encode_request", "decode_request", "encode_response", "decode_response",
    "negotiate_content_type", "negotiate_encoding",
    "ServerConfig", "ClientConfig",
    "GreetServer",
    "fetch", "build_request", "FetchError",
]
