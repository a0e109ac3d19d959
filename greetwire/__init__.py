from .core import (
    GreetServer, ServerConfig, ClientConfig, Request, Response,
    encode_request, decode_request, encode_response, decode_response,
    read_message, fetch, build_request, FetchError
)
from .features import Greeting, Student, handle_request

__version__ = '1.0.0'

__all__ = [
    # Core components
    'GreetServer',
    'ServerConfig',
    'ClientConfig',
    'Request',
    'Response',

    # Protocol
    'encode_request',
    'decode_request',
    'encode_response',
    'decode_response',
    'read_message',

    # Client
    'fetch',
    'build_request',
    'FetchError',

    # Features
    'Greeting',
    'Student',
    'handle_request',
]
