"""
Greeting application features: payload, compression, routing and metrics
"""

from .greeting import Greeting, Student, MarshalError
from .compression import compress, decompress, CompressionError
from .router import handle_request, InvalidTarget, RouteNotFound

__all__ = [
    "Greeting", "Student", "MarshalError",
    "compress", "decompress", "CompressionError",
    "handle_request", "InvalidTarget", "RouteNotFound",
]
