"""
Configuration records passed into the transport drivers at startup.
"""

from dataclasses import dataclass
from typing import Optional

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 6636
DEFAULT_BUFFER_SIZE = 2048
DEFAULT_STUDENT_NAME = "Muhammad Raihan Maulana"
DEFAULT_STUDENT_ID = "2306216636"


def _validate_port(port, label: str = "Port") -> None:
    if not isinstance(port, int) or isinstance(port, bool):
        raise ValueError(f"{label} must be an integer")
    if port < 0 or port > 65535:
        raise ValueError(f"{label} number must be between 0 and 65535")


def _validate_buffer_size(buffer_size) -> None:
    if not isinstance(buffer_size, int) or isinstance(buffer_size, bool):
        raise ValueError("Buffer size must be an integer")
    if buffer_size < 1:
        raise ValueError("Buffer size must be at least 1")


@dataclass(frozen=True)
class ServerConfig:
    """Server settings.

    Attributes:
        host: Address to listen on
        port: Port to listen on (0 picks a free port)
        buffer_size: Bytes requested per socket read
        student_name: Default greeter and name in the greeting payload
        student_id: Identity accepted by ``/greet/<id>``
        backlog: Listen backlog
        metrics_port: Port for the Prometheus exporter, disabled when None
    """
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    buffer_size: int = DEFAULT_BUFFER_SIZE
    student_name: str = DEFAULT_STUDENT_NAME
    student_id: str = DEFAULT_STUDENT_ID
    backlog: int = 2048
    metrics_port: Optional[int] = None

    def __post_init__(self):
        _validate_port(self.port)
        _validate_buffer_size(self.buffer_size)
        if not isinstance(self.backlog, int) or self.backlog < 1:
            raise ValueError("Backlog must be at least 1")
        if not self.student_name:
            raise ValueError("Student name must not be empty")
        if not self.student_id or "/" in self.student_id:
            raise ValueError("Student id must be a non-empty path segment")
        if self.metrics_port is not None:
            _validate_port(self.metrics_port, "Metrics port")


@dataclass(frozen=True)
class ClientConfig:
    """Client settings."""
    buffer_size: int = DEFAULT_BUFFER_SIZE

    def __post_init__(self):
        _validate_buffer_size(self.buffer_size)
