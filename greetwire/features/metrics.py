"""
Prometheus metrics for the greeting server.

Metrics are process-wide. The exporter runs on its own port so the
protocol server keeps its fixed two-route table.
"""

"""
Copyright 2025 Chris Bunting
File: metrics.py | Purpose: Prometheus request metrics
@author Chris Bunting | @version 1.0.0

CHANGELOG:
2025-09-02 - Chris Bunting: Initial implementation
"""

import logging

from prometheus_client import Counter, Gauge, Histogram, start_http_server

logger = logging.getLogger("greetwire.server")

REQ_TOTAL = Counter("greetwire_requests_total", "Total requests served", ["status"])
REQ_ERRORS = Counter("greetwire_request_errors_total", "Connections that failed before a response was sent")
REQ_IN_FLIGHT = Gauge("greetwire_in_flight_requests", "In-flight requests")
REQ_LATENCY = Histogram("greetwire_request_duration_seconds", "Request duration seconds")


def start_metrics_server(port: int, host: str = "127.0.0.1") -> None:
    """Expose the default registry over HTTP on ``host:port``."""
    start_http_server(port, addr=host)
    logger.info("Metrics exporter listening on %s:%s", host, port)
