"""
Asynchronous greeting server.

This module implements the server transport driver:
- Unbounded accept loop on asyncio.start_server
- One independent task per accepted connection
- Graceful shutdown on SIGINT/SIGTERM
- Optional Prometheus exporter
"""

import asyncio
import logging
import signal
import sys
from typing import Optional, Set, Tuple

from .config import ServerConfig
from .request_handler import GreetHandler
from .server_utils import setup_uvloop, get_server_kwargs, configure_client_socket, configure_logging, ServerConfigError
from ..features.metrics import start_metrics_server

logger = logging.getLogger("greetwire.server")


class GreetServer:
    """Raw-socket HTTP server for the greeting routes.

    Attributes:
        config: Server configuration
        handler: Per-connection request handler
    """

    def __init__(self, config: Optional[ServerConfig] = None):
        self.config = config or ServerConfig()
        self.handler = GreetHandler(self.config)
        self._server: Optional[asyncio.AbstractServer] = None
        self._shutdown_event: Optional[asyncio.Event] = None
        self._active_connections: Set[asyncio.Task] = set()

    @property
    def address(self) -> Tuple[str, int]:
        """The bound (host, port); useful when configured with port 0."""
        if self._server and self._server.sockets:
            sockname = self._server.sockets[0].getsockname()
            return sockname[0], sockname[1]
        return self.config.host, self.config.port

    async def start(self) -> asyncio.AbstractServer:
        """Bind the listening socket and start accepting connections.

        Raises:
            ServerConfigError: If the server cannot bind to host/port
        """
        self._shutdown_event = asyncio.Event()
        try:
            self._server = await asyncio.start_server(
                self.handle_client,
                self.config.host,
                self.config.port,
                **get_server_kwargs(self.config.backlog)
            )
        except OSError as e:
            logger.error(f"Error starting server: {e}")
            raise ServerConfigError(f"Cannot listen on {self.config.host}:{self.config.port}") from e

        host, port = self.address
        logger.info("Server listening on %s:%s", host, port)

        if self.config.metrics_port is not None:
            start_metrics_server(self.config.metrics_port, self.config.host)
        return self._server

    async def serve_forever(self) -> None:
        """Serve until a shutdown is requested."""
        await self.start()
        self._install_signal_handlers()
        try:
            await self._shutdown_event.wait()
        finally:
            await self.shutdown()

    def _install_signal_handlers(self) -> None:
        if sys.platform == "win32":
            return
        loop = asyncio.get_running_loop()

        def _handle_signal():
            logger.info("Shutdown signal received, initiating graceful shutdown")
            self._shutdown_event.set()

        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, _handle_signal)

    async def shutdown(self, timeout: float = 30.0) -> None:
        """Stop accepting connections and wait for in-flight ones.

        Args:
            timeout: Seconds to wait before cancelling stuck connections
        """
        if self._shutdown_event is not None:
            self._shutdown_event.set()

        server, self._server = self._server, None
        if server is not None:
            server.close()
            logger.info("Server stopped accepting new connections")

        if self._active_connections:
            logger.info(f"Waiting for {len(self._active_connections)} active connections to complete...")
            _, pending = await asyncio.wait(list(self._active_connections), timeout=timeout)
            if pending:
                logger.warning(f"Force closing {len(pending)} connections that didn't complete in time")
                for task in pending:
                    task.cancel()
                await asyncio.wait(pending)

        if server is not None:
            await server.wait_closed()
            logger.info("Server shutdown complete")

    async def handle_client(self,
                            reader: asyncio.StreamReader,
                            writer: asyncio.StreamWriter) -> None:
        """Run one connection's exchange as its own task."""
        configure_client_socket(writer)
        task = asyncio.current_task()
        if task:
            self._active_connections.add(task)
        try:
            await self.handler.handle_request(reader, writer)
        finally:
            if task:
                self._active_connections.discard(task)

    def run(self) -> None:
        """Run the server on a fresh event loop until interrupted."""
        setup_uvloop()
        try:
            asyncio.run(self.serve_forever())
        except KeyboardInterrupt:
            logger.info("Server interrupted")


def main() -> None:
    configure_logging()
    GreetServer(ServerConfig()).run()


if __name__ == "__main__":
    main()
