#!/usr/bin/env python3
"""Run a server and one client exchange in a single process"""

import asyncio
import sys
from pathlib import Path

# Add the project root to the Python path if needed
project_root = Path(__file__).parent.parent.absolute()
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from greetwire.core import GreetServer, ServerConfig, build_request, fetch
from greetwire.core.client import describe_response
from greetwire.core.server_utils import configure_logging


async def demo():
    server = GreetServer(ServerConfig(port=0))
    await server.start()
    host, port = server.address
    try:
        for accept, encoding in (("application/json", "none"), ("application/xml", "gzip")):
            url = f"http://{host}:{port}/greet/{server.config.student_id}?name=Ada"
            request, _, _ = build_request(url, accept, encoding)
            response = await fetch(request, host, port)
            print("\n".join(describe_response(response)))
            print()
    finally:
        await server.shutdown()


if __name__ == '__main__':
    configure_logging()
    asyncio.run(demo())
