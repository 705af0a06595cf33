"""
Status API server entry point.
"""
import logging
import os
import socket
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import get_config
from core import ServerInfo, TaskRegistry
from core.models import utc_now_iso
from core.tasks import delete_server_info, write_server_info
from server import app, set_event_bus, set_task_source
from server.app import API_VERSION
from server.event_bus import SSEEventBus, get_event_bus
from server.logging_config import log_timing, setup_logging

# Initialize logging before anything else
setup_logging()
logger = logging.getLogger(__name__)

_bound_port: int | None = None


def find_available_port(host: str, port: int, retries: int) -> int:
    """
    First bindable port in ``port .. port + retries``.

    Falls back to 0 so the OS assigns a free port.
    """
    for candidate in range(port, port + retries + 1):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            try:
                sock.bind((host, candidate))
            except OSError:
                logger.debug("Port %d unavailable", candidate)
                continue
            return candidate
    logger.warning("No free port in %d-%d, using an OS-assigned port", port, port + retries)
    return 0


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load persisted tasks and advertise the server in server.json."""
    config = get_config()
    storage_dir = config.resolved_storage_dir()

    logger.info("Starting status API")
    logger.info("Storage directory: %s", storage_dir)

    set_event_bus(SSEEventBus(config.api.max_sse_subscribers))
    registry = TaskRegistry(storage_dir, event_bus=get_event_bus())
    with log_timing(logger, "Load persisted tasks", logging.INFO):
        registry.load()
    set_task_source(registry)

    if _bound_port:
        info = ServerInfo(
            port=_bound_port,
            pid=os.getpid(),
            startedAt=utc_now_iso(),
            url=f"http://{config.api.host}:{_bound_port}",
            version=API_VERSION,
        )
        try:
            write_server_info(info, storage_dir)
        except OSError as e:
            logger.warning("Could not write server info: %s", e)

    yield

    delete_server_info(storage_dir)
    logger.info("Status API stopped")


app.router.lifespan_context = lifespan


def main() -> None:
    """Start the status API."""
    global _bound_port

    api = get_config().api
    if not api.enabled:
        logger.info("Status API disabled by configuration")
        return

    _bound_port = find_available_port(api.host, api.port, api.max_port_retry)
    logger.info("Server listening on %s:%d", api.host, _bound_port)
    uvicorn.run(app, host=api.host, port=_bound_port)


if __name__ == "__main__":
    main()
