from __future__ import annotations

import contextlib
import socket
import threading
import time
from dataclasses import dataclass

import uvicorn

from ..core.configuration import ConfigurationSource
from ..core.log import get_logger
from ..core.settings import ProviderSettings
from ..sdk.client import ConformanceClient


logger = get_logger(__name__)


@dataclass(frozen=True)
class ConformanceServer:
    host: str
    port: int
    url: str

    def client(self) -> ConformanceClient:
        return ConformanceClient(self.url.rstrip("/"))


def _find_free_port(host: str) -> int:
    with contextlib.closing(socket.socket(socket.AF_INET, socket.SOCK_STREAM)) as s:
        s.bind((host, 0))
        return int(s.getsockname()[1])


def run(
    configuration: ConfigurationSource | None = None,
    *,
    host: str = "127.0.0.1",
    port: int = 0,
    settings: ProviderSettings | None = None,
    log_level: str = "info",
    access_log: bool = False,
) -> ConformanceServer:
    """Serve the metadata endpoints in a background thread.

    `port=0` picks a free port. Without a configuration the demo registry is served.
    """

    from .app import create_app

    if port == 0:
        port = _find_free_port(host)

    app = create_app(configuration, settings=settings)

    config = uvicorn.Config(app, host=host, port=port, log_level=log_level, access_log=access_log)
    server = uvicorn.Server(config)

    thread = threading.Thread(target=server.run, daemon=True)
    thread.start()

    # Give it a moment so a subsequent client probe doesn't race with startup.
    time.sleep(0.05)

    url = f"http://{host}:{port}/"
    logger.info("Serving conformance statement at %smetadata", url)
    return ConformanceServer(host=host, port=port, url=url)
