"""Ephemeral HTTP server for a test page and its build artifacts."""

import asyncio
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from aiohttp import web

from browser_test_runner.server.resolver import AssetResolver

log = logging.getLogger(__name__)


class AssetServer:
    """Serves files through an AssetResolver on a kernel-assigned loopback port.

    Requests are answered in full (no range support). Anything that cannot be
    read becomes a 404 naming the attempted path.
    """

    def __init__(self, resolver: AssetResolver, host: str = "127.0.0.1") -> None:
        self.resolver = resolver
        self.host = host
        self._runner: web.AppRunner | None = None
        self._port: int | None = None

    @property
    def running(self) -> bool:
        """Whether the server currently holds a bound port."""
        return self._port is not None

    @property
    def port(self) -> int:
        """Bound port, only available while running."""
        if self._port is None:
            raise RuntimeError("Asset server is not running")
        return self._port

    @property
    def base_url(self) -> str:
        """Root URL of the server."""
        return f"http://{self.host}:{self.port}"

    def url_for(self, path: str) -> str:
        """Build the URL for a path relative to the server root."""
        return f"{self.base_url}/{path.lstrip('/')}"

    async def handle(self, request: web.Request) -> web.Response:
        """Serve one file resolved from the request path."""
        asset = self.resolver.resolve(request.path)

        if asset.found:
            try:
                body = await asyncio.to_thread(asset.file_path.read_bytes)
            except OSError as err:
                log.debug("Failed reading %s: %s", asset.file_path, err)
            else:
                log.debug("200 %s -> %s", request.path, asset.file_path)
                return web.Response(body=body, content_type=asset.content_type)

        log.debug("404 %s -> %s", request.path, asset.file_path)
        return web.Response(status=404, text=f"Not found: {asset.file_path}")

    async def start(self) -> int:
        """Bind the server and return the port it listens on."""
        if self._port is not None:
            return self._port

        app = web.Application()
        app.router.add_get("/{tail:.*}", self.handle)

        runner = web.AppRunner(app, access_log=None)
        await runner.setup()
        self._runner = runner

        site = web.TCPSite(runner, self.host, 0)
        await site.start()

        self._port = runner.addresses[0][1]
        return self._port

    async def stop(self) -> None:
        """Close all connections and release the port. Safe to call repeatedly."""
        runner, self._runner = self._runner, None
        self._port = None
        if runner is None:
            return

        await runner.cleanup()
        log.debug("Asset server stopped")


@asynccontextmanager
async def serve_assets(
    resolver: AssetResolver, host: str = "127.0.0.1"
) -> AsyncGenerator[AssetServer, None]:
    """Run an AssetServer for the duration of the context."""
    server = AssetServer(resolver, host=host)
    try:
        await server.start()
        log.info("Serving test assets at %s", server.base_url)
        yield server
    finally:
        await server.stop()
