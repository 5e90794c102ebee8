"""Shared fixtures: a fake flowcontrol device served by aiohttp."""

from __future__ import annotations

import asyncio
import socket

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from flowcontrol import AdapterConfig, FlowControlAdapter, MemoryStateStore


class FakeDevice:
    """Answers /alive and /cmd like the real controller."""

    def __init__(self) -> None:
        self.status: dict = {"alive": 3, "valve": "closed"}
        self.raw_body: bytes | None = None
        self.delay = 0.0
        self.requests: list[str] = []
        self.server = ""

    def _record(self, request: web.Request) -> None:
        if request.query_string:
            self.requests.append(f"{request.path}?{request.query_string}")
        else:
            self.requests.append(request.path)

    def count(self, path: str) -> int:
        return self.requests.count(path)

    async def alive(self, request: web.Request) -> web.Response:
        self._record(request)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.raw_body is not None:
            return web.Response(body=self.raw_body)
        return web.json_response(self.status)

    async def cmd(self, request: web.Request) -> web.Response:
        self._record(request)
        return web.Response(text="ok")

    async def broken(self, request: web.Request) -> web.Response:
        self._record(request)
        return web.Response(status=500, text="boom")


@pytest_asyncio.fixture
async def device():
    """Start a fake device on a local port."""
    fake = FakeDevice()
    app = web.Application()
    app.router.add_get("/alive", fake.alive)
    app.router.add_get("/cmd", fake.cmd)
    app.router.add_get("/broken", fake.broken)
    server = TestServer(app)
    await server.start_server()
    fake.server = f"{server.host}:{server.port}"
    yield fake
    await server.close()


@pytest.fixture
def unreachable_server() -> str:
    """Address of a local port nothing listens on."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"127.0.0.1:{port}"


@pytest_asyncio.fixture
async def make_adapter():
    """Build adapters on a fresh MemoryStateStore and unload them afterwards."""
    adapters: list[FlowControlAdapter] = []

    def _make(server: str | None, **kwargs) -> FlowControlAdapter:
        adapter = FlowControlAdapter(AdapterConfig(server=server, **kwargs), MemoryStateStore())
        adapters.append(adapter)
        return adapter

    yield _make

    for adapter in adapters:
        await adapter.on_unload(lambda: None)
