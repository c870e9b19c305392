from collections.abc import AsyncGenerator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer
from dotenv import load_dotenv
from httpx import ASGITransport, AsyncClient

TEST_CLIENT_ID = "test-client-id"
TEST_CLIENT_SECRET = "test-client-secret"


def pytest_configure(config):
    """Pytest hook that runs before test collection.
    We use this to load our test environment variables.
    This runs in the same Python session as the tests,
    before any test modules or fixtures are imported.
    """
    print("\n------------ Loading test environment ------------")
    test_env_path = Path(__file__).parent / "test.env"
    if not load_dotenv(str(test_env_path), override=True):
        raise RuntimeError(
            f"Failed to load test environment variables from {test_env_path}",
        )
    print(f"Test environment loaded from {test_env_path}")
    print("--------------------------------------------------\n")


@dataclass
class RecordedRequest:
    method: str
    path: str
    query: list[tuple[str, str]]
    headers: dict[str, str]
    body: bytes


@dataclass
class FakeProvider:
    """In-process stand-in for the OAuth provider that records every call."""

    server: TestServer | None = None
    requests: list[RecordedRequest] = field(default_factory=list)
    responses: dict[str, tuple[int, Any]] = field(default_factory=dict)

    @property
    def url(self) -> str:
        return str(self.server.make_url("")).rstrip("/")

    def respond(self, path: str, status: int = 200, body: Any = None) -> None:
        self.responses[path] = (status, body)

    def calls(self, path: str) -> list[RecordedRequest]:
        return [request for request in self.requests if request.path == path]

    async def handle(self, request: web.Request) -> web.Response:
        self.requests.append(
            RecordedRequest(
                method=request.method,
                path=request.path,
                query=list(request.query.items()),
                headers=dict(request.headers),
                body=await request.read(),
            )
        )
        status, body = self.responses.get(request.path, (200, None))
        if body is None:
            return web.Response(status=status)
        if isinstance(body, bytes):
            return web.Response(status=status, body=body, content_type="application/octet-stream")
        if isinstance(body, str):
            return web.Response(status=status, text=body)
        return web.json_response(body, status=status)


@pytest_asyncio.fixture
async def provider() -> AsyncGenerator[FakeProvider, None]:
    fake = FakeProvider()
    app = web.Application()
    app.router.add_post("/oauth/token", fake.handle)
    app.router.add_post("/oauth/revoke", fake.handle)
    fake.server = TestServer(app)
    await fake.server.start_server()
    yield fake
    await fake.server.close()


@pytest_asyncio.fixture
async def relay_settings(provider: FakeProvider):
    from src.settings import Settings

    return Settings(
        _env_file=None,
        PROVIDER_URL=provider.url,
        CLIENT_ID=TEST_CLIENT_ID,
        CLIENT_SECRET=TEST_CLIENT_SECRET,
    )


@pytest_asyncio.fixture
async def client(relay_settings) -> AsyncGenerator[AsyncClient, None]:
    from src.main import application
    from src.settings import get_settings

    # Replace the settings that are injected into the handlers
    def get_settings_override():
        return relay_settings

    application.dependency_overrides[get_settings] = get_settings_override
    async with AsyncClient(transport=ASGITransport(app=application), base_url="http://test") as client:
        yield client
    application.dependency_overrides.clear()
