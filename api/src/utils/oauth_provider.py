"""Client for the upstream OAuth provider.

Each call opens its own aiohttp session and issues exactly one POST. Client
credentials and request values are URL-encoded into the query string, which is
how the provider expects them; no request body is sent.
"""

from typing import Any

import aiohttp
from src.settings import ClientCredentials
from yarl import URL


class UpstreamError(Exception):
    """Raised when the provider answers with a non-success status."""

    def __init__(self, status: int, reason: str | None, url: str, body: Any = None) -> None:
        super().__init__(f"Provider responded with {status} {reason or ''}".strip())
        self.status = status
        self.reason = reason
        self.url = url
        self.body = body


class InvalidResponseBody(Exception):
    """Raised when a successful provider response cannot be decoded as JSON."""


REDACTED_PARAMS = ("client_secret", "token")


def redact_url(url: str) -> str:
    """Mask the client secret and any token in a request URL so it can be logged."""
    parsed = URL(url)
    masked = {name: "***" for name in REDACTED_PARAMS if name in parsed.query}
    if not masked:
        return url
    return str(parsed.update_query(masked))


def is_success(status: int) -> bool:
    return 200 <= status < 300


async def read_body(response: aiohttp.ClientResponse) -> Any:
    """Read a response body as JSON, falling back to text."""
    try:
        return await response.json(content_type=None)
    except ValueError:
        return await response.text(errors="replace")


class OAuthProviderClient:
    def __init__(self, token_url: str, revoke_url: str, credentials: ClientCredentials) -> None:
        self.token_url = token_url
        self.revoke_url = revoke_url
        self.credentials = credentials

    async def request_token(self, code: str, redirect_uri: str) -> Any:
        """Exchange an authorization code and return the decoded response body."""
        params = {
            "client_id": self.credentials.client_id,
            "client_secret": self.credentials.client_secret,
            "grant_type": "authorization_code",
            "redirect_uri": redirect_uri,
            "code": code,
        }
        async with aiohttp.ClientSession() as session:
            async with session.post(self.token_url, params=params) as response:
                if not is_success(response.status):
                    raise UpstreamError(
                        status=response.status,
                        reason=response.reason,
                        url=redact_url(str(response.url)),
                        body=await read_body(response),
                    )
                try:
                    return await response.json(content_type=None)
                except ValueError as exc:
                    raise InvalidResponseBody(f"Provider returned a non-JSON body with status {response.status}") from exc

    async def revoke_token(self, token: str) -> None:
        params = {
            "client_id": self.credentials.client_id,
            "client_secret": self.credentials.client_secret,
            "token": token,
        }
        headers = {"Authorization": f"Bearer {token}"}
        async with aiohttp.ClientSession() as session:
            async with session.post(self.revoke_url, params=params, headers=headers) as response:
                if not is_success(response.status):
                    raise UpstreamError(
                        status=response.status,
                        reason=response.reason,
                        url=redact_url(str(response.url)),
                    )
