"""Services module for the token relay.

The service resolves client credentials from the injected settings, forwards a single
request to the OAuth provider and validates what comes back. Provider failures are
surfaced as exceptions so the router can map them onto fixed client responses.
"""

import logging

from fastapi import Depends, HTTPException, status
from pydantic import ValidationError
from src.routes.token.schema import RevokeRequest, TokenRequest, TokenResponse
from src.settings import Settings, get_settings
from src.utils.oauth_provider import InvalidResponseBody, OAuthProviderClient

logger = logging.getLogger(__name__)


class InvalidUpstreamResponse(HTTPException):
    def __init__(self) -> None:
        super().__init__(status_code=status.HTTP_502_BAD_GATEWAY, detail="Invalid token response from provider")


async def get_token_service(settings: Settings = Depends(get_settings)) -> "TokenService":
    return TokenService(settings=settings)


class TokenService:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def provider(self) -> OAuthProviderClient:
        # Raises ConfigurationError before any outbound call is made
        credentials = self.settings.credentials()
        return OAuthProviderClient(
            token_url=self.settings.TOKEN_URL,
            revoke_url=self.settings.REVOKE_URL,
            credentials=credentials,
        )

    async def generate(self, data: TokenRequest) -> TokenResponse:
        provider = self.provider()
        try:
            body = await provider.request_token(code=data.code, redirect_uri=data.redirect_uri)
        except InvalidResponseBody as exc:
            logger.error(f"Provider returned a token response that is not JSON: {exc}")
            raise InvalidUpstreamResponse from exc

        try:
            return TokenResponse.model_validate(body)
        except ValidationError as exc:
            logger.error(f"Provider returned a malformed token response: {exc.errors(include_input=False)}")
            raise InvalidUpstreamResponse from exc

    async def revoke(self, data: RevokeRequest) -> None:
        provider = self.provider()
        await provider.revoke_token(token=data.token)
