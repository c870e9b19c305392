"""Router module for the token relay endpoints.

Query parameters are validated before any handler logic runs. Provider failures are
logged and mapped onto a fixed 400 response so upstream details never reach the caller.
"""

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from src.routes.token.schema import MessageOutput, RevokeRequest, TokenRequest, TokenResponse
from src.routes.token.service import TokenService, get_token_service
from src.utils.oauth_provider import UpstreamError

router = APIRouter()
logger = logging.getLogger(__name__)


def get_token_request(
    code: str = Query(min_length=1),
    redirect_uri: str = Query(min_length=1),
) -> TokenRequest:
    return TokenRequest(code=code, redirect_uri=redirect_uri)


def get_revoke_request(token: str = Query(min_length=1)) -> RevokeRequest:
    return RevokeRequest(token=token)


def failure(message: str) -> JSONResponse:
    return JSONResponse(status_code=400, content=MessageOutput(message=message).model_dump())


@router.get("/token", response_model=TokenResponse, responses={400: {"model": MessageOutput}})
async def generate_token(
    params: TokenRequest = Depends(get_token_request),
    token_service: TokenService = Depends(get_token_service),
) -> TokenResponse | JSONResponse:
    """Exchange an authorization code for an access token."""
    try:
        return await token_service.generate(params)
    except UpstreamError as exc:
        logger.error(f"Token request failed with status {exc.status}: {exc.body}")
        return failure("Failed to generate token")


@router.delete("/token", response_model=MessageOutput, responses={400: {"model": MessageOutput}})
async def revoke_token(
    params: RevokeRequest = Depends(get_revoke_request),
    token_service: TokenService = Depends(get_token_service),
) -> MessageOutput | JSONResponse:
    """Revoke an access token."""
    try:
        await token_service.revoke(params)
    except UpstreamError as exc:
        logger.error(f"Token revocation failed: {exc.status} {exc.reason} ({exc.url})")
        return failure("Failed to revoke token")
    return MessageOutput(message="Token revoked")
