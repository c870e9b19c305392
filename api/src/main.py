from itertools import chain

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from src.routes.health import router as health_router
from src.routes.token.router import router as token_router
from src.settings import ConfigurationError, settings
from src.utils.logger import logger


async def configuration_error_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
    # Operator misconfiguration; the caller only learns that the server failed
    logger.error(f"Configuration error while handling {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


def get_application() -> FastAPI:
    app = FastAPI(
        title="OAuth token relay",
        docs_url="/docs" if settings.ENVIRONMENT == "LOCAL" else None,
        redoc_url="/redoc" if settings.ENVIRONMENT == "LOCAL" else None,
    )
    logger.info(f"FastAPI application initialising for ENVIRONMENT={settings.ENVIRONMENT}")

    app.add_exception_handler(ConfigurationError, configuration_error_handler)

    # Collect all routes from all routers
    routers = [health_router, token_router]
    routes = list(chain.from_iterable(router.routes for router in routers))
    app.include_router(APIRouter(routes=routes))

    for route in routes:
        if isinstance(route, APIRoute):
            logger.info(f"HTTP Route added: {route.path} - {route.methods}")

    logger.info(f"FastAPI application initialised with {len(routes)} routes")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    return app


application = get_application()
