import logging

import google.cloud.logging
from src.settings import settings

# Parent of every module logger in the relay, e.g. src.routes.token.router
logger = logging.getLogger("src")
level = getattr(logging, settings.LOGGING_LEVEL)

if settings.ENVIRONMENT == "PROD":
    # Ship records to Google Cloud Logging through a handler on the root logger
    google.cloud.logging.Client().setup_logging(log_level=level)
else:
    # Use basic logging for local development and tests
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

logger.setLevel(level)
