from typing import Literal, NamedTuple, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when a required server-side setting is missing."""


class ClientCredentials(NamedTuple):
    client_id: str
    client_secret: str


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file="../.env", env_file_encoding="utf-8", extra="ignore")

    # Application Configuration
    LOGGING_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    ENVIRONMENT: Literal["LOCAL", "PROD", "TEST"] = "LOCAL"

    # OAuth Provider Configuration
    PROVIDER_URL: str = "https://annict.com"
    CLIENT_ID: Optional[str] = None
    CLIENT_SECRET: Optional[str] = None
    # Not read by the handlers; callers pass redirect_uri with each request
    REDIRECT_URI: Optional[str] = None

    @property
    def TOKEN_URL(self) -> str:
        return f"{self.PROVIDER_URL.rstrip('/')}/oauth/token"

    @property
    def REVOKE_URL(self) -> str:
        return f"{self.PROVIDER_URL.rstrip('/')}/oauth/revoke"

    def credentials(self) -> ClientCredentials:
        if not self.CLIENT_ID:
            raise ConfigurationError("CLIENT_ID is not set")
        if not self.CLIENT_SECRET:
            raise ConfigurationError("CLIENT_SECRET is not set")
        return ClientCredentials(client_id=self.CLIENT_ID, client_secret=self.CLIENT_SECRET)


settings = Settings()


def get_settings() -> Settings:
    return settings
