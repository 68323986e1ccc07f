"""
Configuration management for the fulfillment server.
Supports environment variables and config files.
"""
import os
from typing import Dict, Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # Fulfillment endpoint registered with the Smart Home Actions console
    fulfillment_path: str = "/fulfillment"

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    # Access token validation.
    # When auth_domain is set, tokens are checked against https://<auth_domain>/userinfo,
    # otherwise the static access_tokens map (token -> agent user id) is used.
    auth_domain: Optional[str] = os.getenv("AUTH_DOMAIN", None)
    access_tokens: Dict[str, str] = {}
    # Validated userinfo tokens are remembered for this long, up to token_cache_size entries
    token_cache_ttl: float = float(os.getenv("TOKEN_CACHE_TTL", 3600.0))
    token_cache_size: int = int(os.getenv("TOKEN_CACHE_SIZE", 1024))

    # HomeGraph (report state / request sync)
    homegraph_url: str = os.getenv("HOMEGRAPH_URL", "https://homegraph.googleapis.com")
    homegraph_token: Optional[str] = os.getenv("HOMEGRAPH_TOKEN", None)

    # Outbound HTTP
    http_timeout: float = float(os.getenv("HTTP_TIMEOUT", 10.0))

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
