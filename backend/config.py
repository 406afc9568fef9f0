"""Application configuration via environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # TMDB
    tmdb_api_key: str = ""  # checked per request, not at startup
    tmdb_api_base: str = "https://api.themoviedb.org/3"
    tmdb_image_base: str = "https://image.tmdb.org"
    tmdb_language: str = "en-US"

    # Upstream client
    user_agent: str = "MovieHub-Image-Proxy/1.0"
    upstream_timeout: float = 10.0
    upstream_error_excerpt: int = 500  # max characters of an upstream error body we echo
    strict_image_sizes: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 10000
    cors_allow_origin: str = "*"
    log_level: str = "INFO"

    model_config = {"env_prefix": "", "env_file": ".env", "extra": "ignore", "frozen": True}

    @property
    def tmdb_enabled(self) -> bool:
        return bool(self.tmdb_api_key)


@lru_cache
def get_settings() -> Settings:
    """Load settings once; used as a FastAPI dependency."""
    return Settings()
