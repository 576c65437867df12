import logging
from functools import lru_cache

from pydantic import ValidationError
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    webhook_token: str = ""
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    # An empty WEBHOOK_TOKEN in the environment falls through to .env
    model_config = {"env_file": ".env", "extra": "ignore", "env_ignore_empty": True}

    @property
    def validation_enabled(self) -> bool:
        return bool(self.webhook_token)


def load_settings(**kwargs) -> Settings:
    """Resolve settings, degrading to an open policy if loading fails."""
    try:
        return Settings(**kwargs)
    except (ValidationError, OSError, UnicodeDecodeError) as e:
        logger.warning(f"Error loading settings, webhook token validation disabled: {e}")
        return Settings.model_construct(webhook_token="")


@lru_cache
def get_settings() -> Settings:
    return load_settings()
