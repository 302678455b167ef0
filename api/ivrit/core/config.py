from pydantic_settings import BaseSettings
from dotenv import load_dotenv
from pathlib import Path
import logging
import os

_logger = logging.getLogger(__name__)

# Look for .env in api directory (parent of the ivrit package)
api_dir = Path(__file__).parent.parent.parent
env_path = api_dir / ".env"

if env_path.exists():
    load_dotenv(env_path, override=False)
    _logger.info(f"Loaded .env file from: {env_path}")
else:
    current_env = Path(".env")
    if current_env.exists():
        load_dotenv(current_env, override=False)
        _logger.info(f"Loaded .env file from: {current_env.absolute()}")
    else:
        _logger.debug(f".env file not found at {env_path} or {current_env.absolute()}")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database - hosting platforms usually provide DATABASE_URL (uppercase)
    database_url: str = ""

    # API
    api_v1_prefix: str = "/api/v1"

    # CORS
    cors_origins: list[str] = ["*"]

    # Logging
    log_level: str = "INFO"

    # External reward ledger (token settlement). Empty URL disables settlement.
    reward_ledger_url: str = ""
    reward_ledger_api_key: str = ""
    reward_ledger_timeout_seconds: float = 10.0

    # Review session defaults
    default_due_limit: int = 20
    default_new_limit: int = 5

    # Hebrew level progression: one level per this many cards started
    cards_per_level: int = 50

    class Config:
        env_file = ".env"
        case_sensitive = False

    def __init__(self, **kwargs):
        # Ensure we read DATABASE_URL from environment even when only the uppercase form is set
        if not kwargs.get("database_url"):
            kwargs["database_url"] = os.getenv("DATABASE_URL", "")
        if not kwargs.get("reward_ledger_url"):
            kwargs["reward_ledger_url"] = os.getenv("REWARD_LEDGER_URL", "")
        if not kwargs.get("reward_ledger_api_key"):
            kwargs["reward_ledger_api_key"] = os.getenv("REWARD_LEDGER_API_KEY", "")
        super().__init__(**kwargs)


# Create settings instance
settings = Settings()

# Validate required DATABASE_URL
if not settings.database_url:
    raise ValueError("DATABASE_URL environment variable is required")
