from pydantic import Field
from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings."""

    # Database
    DATABASE_URL: str = "sqlite:///./savings_circle.db"
    AUTO_CREATE_TABLES: bool = True

    # Development settings
    DEBUG: bool = False
    CORS_ORIGINS: list[str] = ["http://localhost:3000"]  # Next.js dev server

    # Ledger gateway that signs and broadcasts group creation calls
    LEDGER_API_URL: str = "http://localhost:8545/api"
    LEDGER_API_KEY: Optional[str] = Field(
        default=None, description="Bearer token for the ledger gateway"
    )
    LEDGER_TIMEOUT_SECONDS: float = 30.0

    # Redirect to the group listing after a successful creation
    REDIRECT_DELAY_MS: int = 2000
    GROUPS_LISTING_PATH: str = "/groups"

    # Drafts untouched for this long are treated as abandoned
    DRAFT_TTL_MINUTES: int = 60

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
