"""Application settings.

Protean's own configuration (databases, brokers, event store) lives in
``pyproject.toml`` under ``[tool.protean]``. Behaviour switches that belong
to the storefront itself are read from the environment here.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="STOREFRONT_", env_file=".env", extra="ignore")

    # Empty the user's cart in the same unit of work that places the checkout
    clear_cart_on_checkout: bool = False
    # Reject checkout status changes that the state machine does not allow
    enforce_status_transitions: bool = True

    session_secret: str = "storefront-dev-secret"
    session_cookie: str = "storefront_session"
    cors_origins: list[str] = ["http://localhost:5173"]

    # Directory for rotating log files; empty keeps logging on the console
    log_dir: str = "logs"


@lru_cache
def get_settings() -> Settings:
    return Settings()
