"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings

from indexer.utils.constants import (
    ADD_AUTH_METHOD_EVENT,
    CREATE_ACCOUNT_EVENT,
    REMOVE_AUTH_METHOD_EVENT,
)


class Settings(BaseSettings):
    database_url: str = "sqlite:///./smart_accounts.db"
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:5173"]

    # Chain event types routed to the smart account handlers
    instantiate_event_type: str = CREATE_ACCOUNT_EVENT
    add_event_type: str = ADD_AUTH_METHOD_EVENT
    remove_event_type: str = REMOVE_AUTH_METHOD_EVENT

    model_config = {"env_prefix": "SAI_", "env_file": ".env"}


settings = Settings()
