"""Application configuration using pydantic-settings."""

from dataclasses import dataclass

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from orders_api.services.exceptions import ConfigurationError

DEFAULT_BRANCH = "main"


@dataclass(frozen=True)
class StoreConfig:
    """Immutable document-store coordinates for a single request."""

    token: str
    owner: str
    repo: str
    branch: str
    path: str
    api_url: str
    timeout: float


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=(".env",),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # GitHub contents API - token, owner and repo are required at request time
    github_token: str = ""
    github_owner: str = ""
    github_repo: str = ""
    github_branch: str = DEFAULT_BRANCH
    github_api_url: str = "https://api.github.com"
    github_timeout: float = 30.0

    # Path of the JSON document holding the orders list
    store_data_path: str = "data/store-data.json"

    # Application
    log_level: str = "info"
    # JSON lines instead of console output; unset means "when stdout is not a TTY"
    log_json: bool | None = None

    @field_validator("github_branch", mode="before")
    @classmethod
    def _default_blank_branch(cls, value: object) -> object:
        """Fall back to the default branch when the variable is blank."""
        if value is None:
            return DEFAULT_BRANCH
        if isinstance(value, str):
            return value.strip() or DEFAULT_BRANCH
        return value

    @property
    def missing_store_settings(self) -> list[str]:
        """Names of required environment variables that are unset or empty."""
        required = {
            "GITHUB_TOKEN": self.github_token,
            "GITHUB_OWNER": self.github_owner,
            "GITHUB_REPO": self.github_repo,
        }
        return [name for name, value in required.items() if not value]

    def store_config(self) -> StoreConfig:
        """Build the document-store config.

        Raises:
            ConfigurationError: If any required variable is missing
        """
        missing = self.missing_store_settings
        if missing:
            raise ConfigurationError(missing)

        return StoreConfig(
            token=self.github_token,
            owner=self.github_owner,
            repo=self.github_repo,
            branch=self.github_branch,
            path=self.store_data_path,
            api_url=self.github_api_url.rstrip("/"),
            timeout=self.github_timeout,
        )


settings = Settings()
