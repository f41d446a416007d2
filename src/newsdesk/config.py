"""Application configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field


def _env(key: str, default: str = "") -> str:
    return os.environ.get(key, default)


def _env_bool(key: str, *, default: bool) -> bool:
    raw = _env(key)
    if not raw:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_list(key: str) -> list[str]:
    return [item.strip() for item in _env(key).split(",") if item.strip()]


@dataclass(frozen=True)
class CosmosConfig:
    endpoint: str = field(default_factory=lambda: _env("AZURE_COSMOS_ENDPOINT"))
    key: str = field(default_factory=lambda: _env("AZURE_COSMOS_KEY"))
    database: str = field(default_factory=lambda: _env("AZURE_COSMOS_DATABASE", "newsdesk"))


@dataclass(frozen=True)
class SlackConfig:
    bot_token: str = field(default_factory=lambda: _env("SLACK_BOT_TOKEN"))
    approvals_channel_id: str = field(
        default_factory=lambda: _env("SLACK_APPROVALS_CHANNEL_ID")
    )
    announcements_channel_id: str = field(
        default_factory=lambda: _env("SLACK_ANNOUNCEMENTS_CHANNEL_ID")
    )
    api_url: str = field(default_factory=lambda: _env("SLACK_API_URL", "https://slack.com/api"))


@dataclass(frozen=True)
class CampaignConfig:
    api_key: str = field(default_factory=lambda: _env("PLUNK_API_KEY"))
    api_url: str = field(
        default_factory=lambda: _env("PLUNK_API_URL", "https://api.useplunk.com/v1")
    )
    recipients: list[str] = field(default_factory=lambda: _env_list("NEWSLETTER_RECIPIENTS"))


@dataclass(frozen=True)
class PublishConfig:
    commit_on_failure: bool = field(
        default_factory=lambda: _env_bool("PUBLISH_COMMIT_ON_FAILURE", default=True)
    )


@dataclass(frozen=True)
class AppConfig:
    env: str = field(default_factory=lambda: _env("APP_ENV", "development"))
    log_level: str = field(default_factory=lambda: _env("LOG_LEVEL", "INFO"))

    @property
    def is_development(self) -> bool:
        return self.env == "development"


@dataclass(frozen=True)
class Settings:
    cosmos: CosmosConfig = field(default_factory=CosmosConfig)
    slack: SlackConfig = field(default_factory=SlackConfig)
    campaign: CampaignConfig = field(default_factory=CampaignConfig)
    publish: PublishConfig = field(default_factory=PublishConfig)
    app: AppConfig = field(default_factory=AppConfig)


def load_settings() -> Settings:
    """Build a Settings snapshot from the current environment."""
    return Settings()
