"""Notion API configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import require_env_vars
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

NOTION_BASE_URL = "https://api.notion.com/v1/"
NOTION_API_VERSION = "2022-06-28"
NOTION_TIMEOUT_SECONDS = 30.0

NOTION_TOKEN_ENV = "NOTION_TOKEN"  # noqa: S105


@dataclass(frozen=True, slots=True)
class NotionConfig:
    """Holds Notion API configuration values."""

    token: str
    resilience: ResilienceConfig


def default_notion_resilience(token: str) -> ResilienceConfig:
    return ResilienceConfig(
        name="notion",
        base_url=NOTION_BASE_URL,
        timeout_seconds=NOTION_TIMEOUT_SECONDS,
        ratelimit=RateLimit(max_calls=3, per_seconds=1.0),
        retry=RetryPolicy(total=3),
        default_headers={
            "Authorization": f"Bearer {token}",
            "Notion-Version": NOTION_API_VERSION,
            "Content-Type": "application/json",
        },
    )


def get_notion_config(*, resilience: ResilienceConfig | None = None) -> NotionConfig:
    values = require_env_vars((NOTION_TOKEN_ENV,))
    token = values[NOTION_TOKEN_ENV]
    return NotionConfig(
        token=token,
        resilience=resilience or default_notion_resilience(token),
    )
