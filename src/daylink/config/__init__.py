"""Application configuration helpers."""

from __future__ import annotations

from dataclasses import dataclass

from .env import require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .notion import NOTION_TOKEN_ENV, NotionConfig, get_notion_config
from .reconcile import (
    SOURCE_COLLECTION_ENV,
    TARGET_COLLECTION_ENV,
    CollectionSchema,
    ReconcileConfig,
    get_reconcile_config,
)

REQUIRED_ENV_VARS = (NOTION_TOKEN_ENV, SOURCE_COLLECTION_ENV, TARGET_COLLECTION_ENV)


@dataclass(frozen=True, slots=True)
class AppConfig:
    notion: NotionConfig
    reconcile: ReconcileConfig


def get_app_config() -> AppConfig:
    """Load every setting the job needs, failing before any remote call is made."""

    require_env_vars(REQUIRED_ENV_VARS)
    return AppConfig(notion=get_notion_config(), reconcile=get_reconcile_config())


__all__ = [
    "REQUIRED_ENV_VARS",
    "AppConfig",
    "CollectionSchema",
    "ConfigurationError",
    "MissingConfigurationError",
    "NotionConfig",
    "RateLimit",
    "ReconcileConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "configure_logging",
    "get_app_config",
    "get_notion_config",
    "get_reconcile_config",
    "require_env_var",
    "require_env_vars",
]
