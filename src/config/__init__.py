"""
Configuration module.

Handles environment variables, store credentials, and OAuth settings.
"""

from src.config.config import (
    APP_ENV,
    DEBUG,
    LOG_LEVEL,
    SECRET_KEY,
    DEFAULT_SECRET_KEY,
    SANITY_PROJECT_ID,
    SANITY_DATASET,
    SANITY_API_VERSION,
    SANITY_USE_CDN,
    SANITY_WRITE_TOKEN,
    EDITOR_PICKS_SLUG,
    GITHUB_CLIENT_ID,
    GITHUB_CLIENT_SECRET,
    REQUEST_TIMEOUT,
    is_production,
    is_development,
    validate_config,
    configure_logging,
    print_config_summary,
)

__all__ = [
    "APP_ENV",
    "DEBUG",
    "LOG_LEVEL",
    "SECRET_KEY",
    "DEFAULT_SECRET_KEY",
    "SANITY_PROJECT_ID",
    "SANITY_DATASET",
    "SANITY_API_VERSION",
    "SANITY_USE_CDN",
    "SANITY_WRITE_TOKEN",
    "EDITOR_PICKS_SLUG",
    "GITHUB_CLIENT_ID",
    "GITHUB_CLIENT_SECRET",
    "REQUEST_TIMEOUT",
    "is_production",
    "is_development",
    "validate_config",
    "configure_logging",
    "print_config_summary",
]
