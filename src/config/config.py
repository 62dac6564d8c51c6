"""
Configuration module for Pitch Board.

Loads environment variables from .env file and exposes them as typed configuration values.
Uses python-dotenv for loading and provides safe defaults where appropriate.
"""

import logging
import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file from project root
# The .env file should be in the root directory (parent of src/)
_project_root = Path(__file__).parent.parent.parent
_env_path = _project_root / ".env"
load_dotenv(_env_path)


# =============================================================================
# Application Environment
# =============================================================================

# Application environment: "development", "staging", or "production"
# Default: "development" for safe local testing
APP_ENV: str = os.getenv("APP_ENV", "development")

# Enable Flask debug mode (only in development)
DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

# Root log level name (DEBUG, INFO, WARNING, ...)
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# Key used to sign the session cookie that carries the auth token
DEFAULT_SECRET_KEY = "dev-secret-change-me"
SECRET_KEY: str = os.getenv("SECRET_KEY", DEFAULT_SECRET_KEY)


# =============================================================================
# Sanity Content Store Configuration
# =============================================================================

# Sanity project ID; empty means the site has no content store
SANITY_PROJECT_ID: str = os.getenv("SANITY_PROJECT_ID", "")

# Dataset holding authors, startups and playlists
SANITY_DATASET: str = os.getenv("SANITY_DATASET", "production")

# API version date, sent as /v<date>/ in every request path
SANITY_API_VERSION: str = os.getenv("SANITY_API_VERSION", "2024-10-14")

# Serve listing/detail reads from the API CDN
SANITY_USE_CDN: bool = os.getenv("SANITY_USE_CDN", "true").lower() == "true"

# Token with write access, used for author creation and view counting
SANITY_WRITE_TOKEN: str = os.getenv("SANITY_WRITE_TOKEN", "")

# Slug of the curated playlist shown next to every startup
EDITOR_PICKS_SLUG: str = os.getenv("EDITOR_PICKS_SLUG", "editor-picks")


# =============================================================================
# GitHub OAuth Configuration
# =============================================================================

GITHUB_CLIENT_ID: str = os.getenv("GITHUB_CLIENT_ID", "")
GITHUB_CLIENT_SECRET: str = os.getenv("GITHUB_CLIENT_SECRET", "")


# =============================================================================
# HTTP Configuration
# =============================================================================

# HTTP request timeout in seconds for store and OAuth calls
# Default: 10 seconds - page renders wait on these requests
REQUEST_TIMEOUT: int = int(os.getenv("REQUEST_TIMEOUT", "10"))


# =============================================================================
# Helper Functions
# =============================================================================

def is_production() -> bool:
    """Check if running in production environment."""
    return APP_ENV == "production"


def is_development() -> bool:
    """Check if running in development environment."""
    return APP_ENV == "development"


def validate_config() -> list[str]:
    """
    Validate that required configuration is present for production.

    Returns:
        List of missing or invalid configuration keys (empty if all valid).
    """
    errors = []

    if is_production():
        if not SANITY_PROJECT_ID:
            errors.append("SANITY_PROJECT_ID is required in production")
        if not SANITY_WRITE_TOKEN:
            errors.append("SANITY_WRITE_TOKEN is required in production")
        if not GITHUB_CLIENT_ID or not GITHUB_CLIENT_SECRET:
            errors.append("GITHUB_CLIENT_ID and GITHUB_CLIENT_SECRET are required in production")
        if SECRET_KEY == DEFAULT_SECRET_KEY:
            errors.append("SECRET_KEY must be changed in production")

    if REQUEST_TIMEOUT < 1:
        errors.append("REQUEST_TIMEOUT must be at least 1 second")

    if not EDITOR_PICKS_SLUG.strip():
        errors.append("EDITOR_PICKS_SLUG cannot be empty")

    if LOG_LEVEL not in logging.getLevelNamesMapping():
        errors.append(f"LOG_LEVEL is not a valid level name: {LOG_LEVEL}")

    return errors


def configure_logging(level: str = None) -> None:
    """Configure root logging once for the CLI and the dev server."""
    logging.basicConfig(
        level=(level or LOG_LEVEL),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def print_config_summary() -> None:
    """Print a summary of current configuration (safe for logs, no secrets)."""
    print(f"  APP_ENV: {APP_ENV}")
    print(f"  DEBUG: {DEBUG}")
    print(f"  LOG_LEVEL: {LOG_LEVEL}")
    print(f"  SECRET_KEY: {'(default)' if SECRET_KEY == DEFAULT_SECRET_KEY else '***'}")
    print(f"  SANITY_PROJECT_ID: {SANITY_PROJECT_ID or '(not set)'}")
    print(f"  SANITY_DATASET: {SANITY_DATASET}")
    print(f"  SANITY_API_VERSION: {SANITY_API_VERSION}")
    print(f"  SANITY_USE_CDN: {SANITY_USE_CDN}")
    print(f"  SANITY_WRITE_TOKEN: {'***' if SANITY_WRITE_TOKEN else '(not set)'}")
    print(f"  GITHUB_CLIENT_ID: {GITHUB_CLIENT_ID or '(not set)'}")
    print(f"  GITHUB_CLIENT_SECRET: {'***' if GITHUB_CLIENT_SECRET else '(not set)'}")
    print(f"  EDITOR_PICKS_SLUG: {EDITOR_PICKS_SLUG}")
    print(f"  REQUEST_TIMEOUT: {REQUEST_TIMEOUT}s")
