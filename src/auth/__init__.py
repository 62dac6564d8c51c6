"""
Authentication module.

GitHub OAuth handshake and author reconciliation.
"""

from src.auth.github import GitHubOAuth, AuthError
from src.auth.reconciliation import find_author, sign_in, issue_token

__all__ = [
    "GitHubOAuth",
    "AuthError",
    "find_author",
    "sign_in",
    "issue_token",
]
