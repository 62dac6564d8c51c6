"""
GitHub OAuth handshake.

Implements the web application flow:
https://docs.github.com/en/apps/oauth-apps/building-oauth-apps/authorizing-oauth-apps

    1. Redirect the browser to the authorize URL with a random state
    2. GitHub redirects back with ?code=...&state=...
    3. Exchange the code for an access token
    4. Fetch the user profile (and emails, when the profile email is private)
"""

import logging
from typing import Dict, List, Optional
from urllib.parse import urlencode

import requests

from src.config import GITHUB_CLIENT_ID, GITHUB_CLIENT_SECRET, REQUEST_TIMEOUT
from src.models.identity import ProviderIdentity

logger = logging.getLogger(__name__)


GITHUB_AUTHORIZE_URL = "https://github.com/login/oauth/authorize"
GITHUB_TOKEN_URL = "https://github.com/login/oauth/access_token"
GITHUB_API_BASE = "https://api.github.com"

# Scopes needed for the profile and its (possibly private) email
DEFAULT_SCOPE = "read:user user:email"


class AuthError(Exception):
    """Raised when the OAuth handshake fails."""


class GitHubOAuth:
    """
    GitHub OAuth client.

    Configuration is pulled from src.config (GITHUB_CLIENT_ID,
    GITHUB_CLIENT_SECRET) unless passed explicitly.
    """

    def __init__(
        self,
        client_id: str = None,
        client_secret: str = None,
        scope: str = DEFAULT_SCOPE,
    ):
        self.client_id = client_id if client_id is not None else GITHUB_CLIENT_ID
        self.client_secret = client_secret if client_secret is not None else GITHUB_CLIENT_SECRET
        self.scope = scope

    def is_configured(self) -> bool:
        return bool(self.client_id and self.client_secret)

    def authorize_url(self, state: str, redirect_uri: str) -> str:
        """Build the URL the browser is sent to for sign-in."""
        params = {
            "client_id": self.client_id,
            "redirect_uri": redirect_uri,
            "scope": self.scope,
            "state": state,
        }
        return f"{GITHUB_AUTHORIZE_URL}?{urlencode(params)}"

    def exchange_code(self, code: str, redirect_uri: str) -> str:
        """
        Exchange an authorization code for an access token.

        Raises:
            AuthError: If GitHub rejects the code or cannot be reached.
        """
        try:
            response = requests.post(
                GITHUB_TOKEN_URL,
                headers={"Accept": "application/json"},
                data={
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "code": code,
                    "redirect_uri": redirect_uri,
                },
                timeout=REQUEST_TIMEOUT,
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            raise AuthError(f"Token exchange failed: {e}") from e

        # GitHub reports bad codes with 200 and an "error" field
        if "error" in data:
            raise AuthError(
                f"Token exchange rejected: {data.get('error_description') or data['error']}"
            )

        token = data.get("access_token")
        if not token:
            raise AuthError("Token exchange returned no access_token")
        return token

    def _get(self, path: str, access_token: str):
        try:
            response = requests.get(
                f"{GITHUB_API_BASE}{path}",
                headers={
                    "Accept": "application/vnd.github+json",
                    "Authorization": f"Bearer {access_token}",
                },
                timeout=REQUEST_TIMEOUT,
            )
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as e:
            raise AuthError(f"GitHub API request {path} failed: {e}") from e

    @staticmethod
    def _primary_email(emails: List[Dict]) -> str:
        for entry in emails or []:
            if entry.get("primary") and entry.get("verified"):
                return entry.get("email") or ""
        return ""

    def fetch_identity(self, access_token: str) -> ProviderIdentity:
        """
        Fetch the signed-in user's profile as a ProviderIdentity.

        Raises:
            AuthError: If the profile cannot be fetched or has no id.
        """
        profile = self._get("/user", access_token)

        if profile.get("id") is None:
            raise AuthError("GitHub profile has no id")

        email = profile.get("email")
        if not email:
            email = self._primary_email(self._get("/user/emails", access_token))

        login = profile.get("login") or ""
        return ProviderIdentity(
            external_id=str(profile["id"]),
            username=login,
            name=profile.get("name") or login,
            email=email or "",
            bio=profile.get("bio"),
            avatar_url=profile.get("avatar_url"),
        )

    def complete(self, code: Optional[str], redirect_uri: str) -> ProviderIdentity:
        """Run steps 3 and 4 of the handshake for a callback code."""
        if not code:
            raise AuthError("Missing authorization code")
        access_token = self.exchange_code(code, redirect_uri)
        identity = self.fetch_identity(access_token)
        logger.info("GitHub handshake completed for %s", identity.username)
        return identity
