"""
Pitch Board - Web Application

A Flask site to pitch, browse and search startups stored in Sanity,
with GitHub sign-in.

Run with: python -m web.app
Or: python main.py
"""

import logging
import secrets
import sys
from pathlib import Path
from typing import Optional

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from flask import Flask, abort, redirect, render_template, request, session, url_for

from src.auth import AuthError, GitHubOAuth, issue_token, sign_in
from src.config import EDITOR_PICKS_SLUG, SANITY_PROJECT_ID, SECRET_KEY
from src.models.identity import Session
from src.pitches import (
    ViewCounter,
    load_profile,
    normalize_query,
    search_startups,
    show_startup,
    submit_startup,
)
from src.storage import SanityClient, SanityWriteClient, StoreError

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config["SECRET_KEY"] = SECRET_KEY

# Session keys
TOKEN_KEY = "token"
STATE_KEY = "oauth_state"


# =============================================================================
# Collaborators
# =============================================================================

def get_client():
    """Get the configured read client, or None if Sanity is not configured."""
    if not SANITY_PROJECT_ID:
        return None
    return SanityClient()


def get_write_client():
    """Get the configured write client, or None if Sanity is not configured."""
    if not SANITY_PROJECT_ID:
        return None
    return SanityWriteClient()


def get_oauth() -> GitHubOAuth:
    """Get the GitHub OAuth client."""
    return GitHubOAuth()


def load_session() -> Optional[Session]:
    """Materialize the signed-in author for this request from the signed cookie."""
    return Session.from_token(session.get(TOKEN_KEY))


def store_unavailable(viewer: Optional[Session]):
    return render_template(
        "error.html",
        message="Content store not configured",
        viewer=viewer,
    ), 503


# =============================================================================
# Pages
# =============================================================================

@app.route("/")
def index():
    """Startup listing with optional search."""
    viewer = load_session()
    client = get_client()

    if not client:
        return store_unavailable(viewer)

    query = normalize_query(request.args.get("query"))
    startups = search_startups(client, query)

    return render_template(
        "index.html",
        startups=startups,
        query=query,
        viewer=viewer,
    )


@app.route("/startup/<startup_id>")
def startup_detail(startup_id):
    """Startup detail page with editor picks."""
    viewer = load_session()
    client = get_client()

    if not client:
        return store_unavailable(viewer)

    detail = show_startup(
        client,
        ViewCounter(get_write_client()),
        startup_id,
        playlist_slug=EDITOR_PICKS_SLUG,
    )

    if detail is None:
        return render_template("startup.html", detail=None, viewer=viewer), 404

    return render_template("startup.html", detail=detail, viewer=viewer)


@app.route("/user/<author_id>")
def user_profile(author_id):
    """Author profile with their startups."""
    viewer = load_session()
    client = get_client()

    if not client:
        return store_unavailable(viewer)

    profile = load_profile(client, author_id)
    if profile is None:
        return render_template("user.html", profile=None, viewer=viewer), 404

    return render_template("user.html", profile=profile, viewer=viewer)


@app.route("/create", methods=["GET", "POST"])
def create_startup():
    """Pitch submission form (sign-in required)."""
    viewer = load_session()
    if viewer is None:
        return redirect(url_for("login"))

    if request.method == "GET":
        return render_template("create.html", values={}, errors={}, viewer=viewer)

    write_client = get_write_client()
    if not write_client:
        return store_unavailable(viewer)

    result = submit_startup(request.form, viewer, write_client)
    if not result.success:
        return render_template(
            "create.html",
            values=result.values,
            errors=result.errors,
            viewer=viewer,
        ), 400

    return redirect(url_for("startup_detail", startup_id=result.startup.id))


# =============================================================================
# Authentication
# =============================================================================

@app.route("/login")
def login():
    """Start the GitHub OAuth handshake."""
    oauth = get_oauth()
    if not oauth.is_configured():
        return render_template(
            "error.html",
            message="GitHub sign-in not configured",
            viewer=None,
        ), 503

    state = secrets.token_urlsafe(16)
    session[STATE_KEY] = state
    return redirect(oauth.authorize_url(state, url_for("auth_callback", _external=True)))


@app.route("/auth/callback")
def auth_callback():
    """
    Finish the handshake: reconcile the author and issue the token.

    The session is only written after both steps succeed, so a store
    failure leaves the visitor signed out.
    """
    expected_state = session.pop(STATE_KEY, None)
    if not expected_state or request.args.get("state") != expected_state:
        raise AuthError("OAuth state mismatch")

    if request.args.get("error"):
        raise AuthError(f"Sign-in denied: {request.args['error']}")

    client = get_client()
    write_client = get_write_client()
    if not client or not write_client:
        return store_unavailable(None)

    identity = get_oauth().complete(
        request.args.get("code"),
        url_for("auth_callback", _external=True),
    )

    if not sign_in(identity, client, write_client):
        abort(403)

    session[TOKEN_KEY] = issue_token(session.get(TOKEN_KEY), identity, client)
    return redirect(url_for("index"))


@app.route("/logout", methods=["POST"])
def logout():
    """Sign out."""
    session.pop(TOKEN_KEY, None)
    return redirect(url_for("index"))


# =============================================================================
# Error Handlers
# =============================================================================

@app.errorhandler(StoreError)
def handle_store_error(error):
    logger.error("content store error: %s", error)
    return render_template(
        "error.html",
        message="The content store is unavailable. Please try again later.",
        viewer=load_session(),
    ), 503


@app.errorhandler(AuthError)
def handle_auth_error(error):
    logger.warning("sign-in failed: %s", error)
    return render_template(
        "error.html",
        message="Sign-in failed. Please try again.",
        viewer=None,
    ), 400


# =============================================================================
# Template Filters
# =============================================================================

@app.template_filter("format_date")
def format_date(dt):
    """Format datetime for display."""
    if not dt:
        return "Unknown"
    if isinstance(dt, str):
        return dt
    return dt.strftime("%b %d, %Y")


@app.template_filter("views_label")
def views_label(count):
    """Return "1 view" / "N views"."""
    count = count or 0
    return f"{count} view" if count == 1 else f"{count} views"


if __name__ == "__main__":
    from src.config import configure_logging

    configure_logging()
    print("=" * 50)
    print("Pitch Board")
    print("=" * 50)
    print("Open http://localhost:5001 in your browser")
    print("Press Ctrl+C to stop")
    print("=" * 50)
    app.run(debug=True, port=5001)
