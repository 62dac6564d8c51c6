"""
Pitch flows module.

Listing/search, detail retrieval, profile and submission.
"""

from src.pitches.listing import search_startups, normalize_query
from src.pitches.markup import render_pitch
from src.pitches.detail import (
    StartupDetail,
    ViewCounter,
    fetch_startup_detail,
    show_startup,
)
from src.pitches.profile import AuthorProfile, load_profile
from src.pitches.submission import SubmissionResult, submit_startup

__all__ = [
    "search_startups",
    "normalize_query",
    "render_pitch",
    "StartupDetail",
    "ViewCounter",
    "fetch_startup_detail",
    "show_startup",
    "AuthorProfile",
    "load_profile",
    "SubmissionResult",
    "submit_startup",
]
