"""
Startup detail retrieval.

    fetch startup by id  ─┐
                          ├─ join ─> not found? stop : render + count view
    fetch editor picks   ─┘

The two reads run concurrently so the page waits for the slower one, not
both in sequence. If either read fails the whole page fails. The view
counter is dispatched in the background and never delays the page.
"""

import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, Optional

from markupsafe import Markup

from src.config import EDITOR_PICKS_SLUG
from src.models.playlist import Playlist
from src.models.startup import Startup
from src.pitches.markup import render_pitch
from src.storage.base import ContentClient, WriteClient
from src.storage.queries import PLAYLIST_BY_SLUG_QUERY, STARTUP_BY_ID_QUERY

logger = logging.getLogger(__name__)


VIEWS_FIELD = "views"

# Increments queue behind this many workers, however many pages are served
VIEW_COUNTER_WORKERS = 4

_view_counter_pool = ThreadPoolExecutor(
    max_workers=VIEW_COUNTER_WORKERS,
    thread_name_prefix="view-counter",
)


@dataclass
class StartupDetail:
    """Everything the detail page renders."""
    startup: Startup
    pitch_html: Optional[Markup] = None
    editor_picks: List[Startup] = field(default_factory=list)

    @property
    def has_editor_picks(self) -> bool:
        return bool(self.editor_picks)


class ViewCounter:
    """
    Best-effort view counting.

    Every recorded view issues one increment: no deduplication, no rate
    limiting, no retry. Failures are logged and dropped.

    Args:
        write_client: Client used for the increment mutation.
        background: Submit the increment to a shared worker pool (default).
            Set to False to increment inline.
        executor: Pool for background increments (default: a module-level
            pool of VIEW_COUNTER_WORKERS threads).
    """

    def __init__(
        self,
        write_client: WriteClient,
        background: bool = True,
        executor: Optional[Executor] = None,
    ):
        self.write_client = write_client
        self.background = background
        self.executor = executor or _view_counter_pool

    def record(self, startup_id: str) -> Optional[Future]:
        """
        Count one view of a startup.

        Returns:
            The pending increment, or None when run inline.
        """
        if not self.background:
            self._increment(startup_id)
            return None

        return self.executor.submit(self._increment, startup_id)

    def _increment(self, startup_id: str) -> None:
        try:
            self.write_client.increment(startup_id, VIEWS_FIELD)
        except Exception as e:
            logger.warning("view count for %s dropped: %s", startup_id, e)


def fetch_startup_detail(
    client: ContentClient,
    startup_id: str,
    playlist_slug: str = EDITOR_PICKS_SLUG,
) -> Optional[StartupDetail]:
    """
    Fetch a startup and the curated playlist concurrently.

    Args:
        client: Read client.
        startup_id: Internal id of the startup.
        playlist_slug: Slug of the curated playlist to show alongside.

    Returns:
        StartupDetail, or None if the startup does not exist.

    Raises:
        StoreError: If either read fails.
    """
    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="detail") as pool:
        startup_future = pool.submit(client.fetch, STARTUP_BY_ID_QUERY, {"id": startup_id})
        playlist_future = pool.submit(client.fetch, PLAYLIST_BY_SLUG_QUERY, {"slug": playlist_slug})
        startup_doc = startup_future.result()
        playlist_doc = playlist_future.result()

    startup = Startup.from_document(startup_doc)
    if startup is None:
        return None

    playlist = Playlist.from_document(playlist_doc)
    return StartupDetail(
        startup=startup,
        pitch_html=render_pitch(startup.pitch),
        editor_picks=playlist.startups if playlist else [],
    )


def show_startup(
    client: ContentClient,
    counter: ViewCounter,
    startup_id: str,
    playlist_slug: str = EDITOR_PICKS_SLUG,
) -> Optional[StartupDetail]:
    """
    Load a startup for display and count the view.

    A missing startup returns None and counts nothing.
    """
    detail = fetch_startup_detail(client, startup_id, playlist_slug)
    if detail is None:
        logger.info("startup %s not found", startup_id)
        return None

    counter.record(detail.startup.id or startup_id)
    return detail
