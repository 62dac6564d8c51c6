"""
Author reconciliation for sign-in.

Binds an external identity to an internal Author record. Runs in three
steps, mirroring the sign-in callback chain:

    sign_in(identity)      -> look up the author, create it if absent
    issue_token(identity)  -> re-look-up and put the internal id on the token
    Session.from_token()   -> copy the id onto the per-request session

Lookups always bypass the CDN: a stale cached "not found" would make a
returning user look new.

Concurrent first sign-ins for the same account both see "not found".
Authors are therefore created with a deterministic ``_id`` through the
store's create-if-not-exists mutation, so both attempts converge on the
same document instead of creating duplicates.
"""

import logging
from typing import Any, Dict, Optional

from src.models.author import AUTHOR_TYPE, Author, author_document_id
from src.models.identity import ProviderIdentity
from src.storage.base import ContentClient, WriteClient
from src.storage.queries import AUTHOR_BY_GITHUB_ID_QUERY

logger = logging.getLogger(__name__)


def find_author(client: ContentClient, external_id: str) -> Optional[Author]:
    """
    Look up the author linked to an external id, bypassing the cache.

    Raises:
        StoreError: If the store cannot be reached.
    """
    doc = client.with_config(use_cdn=False).fetch(
        AUTHOR_BY_GITHUB_ID_QUERY, {"id": external_id}
    )
    return Author.from_document(doc)


def sign_in(
    identity: ProviderIdentity,
    client: ContentClient,
    write_client: WriteClient,
) -> bool:
    """
    Accept a sign-in, creating the author on first login.

    Args:
        identity: Profile from the identity provider.
        client: Read client.
        write_client: Write client used when the author is new.

    Returns:
        True, always, once the author exists. Store failures propagate
        as StoreError and abort the sign-in.
    """
    existing = find_author(client, identity.external_id)
    if existing is None:
        document = {
            "_id": author_document_id(identity.external_id),
            "_type": AUTHOR_TYPE,
            **identity.to_author_fields(),
        }
        created = write_client.create_if_not_exists(document)
        logger.info(
            "created author %s for %s", created.get("_id"), identity.username
        )
    else:
        logger.debug("author %s already linked to %s", existing.id, identity.username)

    return True


def issue_token(
    token: Dict[str, Any],
    identity: Optional[ProviderIdentity],
    client: ContentClient,
) -> Dict[str, Any]:
    """
    Refresh a token, resolving the internal author id.

    When identity-provider data is present (a fresh sign-in), the author is
    looked up again and its internal id stored under ``"id"``. Without it
    the token is returned unchanged.

    Returns:
        A new token dict.
    """
    token = dict(token or {})
    if identity is None:
        return token

    author = find_author(client, identity.external_id)
    token.update({
        "id": author.id if author else None,
        "name": identity.name,
        "email": identity.email,
        "picture": identity.avatar_url,
    })
    if author is None:
        logger.warning("no author found for %s at token issuance", identity.username)
    return token
