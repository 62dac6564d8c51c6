"""
Pitch submission.

Validates a submitted form against the Startup creation rules and
creates the document with a reference to the signed-in author.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from src.models.identity import Session
from src.models.startup import Startup
from src.storage.base import WriteClient

logger = logging.getLogger(__name__)


FORM_FIELDS = ("title", "description", "category", "image", "pitch")


@dataclass
class SubmissionResult:
    """
    Result of a submission.

    Attributes:
        startup: The created startup (None on failure).
        errors: Field name to message for every validation problem.
        values: Submitted values, for re-rendering the form.
    """
    startup: Optional[Startup] = None
    errors: Dict[str, str] = field(default_factory=dict)
    values: Dict[str, str] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return self.startup is not None and not self.errors


def submit_startup(
    form: Mapping[str, str],
    session: Optional[Session],
    write_client: WriteClient,
) -> SubmissionResult:
    """
    Create a startup from submitted form values.

    Args:
        form: Submitted values keyed by FORM_FIELDS.
        session: The signed-in author's session.
        write_client: Client used to create the document.

    Returns:
        SubmissionResult with the created startup or the validation errors.

    Raises:
        StoreError: If the create mutation fails.
    """
    values = {name: (form.get(name) or "").strip() for name in FORM_FIELDS}
    result = SubmissionResult(values=values)

    if session is None or not session.is_resolved:
        result.errors["author"] = "Sign in to submit a pitch"
        return result

    startup = Startup(
        title=values["title"],
        category=values["category"],
        image=values["image"],
        description=values["description"],
        pitch=values["pitch"],
        author_id=session.author_id,
    )

    result.errors.update(startup.validation_errors())
    if not startup.slug and "title" not in result.errors:
        result.errors["title"] = "Title must contain letters or digits"
    if result.errors:
        return result

    created = write_client.create(startup.to_document())
    result.startup = Startup.from_document(created)
    logger.info("author %s submitted startup %s", session.author_id, created.get("_id"))
    return result
