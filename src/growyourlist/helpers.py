"""Opt-in conveniences built on top of GylClient.

These trade error detail for brevity and are kept apart from the client so
that callers choose them explicitly.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Literal

from .client import GylClient
from .exceptions import GylError

logger = logging.getLogger(__name__)


def exists_and_has_tag(
    client: GylClient, email: str, tag: str
) -> Mapping[str, Any] | Literal[False]:
    """Return the subscriber status if the subscriber exists and has ``tag``.

    Returns False in every other case, including validation, transport and API
    errors, so "no such subscriber" cannot be told apart from an outage. Use
    ``client.subscribers.get_status`` when that difference matters.

    Example:
        ```python
        status = exists_and_has_tag(client, "person@example.com", "a-tag")
        if status:
            ...  # continue in GrowYourList
        else:
            ...  # fall back to the old mail system
        ```
    """
    try:
        status = client.subscribers.get_status(email)
    except GylError as e:
        logger.debug("Status lookup for tag %r failed: %s", tag, e)
        return False

    if isinstance(status, Mapping):
        tags = status.get("tags")
        if isinstance(tags, list) and tag in tags:
            return status
    return False
