"""Unique identifiers for new records."""

from __future__ import annotations

import logging
import random
import uuid

log = logging.getLogger(__name__)


def generate_id() -> str:
    """Return a random version-4 UUID string.

    Uses the operating system's CSPRNG. Where none is available, falls back
    to the ``random`` module, which still yields a well-formed v4 UUID.
    """
    try:
        return str(uuid.uuid4())
    except NotImplementedError:
        log.warning("No OS randomness source, using pseudo-random ids")
        return str(uuid.UUID(int=random.getrandbits(128), version=4))
