"""Random public links for portals."""

from collections.abc import Awaitable, Callable
import logging
import secrets
import string

logger = logging.getLogger("uvicorn.error")

LINK_LENGTH = 12
LINK_ALPHABET = string.ascii_lowercase + string.digits
MAX_ATTEMPTS = 5


def generate_link(length: int = LINK_LENGTH) -> str:
    """Return a random lowercase alphanumeric link."""
    return "".join(secrets.choice(LINK_ALPHABET) for _ in range(length))


async def generate_unique_link(
    exists: Callable[[str], Awaitable[bool]],
    attempts: int = MAX_ATTEMPTS,
) -> str:
    """Generate a link that `exists` reports as unused.

    After `attempts` collisions a fresh, unchecked link is returned; the
    unique index on portals.unique_link rejects it if it is also taken.
    """
    for attempt in range(1, attempts + 1):
        candidate = generate_link()
        if not await exists(candidate):
            return candidate
        logger.warning(f"Portal link collision on attempt {attempt}/{attempts}")
    return generate_link()
