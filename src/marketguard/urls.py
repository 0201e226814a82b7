"""URL parsing helpers for index fields that must point at HTTPS resources."""

from typing import Any
from urllib.parse import SplitResult, urlsplit

# Schemes that are meaningless without a host
NETWORK_SCHEMES = frozenset({"http", "https", "ftp", "ws", "wss"})


def parse_url(value: Any) -> SplitResult | None:
    """Parse value as an absolute URL.

    Returns:
        The split URL, or None if value is not a string, has no scheme, or
        uses a network scheme without a host.
    """
    if not isinstance(value, str):
        return None
    try:
        parts = urlsplit(value)
        # Accessing port validates it
        parts.port  # noqa: B018
    except ValueError:
        return None
    if not parts.scheme:
        return None
    if parts.scheme in NETWORK_SCHEMES and not parts.hostname:
        return None
    return parts


def is_https(parts: SplitResult) -> bool:
    """True if the parsed URL uses the https scheme."""
    return parts.scheme == "https"
