"""Content negotiation and virtual-host gating."""

from collections.abc import Iterable


def prefers_json(accept: str | None) -> bool:
    """True when any media range in the Accept header is JSON.

    Examples:
        >>> prefers_json("text/html, application/json;q=0.9")
        False
        >>> prefers_json("text/html, application/json")
        True
        >>> prefers_json("application/ld+json")
        True

    """
    if not accept:
        return False
    return any(
        item.strip() == "application/json" or item.strip().endswith("+json")
        for item in accept.split(",")
    )


def is_allowed_host(host: str | None, allowed_hosts: Iterable[str], *, allow_loopback: bool = True) -> bool:
    """Check a Host header (port ignored, case-insensitive) against the allow-list."""
    if not host:
        return False
    hostname = host.lower().split(":", 1)[0]
    if allow_loopback and hostname.startswith("127."):
        return True
    return hostname in {allowed.lower() for allowed in allowed_hosts}
