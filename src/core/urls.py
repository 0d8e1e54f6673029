"""URL normalization used as the default duplicate key."""

from __future__ import annotations

from urllib.parse import urlsplit

_DEFAULT_PORTS = {
    "http": 80,
    "https": 443,
    "ws": 80,
    "wss": 443,
    "ftp": 21,
}


def _format_host(hostname: str) -> str:
    # IPv6 literals lose their brackets in urlsplit().hostname.
    if ":" in hostname:
        return f"[{hostname}]"
    return hostname


def normalize_url(url: str) -> str:
    """Return the base URL (scheme, host and path) used to group duplicates.

    Query strings and fragments are dropped. Input that does not parse as an
    absolute URL is returned unchanged, so this never raises.
    """

    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError:
        return url

    scheme = parts.scheme.lower()
    if not scheme:
        return url

    if not parts.netloc:
        # Opaque URLs such as mailto: have an empty host.
        return f"{scheme}://{parts.path}"

    host = _format_host(parts.hostname or "")
    if port is not None and port != _DEFAULT_PORTS.get(scheme):
        host = f"{host}:{port}"

    path = parts.path or "/"
    return f"{scheme}://{host}{path}"
