"""Product URL parsing."""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import urlsplit

from pricewatch.modules.price_tracker.errors import InvalidURLError, UnsupportedStoreError

# Matches /products/<handle> anywhere in the path, e.g. /collections/x/products/tee
_HANDLE_RE = re.compile(r"/products/([^/?#]+)")

_KNOWN_STORE_NAMES: tuple[tuple[str, str], ...] = (
    ("toddsnyder", "Todd Snyder"),
    ("brut", "BRUT"),
    ("percival", "Percival"),
    ("buckmason", "Buck Mason"),
)


@dataclass(frozen=True)
class ParsedProductUrl:
    domain: str
    handle: str | None


def resolve(url: str) -> ParsedProductUrl:
    """Split a product URL into store domain and product handle.

    The handle is ``None`` when the path has no ``/products/<handle>``
    segment.

    Raises:
        InvalidURLError: If ``url`` is not an absolute http(s) URL.
    """
    try:
        parts = urlsplit(url.strip())
        hostname = parts.hostname
    except (AttributeError, ValueError) as e:
        raise InvalidURLError() from e

    if parts.scheme not in ("http", "https") or not hostname:
        raise InvalidURLError()

    match = _HANDLE_RE.search(parts.path)
    return ParsedProductUrl(domain=hostname, handle=match.group(1) if match else None)


def require_handle(url: str) -> tuple[str, str]:
    """Resolve ``url`` and insist on a product handle.

    Raises:
        InvalidURLError: If ``url`` cannot be parsed.
        UnsupportedStoreError: If the path has no product handle.
    """
    parsed = resolve(url)
    if parsed.handle is None:
        raise UnsupportedStoreError()
    return parsed.domain, parsed.handle


def strip_www(domain: str) -> str:
    return domain[4:] if domain.startswith("www.") else domain


def product_page_url(domain: str, handle: str) -> str:
    return f"https://{domain}/products/{handle}"


def store_display_name(domain: str) -> str:
    """Friendly store name for notifications."""
    for needle, name in _KNOWN_STORE_NAMES:
        if needle in domain:
            return name
    return strip_www(domain).split(".")[0]


__all__ = [
    "ParsedProductUrl",
    "product_page_url",
    "require_handle",
    "resolve",
    "store_display_name",
    "strip_www",
]
