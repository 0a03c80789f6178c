# image_scout/crawler/urls.py
"""
Resolution and normalisation of page and image references.
"""
from __future__ import annotations

import re
from urllib.parse import quote, urldefrag, urljoin, urlsplit, urlunsplit

__all__ = ("InvalidURL", "resolve", "is_followable", "visit_key")

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
# "<scheme>://" at the start of a reference, before any path/query/fragment
_AUTHORITY_PREFIX_RE = re.compile(r"^([^/?#]*?)://")
_DEFAULT_PORTS = {"http": 80, "https": 443}
_FOLLOW_SCHEMES = ("http", "https")
# RFC 3986 reserved characters plus "%", so existing escapes survive requoting
_PATH_SAFE = "/%:@!$&'()*+,;="
_QUERY_SAFE = _PATH_SAFE + "?"


class InvalidURL(ValueError):
    """A reference that cannot be turned into an absolute URL."""

    def __init__(self, reference: str, reason: str) -> None:
        super().__init__(f"{reference!r}: {reason}")
        self.reference = reference
        self.reason = reason


def _normalize(url: str, reference: str) -> str:
    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError as exc:
        raise InvalidURL(reference, str(exc)) from exc

    scheme = parts.scheme.lower()
    if not scheme or not _SCHEME_RE.match(scheme):
        raise InvalidURL(reference, "no valid scheme")
    if scheme in _DEFAULT_PORTS and not parts.hostname:
        raise InvalidURL(reference, "missing host")

    netloc = parts.netloc
    if parts.hostname:
        host = parts.hostname
        if ":" in host:
            host = f"[{host}]"
        userinfo, _, _ = parts.netloc.rpartition("@")
        netloc = f"{userinfo}@{host}" if userinfo else host
        if port is not None and port != _DEFAULT_PORTS.get(scheme):
            netloc = f"{netloc}:{port}"

    path, query, fragment = parts.path, parts.query, parts.fragment
    if scheme in _DEFAULT_PORTS:
        # "/a b" and "/a%20b" name the same resource on the wire
        path = quote(path, safe=_PATH_SAFE) or "/"
        query = quote(query, safe=_QUERY_SAFE)
        fragment = quote(fragment, safe=_QUERY_SAFE)
    return urlunsplit((scheme, netloc, path, query, fragment))


def resolve(reference: str, base: str) -> str:
    """
    Resolve *reference* against *base* (RFC 3986) and normalise the result.

    Raises :class:`InvalidURL` when the reference cannot be parsed even
    relative to *base*, e.g. ``"ht!tp://bad"`` or ``"http://[::1"``.
    """
    raw = reference.strip()
    if not raw:
        raise InvalidURL(reference, "empty reference")
    prefix = _AUTHORITY_PREFIX_RE.match(raw)
    if prefix and not _SCHEME_RE.match(prefix.group(1)) and prefix.group(1) != "":
        raise InvalidURL(reference, f"invalid scheme {prefix.group(1)!r}")
    try:
        joined = urljoin(base, raw)
    except ValueError as exc:
        raise InvalidURL(reference, str(exc)) from exc
    return _normalize(joined, reference)


def is_followable(url: str) -> bool:
    """Only http(s) links are followed; images are not filtered."""
    return urlsplit(url).scheme.lower() in _FOLLOW_SCHEMES


def visit_key(url: str) -> str:
    """Key under which a page is recorded as visited: normalised, no fragment."""
    return urldefrag(resolve(url, url)).url
