"""URL helpers: validation, scheme normalization and Location resolution."""

from __future__ import annotations

import re

import httpx

from hoptrace.tracer.models import InvalidURLError

_SCHEMES = ("http://", "https://")
# Location values starting with one of these are relative to the previous hop.
_RELATIVE_PREFIXES = ("/", "?", "#")
_SCHEME_RE = re.compile(r"[A-Za-z][A-Za-z0-9+.-]*")


def has_scheme(url: str) -> bool:
    return url.lower().startswith(_SCHEMES)


def is_https(url: str) -> bool:
    return url.lower().startswith("https://")


def ensure_scheme(url: str) -> str:
    """Return *url* with an explicit ``http://`` or ``https://`` prefix.

    An existing prefix (in any letter case) is left alone; otherwise
    ``http://`` is prepended.  Nothing else about the string changes.
    """
    if has_scheme(url):
        return url
    return "http://" + url


def validate_url(url: str) -> None:
    """Raise :class:`InvalidURLError` if *url* is empty or not a URL.

    Raises:
        InvalidURLError: For empty input, ASCII control characters, a malformed
            scheme before ``://``, or anything ``httpx.URL`` refuses to parse.
    """
    if url == "":
        raise InvalidURLError("empty URL")
    if any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in url):
        raise InvalidURLError("invalid control character in URL")
    head, sep, _ = url.partition("://")
    if sep and not any(ch in head for ch in "/?#") and not _SCHEME_RE.fullmatch(head):
        # "ht tp://x" is neither a scheme nor a host
        raise InvalidURLError("first path segment in URL cannot contain colon")
    try:
        httpx.URL(url)
    except httpx.InvalidURL as exc:
        raise InvalidURLError(str(exc)) from exc


def resolve_location(base: str, location: str, resolve_relative: bool = False) -> str:
    """Turn a ``Location`` header value into the next URL to request.

    By default the value is only given a scheme via :func:`ensure_scheme`, so
    ``/login`` becomes ``http:///login``.  With *resolve_relative* set,
    protocol-relative and path-relative values are joined against *base*
    first.  Bare values such as ``example.com/next`` are still read as a host.
    """
    if resolve_relative and not has_scheme(location) and location.startswith(_RELATIVE_PREFIXES):
        return str(httpx.URL(base).join(location))
    return ensure_scheme(location)
