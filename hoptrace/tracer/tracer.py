"""Manual redirect tracing: one request per hop, redirects never auto-followed."""

from __future__ import annotations

import logging
from typing import Optional

import httpx
import structlog

from hoptrace.config import Settings, settings as default_settings
from hoptrace.tracer.models import (
    TLS_NOT_APPLICABLE,
    Completed,
    HopRecord,
    InvalidURLError,
    ProtocolFailed,
    TraceOutcome,
    TraceResult,
    TransportFailed,
    ValidationFailed,
    to_result,
)
from hoptrace.tracer.normalizer import is_https, resolve_location, validate_url

# Bound to stdlib logging so unconfigured library use stays quiet.
logger = structlog.wrap_logger(
    logging.getLogger(__name__), wrapper_class=structlog.stdlib.BoundLogger
)

MISSING_LOCATION = "Location header is empty"

# Checked in order; the first non-empty value wins.
_LOCATION_KEYS = ("Location", "location", "LOCATION")

# ssl.SSLObject.version() -> display name
_TLS_NAMES = {
    "SSLv3": "SSL 3.0",
    "TLSv1": "TLS 1.0",
    "TLSv1.1": "TLS 1.1",
    "TLSv1.2": "TLS 1.2",
    "TLSv1.3": "TLS 1.3",
}


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _is_terminal(status_code: int) -> bool:
    """200 and anything above 303 end the chain; 301-303 keep going."""
    return status_code == 200 or status_code > 303


def _location(headers: httpx.Headers) -> Optional[str]:
    for key in _LOCATION_KEYS:
        value = headers.get(key)
        if value:
            return value
    return None


def _tls_version(response: httpx.Response) -> str:
    """Return the negotiated TLS version of *response*'s connection, or ``""``."""
    stream = response.extensions.get("network_stream")
    if stream is None:
        return ""
    ssl_object = stream.get_extra_info("ssl_object")
    if ssl_object is None:
        return ""
    version = ssl_object.version() or ""
    return _TLS_NAMES.get(version, version)


def _build_client(cfg: Settings) -> httpx.Client:
    return httpx.Client(
        headers={"User-Agent": cfg.user_agent},
        timeout=cfg.request_timeout,
        follow_redirects=False,
    )


def _step(
    client: httpx.Client, index: int, url: str, cfg: Settings
) -> tuple[HopRecord, Optional[str]]:
    """Request *url* once and return its hop record plus the raw ``Location``.

    The body is never read; leaving the ``stream`` block closes the response.

    Raises:
        httpx.HTTPError: On any transport-level failure.
        httpx.InvalidURL: If *url* cannot be turned into a request.
    """
    with client.stream(
        "GET",
        url,
        headers={"User-Agent": cfg.user_agent},
        timeout=cfg.request_timeout,
        follow_redirects=False,
    ) as response:
        hop = HopRecord(
            index=index,
            status_code=response.status_code,
            url=str(response.url),
            protocol=response.http_version,
            tls_version=_tls_version(response) if is_https(url) else TLS_NOT_APPLICABLE,
        )
        location = _location(response.headers)
    return hop, location


def _follow(client: httpx.Client, start_url: str, cfg: Settings) -> TraceOutcome:
    """Fold over at most ``cfg.max_hops`` hops.

    The accumulator is the hops recorded so far plus the pending target
    (the raw URL or ``Location`` value and the URL it came from).
    """
    hops: tuple[HopRecord, ...] = ()
    target, base = start_url, start_url

    for index in range(cfg.max_hops):
        try:
            url = resolve_location(base, target, cfg.resolve_relative)
            hop, location = _step(client, index, url, cfg)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            message = str(exc) or type(exc).__name__
            logger.warning("trace.transport_error", index=index, url=target, error=message)
            return TransportFailed(message, hops)

        hops += (hop,)
        logger.info(
            "trace.hop",
            index=hop.index,
            status_code=hop.status_code,
            url=hop.url,
            protocol=hop.protocol,
            tls_version=hop.tls_version,
        )

        if _is_terminal(hop.status_code):
            return Completed(hops)
        if not location:
            logger.warning("trace.missing_location", index=index, url=hop.url)
            return ProtocolFailed(MISSING_LOCATION, hops)
        target, base = location, hop.url

    logger.info("trace.hop_limit", max_hops=cfg.max_hops, url=start_url)
    return Completed(hops, hop_limit_reached=True)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def trace(
    url: str,
    *,
    client: Optional[httpx.Client] = None,
    settings: Optional[Settings] = None,
) -> TraceResult:
    """Follow the redirect chain of *url* one hop at a time.

    Every failure is reported in-band through ``TraceResult.failed`` and
    ``TraceResult.failure_message``; nothing is raised to the caller.

    Args:
        url: Starting URL.  A missing scheme is treated as ``http://``.
        client: Optional ``httpx.Client`` to reuse.  It is left open.
            When omitted a client is created and closed for this call.
        settings: Overrides the module-level :data:`hoptrace.config.settings`.
    """
    cfg = settings or default_settings
    logger.info("trace.start", url=url, max_hops=cfg.max_hops)

    try:
        validate_url(url)
    except InvalidURLError as exc:
        logger.warning("trace.invalid_url", url=url, error=str(exc))
        return to_result(url, ValidationFailed(str(exc)))

    if client is not None:
        return to_result(url, _follow(client, url, cfg))

    with _build_client(cfg) as own_client:
        return to_result(url, _follow(own_client, url, cfg))
