"""Plain-text and JSON rendering of a :class:`TraceResult`."""

from __future__ import annotations

import json
from typing import List

from hoptrace.tracer.models import HopRecord, TraceResult


def render_hop(hop: HopRecord) -> str:
    return (
        f"Redirect {hop.index}: {hop.url} "
        f"(Status Code: {hop.status_code}, Protocol: {hop.protocol}, "
        f"TLS Version: {hop.tls_version})"
    )


def render_text(result: TraceResult) -> str:
    """Render the requested URL followed by one line per hop.

    Every recorded hop is printed, including when the loop stopped because
    it ran out of hops rather than on a terminal status.
    """
    lines: List[str] = [f"URL: {result.requested_url}"]
    lines.extend(render_hop(hop) for hop in result.hops)
    return "\n".join(lines)


def render_json(result: TraceResult) -> str:
    return json.dumps(result.to_dict(), indent=2)
