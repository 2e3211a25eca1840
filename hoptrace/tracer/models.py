"""Data models for the redirect tracer.

``HopRecord`` and ``TraceResult`` are the public, flat shapes handed to
callers.  The loop itself works with the tagged outcome types below and only
projects to ``TraceResult`` at the boundary.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Union

TLS_NOT_APPLICABLE = "N/A"


class InvalidURLError(ValueError):
    """Raised when an input URL is empty or fails URL grammar."""


@dataclass(frozen=True)
class HopRecord:
    """One request/response exchange in the chain."""

    index: int
    status_code: int
    url: str
    protocol: str
    tls_version: str

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"number": self.index}
        if self.status_code:
            data["statuscode"] = self.status_code
        if self.url:
            data["url"] = self.url
        if self.protocol:
            data["protocol"] = self.protocol
        if self.tls_version:
            data["tlsversion"] = self.tls_version
        return data


@dataclass
class TraceResult:
    """The outcome of one full trace, errors included."""

    requested_url: str
    hops: List[HopRecord] = field(default_factory=list)
    failed: bool = False
    failure_message: str = ""
    hop_limit_reached: bool = False

    @property
    def final_status_code(self) -> Optional[int]:
        """Status of the last recorded hop, or ``None`` if nothing was recorded."""
        if not self.hops:
            return None
        return self.hops[-1].status_code

    def to_dict(self) -> dict[str, Any]:
        """Structured form; empty values are left out."""
        data: dict[str, Any] = {}
        if self.requested_url:
            data["url"] = self.requested_url
        if self.hops:
            data["redirects"] = [hop.to_dict() for hop in self.hops]
        if self.failed:
            data["error"] = True
        if self.failure_message:
            data["errormessage"] = self.failure_message
        return data


# ---------------------------------------------------------------------------
# Tagged outcomes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Completed:
    """The loop stopped on a terminal status or ran out of hops."""

    hops: tuple[HopRecord, ...]
    hop_limit_reached: bool = False


@dataclass(frozen=True)
class ValidationFailed:
    message: str
    hops: tuple[HopRecord, ...] = ()


@dataclass(frozen=True)
class TransportFailed:
    message: str
    hops: tuple[HopRecord, ...] = ()


@dataclass(frozen=True)
class ProtocolFailed:
    message: str
    hops: tuple[HopRecord, ...] = ()


TraceOutcome = Union[Completed, ValidationFailed, TransportFailed, ProtocolFailed]


def to_result(requested_url: str, outcome: TraceOutcome) -> TraceResult:
    """Project a tagged outcome onto the flat ``failed``/``failure_message`` shape."""
    if isinstance(outcome, Completed):
        return TraceResult(
            requested_url=requested_url,
            hops=list(outcome.hops),
            hop_limit_reached=outcome.hop_limit_reached,
        )
    return TraceResult(
        requested_url=requested_url,
        hops=list(outcome.hops),
        failed=True,
        failure_message=outcome.message,
    )
