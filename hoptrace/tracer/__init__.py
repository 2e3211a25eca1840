"""Redirect tracer package: URL normalization and the hop-by-hop loop."""

from hoptrace.tracer.models import HopRecord, InvalidURLError, TraceResult
from hoptrace.tracer.normalizer import ensure_scheme, validate_url
from hoptrace.tracer.tracer import MISSING_LOCATION, trace

__all__ = [
    "trace",
    "ensure_scheme",
    "validate_url",
    "HopRecord",
    "TraceResult",
    "InvalidURLError",
    "MISSING_LOCATION",
]
