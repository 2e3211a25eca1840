"""hoptrace: inspect an HTTP redirect chain one hop at a time.

Public re-exports so callers can write::

    from hoptrace import trace
"""

import logging

from hoptrace.tracer import HopRecord, TraceResult, trace

__all__ = ["trace", "HopRecord", "TraceResult"]

logging.getLogger(__name__).addHandler(logging.NullHandler())
