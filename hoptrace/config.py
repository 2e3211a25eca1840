"""Centralised settings for hoptrace.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

MAX_HOPS = 20

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).strip().lower() in _TRUTHY


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Redirect loop
    # ------------------------------------------------------------------
    max_hops: int = field(
        default_factory=lambda: int(os.environ.get("HOPTRACE_MAX_HOPS", str(MAX_HOPS)))
    )
    resolve_relative: bool = field(
        default_factory=lambda: _env_flag("HOPTRACE_RESOLVE_RELATIVE")
    )

    # ------------------------------------------------------------------
    # HTTP client
    # ------------------------------------------------------------------
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("HOPTRACE_REQUEST_TIMEOUT", "30.0"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "HOPTRACE_USER_AGENT", "Mozilla/5.0 (compatible; hoptrace/0.1)"
        )
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("HOPTRACE_LOG_LEVEL", "WARNING")
    )

    def __post_init__(self) -> None:
        # At least one request per trace.
        self.max_hops = max(1, self.max_hops)


# Module-level singleton, import this everywhere:
#   from hoptrace.config import settings
settings = Settings()
