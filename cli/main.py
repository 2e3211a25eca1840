"""hoptrace CLI: trace the redirect chain of a URL.

Usage:
    python cli/main.py --help
    python cli/main.py https://example.com/
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from hoptrace.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import dataclasses
from typing import Optional

import typer

from hoptrace.config import settings
from hoptrace.logging_config import configure_logging
from hoptrace.tracer import trace

from cli.rendering import render_json, render_text

app = typer.Typer(
    name="hoptrace",
    help="Follow an HTTP redirect chain one hop at a time.",
    add_completion=False,
)


@app.command()
def main(
    url: str = typer.Argument(..., help="The URL to follow redirects for."),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
    max_hops: Optional[int] = typer.Option(
        None, "--max-hops", min=1, help="Hop limit (default from HOPTRACE_MAX_HOPS)."
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", min=0.1, help="Per-request timeout in seconds."
    ),
    resolve_relative: Optional[bool] = typer.Option(
        None,
        "--resolve-relative/--no-resolve-relative",
        help="Join relative Location values against the previous hop.",
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="DEBUG | INFO | WARNING | ERROR."
    ),
) -> None:
    """Trace URL and print every hop."""
    configure_logging(log_level or settings.log_level)

    overrides = {}
    if max_hops is not None:
        overrides["max_hops"] = max_hops
    if timeout is not None:
        overrides["request_timeout"] = timeout
    if resolve_relative is not None:
        overrides["resolve_relative"] = resolve_relative
    cfg = dataclasses.replace(settings, **overrides)

    result = trace(url, settings=cfg)

    if as_json:
        typer.echo(render_json(result))
    if result.failed:
        typer.echo(f"Error: {result.failure_message}", err=True)
        raise typer.Exit(code=1)
    if not as_json:
        typer.echo(render_text(result))


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
