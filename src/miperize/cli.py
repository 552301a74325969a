from __future__ import annotations

import asyncio
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from dotenv import load_dotenv

from .workflows.doctor import build_doctor_report, format_doctor_report
from .workflows.engine import Miperize
from .workflows.errors import ConfigError, MiperizeError
from .workflows.miperize_config import MIN_PROBE_TIMEOUT, ProbeSettings

app = typer.Typer(no_args_is_help=True, help="Rewrite HTML into MIP mobile-page markup.")


def _read_source(path_or_dash: str) -> str:
    if path_or_dash == "-":
        return sys.stdin.read()
    return Path(path_or_dash).read_text(encoding="utf-8")


def _load_options(path: Optional[Path]) -> Optional[Dict[str, Any]]:
    if path is None:
        return None
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object keyed by tag name")
    return data


@app.command("convert", add_help_option=True)
def convert(
    source: str = typer.Argument(..., help="HTML file to convert, or '-' for stdin."),
    out: Optional[Path] = typer.Option(None, "--out", help="Write the result here instead of stdout."),
    config: Optional[Path] = typer.Option(None, "--config", help="JSON file with per-tag default overrides."),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Image probe inactivity timeout (seconds)."),
    json_out: bool = typer.Option(False, "--json", help="Print the result and probe log as JSON."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log probe activity to stderr."),
) -> None:
    """Convert one HTML document."""
    load_dotenv()
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(message)s")

    settings = ProbeSettings.from_env()
    if timeout is not None:
        settings = replace(settings, timeout=max(MIN_PROBE_TIMEOUT, timeout))
    try:
        html = _read_source(source)
        engine = Miperize(_load_options(config), probe_settings=settings)
    except (OSError, ValueError, ConfigError) as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=2)

    try:
        result = asyncio.run(engine.transform_document(html))
    except MiperizeError as exc:
        typer.echo(f"fatal: {exc}", err=True)
        raise typer.Exit(code=3)

    payload = result.to_json() + "\n" if json_out else result.html
    if out is not None:
        out.write_text(payload, encoding="utf-8")
    else:
        sys.stdout.write(payload)
    raise typer.Exit(code=0)


@app.command("doctor", add_help_option=True)
def doctor_cmd() -> None:
    """Print environment and dependency diagnostics."""
    load_dotenv()
    report = build_doctor_report()
    typer.echo(format_doctor_report(report))
    raise typer.Exit(code=0 if report.get("ok", True) else 2)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
