from __future__ import annotations

from typing import Any, Iterable

import typer

from models.schemas import DecomposedURL, TransmissionResult
from services.commands import COMMAND_HELP


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def render_banner() -> None:
    echo_heading("--- Data Logger CLI ---")
    typer.echo("Commands:")
    width = max(len(usage) for usage, _ in COMMAND_HELP)
    for usage, description in COMMAND_HELP:
        typer.echo(f"  {usage.ljust(width)}  {description}")
    typer.echo("-----------------------------")


def render_url(url: DecomposedURL) -> None:
    echo_key_values(
        [
            ("scheme", url.scheme),
            ("host", url.host),
            ("port", url.port),
            ("path", url.path),
        ]
    )


def render_result(result: TransmissionResult) -> None:
    echo_heading("Transmission Result")
    echo_key_values(
        [
            ("protocol", result.protocol),
            ("success", result.success),
            ("status_code", result.status_code),
            ("error_kind", result.error_kind.value if result.error_kind else None),
        ]
    )
    if result.warnings:
        typer.echo("warnings:")
        for warning in result.warnings:
            typer.echo(f"  - {warning.value}")
