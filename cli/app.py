from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import typer

from cli.config import load_config
from cli.render import render_banner, render_result, render_url
from logging_config import configure_logging
from models.records import AgentContext
from services.agent import build_agent
from services.console import StreamLineSource
from services.link import build_link_monitor, log_link_diagnostics
from settings import Settings, get_settings
from transports.auth import basic_auth_token
from transports.dispatcher import build_dispatcher
from transports.urls import MalformedURL, decompose_url

logger = logging.getLogger(__name__)


@dataclass
class CLIState:
    settings: Settings


app = typer.Typer(
    help="Data logger agent: sends a sensor reading to a remote endpoint on a fixed interval.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1, message="CLI state is uninitialized.")
    return state


@app.callback()
def main(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Logging level (defaults to LOG_LEVEL env or INFO).",
    ),
) -> None:
    """Entry point for the CLI."""
    configure_logging(log_level)
    ctx.obj = CLIState(settings=get_settings())


@app.command("run")
def run_command(
    ctx: typer.Context,
    endpoint: Optional[str] = typer.Option(None, "--endpoint", "-e", help="Server URL or broker address."),
    protocol: Optional[str] = typer.Option(None, "--protocol", "-p", help="HTTP or MQTT."),
    sensor_name: Optional[str] = typer.Option(None, "--sensor-name", help="Field name used in the payload."),
    interval: Optional[float] = typer.Option(None, "--interval", "-i", help="Seconds between transmissions."),
    recap: Optional[int] = typer.Option(None, "--recap", help="Recap interval in minutes (0 disables)."),
) -> None:
    """Run the control loop, reading commands from standard input."""
    state = _get_state(ctx)
    config = load_config(
        endpoint=endpoint,
        protocol=protocol,
        sensor_name=sensor_name,
        send_interval=interval,
        recap_interval=recap,
        settings=state.settings,
    )
    link = build_link_monitor(state.settings.link_interface)
    render_banner()
    log_link_diagnostics(link)

    agent = build_agent(config, StreamLineSource(), link, emit=typer.echo, settings=state.settings)
    try:
        agent.run_forever(idle_sleep=state.settings.idle_sleep)
    except KeyboardInterrupt:
        logger.info("Agent stopped by user")


@app.command("send-once")
def send_once_command(
    ctx: typer.Context,
    value: Optional[float] = typer.Option(None, "--value", "-v", help="Reading to send (defaults to 0.0)."),
    endpoint: Optional[str] = typer.Option(None, "--endpoint", "-e", help="Server URL or broker address."),
    protocol: Optional[str] = typer.Option(None, "--protocol", "-p", help="HTTP or MQTT."),
    sensor_name: Optional[str] = typer.Option(None, "--sensor-name", help="Field name used in the payload."),
) -> None:
    """Perform a single transmission and report the outcome."""
    state = _get_state(ctx)
    config = load_config(
        endpoint=endpoint,
        protocol=protocol,
        sensor_name=sensor_name,
        settings=state.settings,
    )
    context = AgentContext(config)
    if value is not None:
        context.reading.value = value

    dispatcher = build_dispatcher(build_link_monitor(state.settings.link_interface), state.settings)
    result = dispatcher.dispatch(context)
    render_result(result)
    if not result.success:
        raise typer.Exit(code=1)


@app.command("decompose")
def decompose_command(
    url: str = typer.Argument(..., help="Endpoint string to split."),
) -> None:
    """Show how an endpoint string is split into scheme, host, port and path."""
    try:
        decomposed = decompose_url(url)
    except MalformedURL as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    render_url(decomposed)


@app.command("encode-auth")
def encode_auth_command(
    username: str = typer.Argument(..., help="Username."),
    password: str = typer.Argument(..., help="Password."),
) -> None:
    """Print the Basic-Auth header value for a credential pair."""
    token = basic_auth_token(username, password)
    if token is None:
        typer.echo("Authorization header omitted (empty username or password).")
        return
    typer.echo(f"Authorization: Basic {token}")
