"""CLI interface for netpulse.

Usage:
    netpulse probe [--url URL] [--timeout SECONDS]
    netpulse watch [--interval SECONDS] [--duration SECONDS]
    netpulse version
"""

import time
from datetime import datetime
from typing import Optional

import typer
from dependency_injector import providers

from netpulse import __version__
from netpulse.core.container import ApplicationContainer
from netpulse.core.logger import setup_logging
from netpulse.core.settings import ConnectivitySettings

# Create Typer app
app = typer.Typer(
    name="netpulse",
    help="netpulse - Internet connectivity status from network signals and an active probe",
    add_completion=False,
)

WATCH_TICK = 0.5  # seconds between checks of the watch deadline


def _load_settings(**overrides) -> ConnectivitySettings:
    """Build settings from the environment plus command-line overrides."""
    try:
        return ConnectivitySettings().with_overrides(**overrides)
    except (TypeError, ValueError) as e:
        typer.echo(f"❌ Error: {e}", err=True)
        raise typer.Exit(2)


def _build_container(settings: ConnectivitySettings) -> ApplicationContainer:
    container = ApplicationContainer()
    container.settings.override(providers.Object(settings))
    return container


def _format_state(connected: bool) -> str:
    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    return f"{timestamp}  {'🟢 Online' if connected else '🔴 Offline'}"


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Log level (DEBUG, INFO, WARNING...)"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Also write logs to this file"),
):
    """Configure logging for every command."""
    settings = ConnectivitySettings()
    setup_logging(
        level=(log_level or settings.log_level).upper(),
        log_file=log_file or settings.log_file,
    )


@app.command()
def version():
    """Show netpulse version."""
    typer.echo(f"netpulse v{__version__}")


@app.command()
def probe(
    url: Optional[str] = typer.Option(None, "--url", "-u", help="Probe target (default: NETPULSE_PROBE_URL)"),
    timeout: Optional[float] = typer.Option(None, "--timeout", "-t", help="Connect timeout in seconds"),
):
    """Run one reachability probe."""
    settings = _load_settings(probe_url=url, probe_connect_timeout=timeout)
    reachability_probe = _build_container(settings).probe()

    typer.echo(f"🔄 Probing {reachability_probe.url}...")
    if reachability_probe.check():
        typer.echo("✅ Reachable")
        return

    typer.echo("❌ Unreachable", err=True)
    raise typer.Exit(1)


@app.command()
def watch(
    interval: Optional[float] = typer.Option(None, "--interval", "-i", help="Seconds between network polls"),
    duration: Optional[float] = typer.Option(None, "--duration", "-d", help="Stop after this many seconds"),
):
    """Print connectivity changes until interrupted."""
    settings = _load_settings(poll_interval=interval)
    holder = _build_container(settings).state_holder()

    subscription = holder.subscribe(lambda connected: typer.echo(_format_state(connected)))
    deadline = time.monotonic() + duration if duration is not None else None

    try:
        while deadline is None or time.monotonic() < deadline:
            time.sleep(WATCH_TICK)
    except KeyboardInterrupt:
        typer.echo("⏹ Stopped")
    finally:
        subscription.cancel()
        holder.close()


if __name__ == "__main__":
    app()
