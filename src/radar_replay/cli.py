"""
Radar Replay CLI
================

Main entry point for the radar replay tool.
Opens a recording in the interactive viewer, or inspects it headless.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from radar_replay.config.io import ConfigIO
from radar_replay.config.replay_config import ReplayConfig
from radar_replay.core.display import DisplayMode
from radar_replay.core.entities import BeamState, TrackState, TruthState
from radar_replay.core.exceptions import ReplayError, format_exception_message
from radar_replay.core.export import export_csv
from radar_replay.core.session import ReplaySession
from radar_replay.utils.logging_config import (
    DEFAULT_MODULE_LEVELS,
    configure_module_log_levels,
    setup_logging,
)

app = typer.Typer(
    help="Radar Replay - step through recorded radar simulations",
    add_completion=False,
)
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    log_file: Optional[str] = typer.Option(
        None, "--log-file", help="Also write logs to this file (JSON lines)"
    ),
):
    """
    Radar Replay.
    """
    setup_logging(
        "radar_replay",
        level=logging.DEBUG if verbose else logging.INFO,
        log_file=log_file,
        structured=log_file is not None,
    )
    if not verbose:
        configure_module_log_levels(DEFAULT_MODULE_LEVELS)


def _fail(exc: BaseException) -> None:
    console.print(f"[bold red]{escape(format_exception_message(exc))}[/bold red]")
    raise typer.Exit(code=1)


def _load_config(
    config_path: Optional[Path],
    mode: Optional[DisplayMode] = None,
    step: Optional[float] = None,
    paused: Optional[bool] = None,
) -> ReplayConfig:
    """Config file (or defaults) with command-line overrides on top."""
    config = ConfigIO.load(config_path) if config_path else ReplayConfig.create_default()

    overrides: Dict[str, Dict[str, Any]] = {}
    if step is not None:
        overrides.setdefault("playback", {})["default_step"] = step
    if paused is not None:
        overrides.setdefault("playback", {})["start_paused"] = paused
    if mode is not None:
        overrides.setdefault("display", {})["mode"] = mode
    if overrides:
        config = ReplayConfig.create_with_overrides(overrides, base_config=config)
    return config


def _format_value(value: Any) -> str:
    if isinstance(value, (TruthState, TrackState)):
        p = value.position
        return f"pos=({p.x:.1f}, {p.y:.1f}, {p.z:.1f})"
    if isinstance(value, BeamState):
        t = value.target
        return f"az={t.azimuth:+.4f} el={t.elevation:+.4f} width={value.width:.4f}"
    return repr(value)


@app.command()
def play(
    recording: Path = typer.Argument(..., help="Recording file (one JSON step per line)"),
    mode: Optional[DisplayMode] = typer.Option(
        None, "--mode", "-m", case_sensitive=False, help="Initial display mode"
    ),
    step: Optional[float] = typer.Option(
        None, "--step", "-s", help="Initial clock step per tick (negative plays backwards)"
    ),
    paused: Optional[bool] = typer.Option(
        None, "--paused/--no-paused", help="Start paused (overrides the config file)"
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file (YAML/JSON)"
    ),
):
    """
    Open a recording in the interactive 3D viewer.
    """
    console.print(
        Panel.fit(
            "Radar Replay",
            style="bold blue",
            subtitle=escape(str(recording)),
        )
    )

    try:
        config = _load_config(config_file, mode=mode, step=step, paused=paused)
        session = ReplaySession.from_recording(recording, config)
    except ReplayError as e:
        _fail(e)

    start, end = session.time_bounds()
    console.print(
        f"[green]Loaded {len(session.entities)} entities "
        f"({start:.3f}s .. {end:.3f}s)[/green]"
    )

    from radar_replay.visualization.replay_viewer import ReplayViewer

    try:
        ReplayViewer(session, config).launch()
    except KeyboardInterrupt:
        console.print("\n[yellow]Replay stopped (KeyboardInterrupt)[/yellow]")


@app.command()
def info(
    recording: Path = typer.Argument(..., help="Recording file (one JSON step per line)"),
):
    """
    Summarize the entities in a recording.
    """
    try:
        session = ReplaySession.from_recording(recording)
    except ReplayError as e:
        _fail(e)

    table = Table(title=f"Entities in {recording.name}")
    table.add_column("Key", style="cyan")
    table.add_column("Kind")
    table.add_column("Samples", justify="right")
    table.add_column("First (s)", justify="right")
    table.add_column("Last (s)", justify="right")

    for entity in session.entities.all():
        series = entity.series
        table.add_row(
            entity.key,
            entity.kind.value,
            str(len(series)),
            f"{series.start_time:.3f}",
            f"{series.end_time:.3f}",
        )

    console.print(table)


@app.command()
def probe(
    recording: Path = typer.Argument(..., help="Recording file (one JSON step per line)"),
    time: float = typer.Option(..., "--time", "-t", help="Playback time to resolve at"),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file (YAML/JSON)"
    ),
):
    """
    Resolve every entity at one playback time and print its state.
    """
    try:
        config = _load_config(config_file)
        session = ReplaySession.from_recording(recording, config)
    except ReplayError as e:
        _fail(e)

    session.clock.time = time
    active = session.resolve()

    table = Table(title=session.elapsed_text())
    table.add_column("Key", style="cyan")
    table.add_column("Kind")
    table.add_column("Active")
    table.add_column("Value")
    for view in session.snapshot():
        table.add_row(
            view.key,
            view.kind.value,
            "[green]yes[/green]" if view.active else "[dim]no[/dim]",
            _format_value(view.value),
        )

    console.print(table)
    console.print(f"{active}/{len(session.entities)} entities active")


@app.command()
def export(
    recording: Path = typer.Argument(..., help="Recording file (one JSON step per line)"),
    output: Path = typer.Argument(..., help="Output CSV file"),
):
    """
    Export entity histories to CSV (one row per entity sample).
    """
    try:
        session = ReplaySession.from_recording(recording)
        path = export_csv(session.entities.all(), output)
    except ReplayError as e:
        _fail(e)

    console.print(f"[green]Exported to {path}[/green]")


@app.command("init-config")
def init_config(
    output: Path = typer.Argument(Path("replay.yaml"), help="Where to write the config"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file"),
):
    """
    Write the default configuration to a YAML or JSON file.
    """
    if output.exists() and not force:
        console.print(f"[red]{output} already exists (use --force to overwrite)[/red]")
        raise typer.Exit(code=1)

    try:
        ConfigIO.save(ReplayConfig.create_default(), output)
    except ReplayError as e:
        _fail(e)

    console.print(f"[green]Default configuration written to {output}[/green]")


if __name__ == "__main__":
    app()
