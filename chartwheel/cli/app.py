"""Typer application for the chartwheel command line interface."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer

from ..boot import configure_logging
from ..chart import ChartSnapshot, build_indexes, snapshot_from_json
from ..config.settings import CONFIG_FILENAME, Settings, default_settings, get_config_home, load_settings
from ..errors import SnapshotStructureError
from ..viz import LayoutOptions, build_wheel_layout, export_wheel
from ..viz.core.theme import THEME_PRESETS

LOG = logging.getLogger(__name__)

app = typer.Typer(help="Chart wheel indexing, layout and rendering.", no_args_is_help=True)

_THEME_LABEL = ", ".join(sorted(THEME_PRESETS))


def _load_cli_settings(config: Optional[Path]) -> Settings:
    if config is not None:
        if not config.exists():
            raise typer.BadParameter(f"Settings file not found: {config}", param_hint="--config")
        return load_settings(config)
    candidate = get_config_home() / CONFIG_FILENAME
    if candidate.exists():
        return load_settings(candidate)
    return default_settings()


def _settings(ctx: typer.Context) -> Settings:
    obj = ctx.find_root().obj
    if isinstance(obj, Settings):
        return obj
    return default_settings()


def _read_snapshot(source: str) -> ChartSnapshot:
    try:
        if source == "-":
            text = typer.get_text_stream("stdin").read()
        else:
            text = Path(source).read_text(encoding="utf-8")
    except OSError as exc:
        typer.secho(f"Unable to read snapshot: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from exc
    try:
        return snapshot_from_json(text)
    except SnapshotStructureError as exc:
        typer.secho(f"Invalid chart snapshot: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from exc


def _check_theme(theme: Optional[str]) -> Optional[str]:
    if theme is None:
        return None
    name = theme.strip().lower()
    if name not in THEME_PRESETS:
        raise typer.BadParameter(f"Unknown theme '{theme}'. Expected one of: {_THEME_LABEL}.")
    return name


def _emit_json(payload: Any, out: Optional[Path]) -> None:
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if out is None:
        typer.echo(text)
        return
    try:
        out.write_text(text + "\n", encoding="utf-8")
    except OSError as exc:  # pragma: no cover - filesystem errors reported at runtime
        typer.secho(f"Unable to write output: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from exc
    typer.secho(f"Wrote {out}", fg=typer.colors.GREEN)


def _layout_options(
    settings: Settings,
    *,
    rotation: Optional[float] = None,
    width: Optional[int] = None,
    height: Optional[int] = None,
) -> LayoutOptions:
    rendering = settings.rendering
    return LayoutOptions(
        width=float(width if width is not None else rendering.width),
        height=float(height if height is not None else rendering.height),
        rotation_offset=rotation if rotation is not None else rendering.rotation_offset,
        margin=rendering.margin,
        show_aspects=rendering.show_aspects,
    )


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Settings YAML file (defaults to $CHARTWHEEL_HOME/config.yaml when present).",
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level; overrides LOG_LEVEL and the settings file."
    ),
) -> None:
    """Load settings and configure logging before executing subcommands."""

    settings = _load_cli_settings(config)
    configure_logging(level=log_level, default=settings.logging_level)
    ctx.obj = settings


@app.command("indexes")
def indexes_command(
    snapshot: str = typer.Argument(..., metavar="SNAPSHOT", help="Snapshot JSON file, or '-' for stdin."),
    out: Optional[Path] = typer.Option(None, "--out", help="Write the JSON here instead of stdout."),
) -> None:
    """Dump the lookup tables derived from a snapshot."""

    chart = _read_snapshot(snapshot)
    try:
        indexes = build_indexes(chart)
    except SnapshotStructureError as exc:
        typer.secho(f"Invalid chart snapshot: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from exc
    _emit_json(indexes.to_payload(), out)


@app.command("layout")
def layout_command(
    ctx: typer.Context,
    snapshot: str = typer.Argument(..., metavar="SNAPSHOT", help="Snapshot JSON file, or '-' for stdin."),
    rotation: Optional[float] = typer.Option(None, "--rotation", help="Wheel rotation offset in degrees."),
    theme: Optional[str] = typer.Option(None, "--theme", help=f"Theme preset ({_THEME_LABEL})."),
    out: Optional[Path] = typer.Option(None, "--out", help="Write the JSON here instead of stdout."),
) -> None:
    """Dump the draw descriptors computed for a snapshot."""

    settings = _settings(ctx)
    theme_name = _check_theme(theme) or settings.rendering.theme
    chart = _read_snapshot(snapshot)
    layout = build_wheel_layout(
        chart,
        options=_layout_options(settings, rotation=rotation),
        visual_config=settings.visual or None,
        glyph_config=settings.glyphs or None,
        theme=theme_name,
    )
    _emit_json(layout.to_payload(), out)


@app.command("render")
def render_command(
    ctx: typer.Context,
    snapshot: str = typer.Argument(..., metavar="SNAPSHOT", help="Snapshot JSON file, or '-' for stdin."),
    out: Path = typer.Option(..., "--out", help="Destination file."),
    fmt: Optional[str] = typer.Option(
        None, "--format", help="svg or png (defaults to the --out suffix, then svg)."
    ),
    rotation: Optional[float] = typer.Option(None, "--rotation", help="Wheel rotation offset in degrees."),
    theme: Optional[str] = typer.Option(None, "--theme", help=f"Theme preset ({_THEME_LABEL})."),
    width: Optional[int] = typer.Option(None, "--width", min=100, max=4000, help="Canvas width in pixels."),
    height: Optional[int] = typer.Option(None, "--height", min=100, max=4000, help="Canvas height in pixels."),
) -> None:
    """Render a snapshot to an SVG or PNG file."""

    settings = _settings(ctx)
    theme_name = _check_theme(theme) or settings.rendering.theme
    if fmt is None:
        suffix = out.suffix.lstrip(".").lower()
        fmt_value = suffix if suffix in ("svg", "png") else "svg"
    else:
        fmt_value = fmt.strip().lower()
    if fmt_value not in ("svg", "png"):
        raise typer.BadParameter("Expected 'svg' or 'png'.", param_hint="--format")

    chart = _read_snapshot(snapshot)
    data = export_wheel(
        chart,
        fmt_value,
        options=_layout_options(settings, rotation=rotation, width=width, height=height),
        visual_config=settings.visual or None,
        glyph_config=settings.glyphs or None,
        theme=theme_name,
        pretty=settings.rendering.pretty_svg,
    )
    try:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_bytes(data)
    except OSError as exc:  # pragma: no cover - filesystem errors reported at runtime
        typer.secho(f"Unable to write output: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from exc
    LOG.info("Rendered %s (%d bytes)", out, len(data))
    typer.secho(f"Wrote {out}", fg=typer.colors.GREEN)


__all__ = ["app"]
