"""CLI entry point for revtrack."""

from __future__ import annotations

import fnmatch
import logging
import time
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.logging import RichHandler
from rich.syntax import Syntax
from rich.table import Table

from revtrack_core.config import RevtrackConfig, load_config
from revtrack_core.config.loader import DEFAULT_CONFIG_TEMPLATE
from revtrack_core.freshness import (
    FreshnessPoller,
    SourceTracker,
    StalenessReport,
    StateError,
    load_state,
    resolve_policy,
    save_state,
)
from revtrack_core.paths import FileExistenceResolver, unique_dirs
from revtrack_core.registry import PackageId, PackageLocation

app = typer.Typer(
    name="revtrack",
    help="Track which loaded source files changed on disk since the last check.",
)

config_app = typer.Typer(help="Manage revtrack configuration.")
app.add_typer(config_app, name="config")

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}

# Global state
_config: RevtrackConfig | None = None


def _get_config() -> RevtrackConfig:
    if _config is None:
        return load_config()
    return _config


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=_LOG_LEVELS[level],
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to revtrack.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    _config = load_config(config)
    _configure_logging(_config.log_level)


# ---------------------------------------------------------------------------
# State helpers
# ---------------------------------------------------------------------------


def _state_path(root: Path) -> Path:
    cfg = _get_config()
    return root / cfg.state.directory / cfg.state.filename


def _matches_any(path: Path, patterns: set[str]) -> bool:
    """Check whether any component of *path* matches one of *patterns*."""
    return any(part in patterns for part in path.parts)


def _scan_sources(root: Path) -> list[Path]:
    """Files under *root* matching the include globs, minus ignored dirs."""
    cfg = _get_config()
    ignore = set(cfg.watch.ignore_patterns)
    found: list[Path] = []
    for p in sorted(root.rglob("*")):
        if _matches_any(p.relative_to(root), ignore):
            continue
        if not p.is_file():
            continue
        if any(fnmatch.fnmatch(p.name, pat) for pat in cfg.watch.include):
            found.append(p)
    return found


def _open_tracker(root: Path, must_exist: bool) -> SourceTracker:
    """Load the tracker saved under *root*, or start an empty one.

    Alternates from the config are layered over the ones in the state file.
    """
    cfg = _get_config()
    policy = resolve_policy(cfg.watch.policy)
    state_path = _state_path(root)

    if not state_path.is_file():
        if must_exist:
            rprint(f"[red]No state found at {state_path}.[/red] Run 'revtrack track' first.")
            raise typer.Exit(code=1)
        return SourceTracker(alternates=dict(cfg.alternates), policy=policy)

    try:
        tracker = load_state(state_path, policy=policy)
    except StateError as e:
        rprint(f"[red]{e}[/red]")
        raise typer.Exit(code=1) from e

    if cfg.alternates:
        tracker.resolver = FileExistenceResolver(
            {**tracker.resolver.alternates, **cfg.alternates}
        )
    return tracker


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def track(
    path: Annotated[str, typer.Argument(help="Package root to track")] = ".",
    name: Annotated[str | None, typer.Option("--name", "-n", help="Package name (default: directory name)")] = None,
) -> None:
    """Register a package root and start tracking its source files."""
    root = Path(path).resolve()
    if not root.is_dir():
        rprint(f"[red]Not a directory:[/red] {root}")
        raise typer.Exit(code=1)

    tracker = _open_tracker(root, must_exist=False)
    package = PackageId(name=name or root.name or "root")
    tracker.register(PackageLocation(package=package, base_dir=str(root)))

    files = [str(f) for f in _scan_sources(root)]
    tracker.track_many(files, package)

    state_path = _state_path(root)
    save_state(tracker, state_path)
    logger.debug("Saved state to %s", state_path)
    rprint(
        f"[green]Tracking[/green] {len(files)} file(s) in "
        f"{len(unique_dirs(files))} director(ies) for package [bold]{package}[/bold]"
    )


def _display_report(report: StalenessReport) -> None:
    """Show stale and missing files as a Rich table."""
    table = Table(title="Staleness Check")
    table.add_column("File", style="cyan")
    table.add_column("Package", style="green")
    table.add_column("Status", justify="center")
    for entry in report.stale:
        table.add_row(entry.package_path, str(entry.package), "[red]stale[/red]")
    for missing in report.missing:
        table.add_row(missing, "-", "[yellow]missing[/yellow]")
    rprint(table)


@app.command()
def check(
    ci: Annotated[bool, typer.Option("--ci", help="Machine-readable output")] = False,
    fail_on_stale: Annotated[bool, typer.Option("--fail-on-stale", help="Exit 1 if stale files found")] = False,
    no_update: Annotated[bool, typer.Option("--no-update", help="Do not advance the checkpoint")] = False,
    path: Annotated[str, typer.Argument(help="Path to project root")] = ".",
) -> None:
    """Report tracked files modified since the last check."""
    root = Path(path).resolve()
    tracker = _open_tracker(root, must_exist=True)
    report = tracker.check(update=not no_update)
    if not no_update:
        save_state(tracker, _state_path(root))

    if ci:
        # Plain text, one path per line
        for entry in report.stale:
            typer.echo(f"STALE {entry.path}")
        for missing in report.missing:
            typer.echo(f"MISSING {missing}")
        if not report.stale:
            typer.echo("OK: no tracked files changed")
        typer.echo(f"checked={report.total_files}")
    else:
        if report.stale or report.missing:
            _display_report(report)
        if report.stale:
            rprint(f"\n[red]{len(report.stale)} stale file(s) found.[/red]")
        else:
            rprint(f"\n[green]All {report.total_files} tracked file(s) up to date.[/green]")

    if fail_on_stale and report.stale:
        raise typer.Exit(code=1)


def _print_changes(report: StalenessReport) -> None:
    for entry in report.stale:
        rprint(f"[red]changed[/red] {entry.package_path} [dim]({entry.package})[/dim]")


@app.command()
def watch(
    path: Annotated[str, typer.Argument(help="Path to project root")] = ".",
    interval: Annotated[float | None, typer.Option("--interval", "-i", help="Seconds between checks")] = None,
) -> None:
    """Poll tracked files and print changes until interrupted."""
    root = Path(path).resolve()
    cfg = _get_config()
    tracker = _open_tracker(root, must_exist=True)
    poller = FreshnessPoller(
        tracker,
        interval=interval or cfg.watch.poll_interval,
        callback=_print_changes,
    )
    poller.start()
    rprint(f"Watching {root} (Ctrl-C to stop)")
    try:
        while True:
            time.sleep(0.5)
    except KeyboardInterrupt:
        pass
    finally:
        poller.stop()
        save_state(tracker, _state_path(root))


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default revtrack.yaml in current directory."""
    target = Path("revtrack.yaml")
    if target.exists() and not force:
        rprint("[yellow]revtrack.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")
