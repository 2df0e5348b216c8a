"""CLI entrypoint for filepick."""

from __future__ import annotations

import json
from pathlib import Path

import click
from pydantic import ValidationError

from filepick.app import FilePickApp
from filepick.config.store import SettingsStore
from filepick.fs.scanner import scan_all
from filepick.paths import settings_path
from filepick.runtime_logging import configure_runtime_logging
from filepick.search.formatting import format_labels
from filepick.search.matching import match_paths
from filepick.version import __version__


@click.group(invoke_without_command=True, context_settings={"help_option_names": ["-h", "--help"]})
@click.pass_context
def main(ctx: click.Context) -> None:
    """filepick: incremental fuzzy file picker for the terminal."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(run)


@main.command()
@click.argument("root", required=False, default=".", type=click.Path(file_okay=False))
@click.option("--query", "-q", default="", help="Initial filter text")
@click.option("--log-level", default=None, help="off, error, warning, info or debug")
@click.option("--log-file", default=None, type=click.Path(dir_okay=False))
def run(root: str, query: str, log_level: str | None, log_file: str | None) -> None:
    """Open the picker on ROOT."""
    app = FilePickApp(
        root=Path(root).expanduser().resolve(),
        initial_query=query,
        log_level=log_level,
        log_file=log_file,
    )
    app.run()


@main.command()
@click.argument("root", type=click.Path(exists=True, file_okay=False))
@click.option("--query", "-q", default="", help="Filter text")
@click.option("--width", default=80, type=click.IntRange(min=0), show_default=True)
@click.option("--limit", default=0, type=click.IntRange(min=0), help="Maximum lines (0: no limit)")
@click.option("--raw", is_flag=True, help="Print paths instead of labels")
def scan(root: str, query: str, width: int, limit: int, raw: bool) -> None:
    """Scan ROOT without the UI and print matching files."""
    configure_runtime_logging()
    settings = SettingsStore().load()
    result = scan_all(Path(root).expanduser().resolve(), settings.scan)
    if result.no_files:
        raise click.ClickException(f"No files found under {root}")

    matched = match_paths(result.state.discovered_files, query)
    if limit:
        matched = matched[:limit]
    lines = matched if raw else format_labels(matched, width)
    for line in lines:
        click.echo(line)


@main.command("settings-path")
def settings_path_command() -> None:
    """Print settings file path."""
    click.echo(str(settings_path()))


@main.command("settings-set")
@click.argument("key")
@click.argument("value")
def settings_set_command(key: str, value: str) -> None:
    """Set the dotted settings KEY (e.g. scan.interval_ms) to VALUE.

    VALUE is read as JSON when it parses, otherwise as a plain string.
    """
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError:
        parsed = value

    try:
        SettingsStore().update(key, parsed)
    except KeyError as exc:
        raise click.ClickException(str(exc.args[0])) from exc
    except ValidationError as exc:
        raise click.ClickException(f"Invalid value for {key}: {exc.errors()[0]['msg']}") from exc
    click.echo(f"{key} = {json.dumps(parsed)}")


@main.command()
def about() -> None:
    """Show version and project summary."""
    payload = {
        "name": "filepick",
        "version": __version__,
        "description": "Incremental fuzzy file picker",
    }
    click.echo(json.dumps(payload, indent=2))


if __name__ == "__main__":
    main()
