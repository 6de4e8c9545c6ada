# Copyright 2026 Pennyworth Technologies, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""SPLINDE CLI - view and edit report trees from the terminal."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Callable

import click
import yaml
from rich.console import Console
from rich.markup import escape

from splinde import __version__
from splinde.config import (
    ConfigLoadError,
    ConfigValidationError,
    SplindeConfig,
    generate_config_template,
    get_config,
    get_global_config_path,
    get_project_config_path,
    load_config_file,
)
from splinde.data import demo_data, load_tree
from splinde.editor import EditResult, TreeEditor
from splinde.errors import SplindeError
from splinde.notifications import NotificationCenter, Severity
from splinde.renderers import OutputFormat, render_tree
from splinde.tree.navigation import Path as TreePath
from splinde.tree.navigation import PathError, parse_path

console = Console()

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

SEVERITY_STYLES = {
    Severity.SUCCESS: ("✓", "green"),
    Severity.INFO: ("ℹ", "blue"),
    Severity.ERROR: ("✗", "red"),
}


class TreePathType(click.ParamType):
    """Dotted node path such as ``1.0``; ``root`` (or ``.``) is the root."""

    name = "path"

    def convert(self, value, param, ctx) -> TreePath:
        if isinstance(value, tuple):
            return value
        try:
            return parse_path(value)
        except PathError as e:
            self.fail(str(e), param, ctx)


TREE_PATH = TreePathType()


def _fail(message: str) -> None:
    console.print(f"[red]Error:[/red] {escape(message)}")
    raise SystemExit(1)


def _load_config(ctx: click.Context) -> SplindeConfig:
    """Effective config for this invocation, with the --data flag applied."""
    if "config" not in ctx.obj:
        try:
            config = get_config(config_path=ctx.obj.get("config_path"))
        except (ConfigLoadError, ConfigValidationError) as e:
            _fail(str(e))
        if ctx.obj.get("data_path") is not None:
            config.data.path = str(ctx.obj["data_path"])
        ctx.obj["config"] = config
    return ctx.obj["config"]


def _load_editor(ctx: click.Context) -> TreeEditor:
    config = _load_config(ctx)
    try:
        tree = load_tree(Path(config.data.path) if config.data.path else None)
    except SplindeError as e:
        _fail(str(e))
    return TreeEditor(
        tree,
        notifications=NotificationCenter(default_duration_ms=config.notifications.duration_ms),
    )


def _render(ctx: click.Context, editor: TreeEditor, output_format: str, depth: int | None = None) -> str:
    display = _load_config(ctx).display
    return render_tree(
        editor.tree,
        format=OutputFormat(output_format),
        depth=depth,
        precision=display.precision,
        width=display.width,
        icons=display.icons,
    )


def _run_edit(
    ctx: click.Context,
    output_format: str,
    edit: Callable[[TreeEditor], EditResult],
) -> None:
    """Load the tree, apply one edit, and print the outcome.

    Nothing is written back; the edited tree goes to stdout.
    """
    editor = _load_editor(ctx)
    try:
        result = edit(editor)
    except PathError as e:
        _fail(str(e))

    if output_format == OutputFormat.JSON.value:
        print(json.dumps({
            "applied": result.applied,
            "notification": result.notification.to_dict() if result.notification else None,
            "tree": result.tree.to_dict(),
        }, indent=2, ensure_ascii=False))
        return

    click.echo(_render(ctx, editor, output_format), nl=False)
    if result.notification is not None:
        symbol, color = SEVERITY_STYLES[result.notification.severity]
        console.print(f"[{color}]{symbol}[/{color}] {escape(result.notification.message)}")
    elif not result.applied:
        console.print("[yellow]No change[/yellow]")


format_option = click.option(
    "--format", "-f", "output_format",
    type=click.Choice([f.value for f in OutputFormat]),
    default=OutputFormat.ASCII.value,
    help="Output format: ascii (default) or json",
)


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    envvar="SPLINDE_LOG_LEVEL",
    help="Logging level (default: WARNING)",
)
@click.option(
    "--data", "data_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON or YAML tree file (demo report if not set)",
)
@click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Project config file (default: ./splinde.json)",
)
@click.pass_context
def main(ctx: click.Context, log_level: str, data_path: Path | None, config_path: Path | None) -> None:
    """SPLINDE - report trees whose sections total their entries."""
    level = getattr(logging, log_level.upper())
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    # basicConfig leaves an already configured root alone
    logging.getLogger().setLevel(level)
    ctx.ensure_object(dict)
    ctx.obj["data_path"] = data_path
    ctx.obj["config_path"] = config_path


@main.command()
def version() -> None:
    """Show version."""
    console.print(f"splinde {__version__}")


@main.command()
@click.option(
    "--format", "-f", "output_format",
    type=click.Choice(["json", "yaml"]),
    default="json",
    help="Serialization of the raw demo data",
)
def demo(output_format: str) -> None:
    """Print the demo report in raw exchange shape."""
    data = demo_data()
    if output_format == "yaml":
        click.echo(yaml.safe_dump(data, sort_keys=False, allow_unicode=True), nl=False)
    else:
        print(json.dumps(data, indent=2, ensure_ascii=False))


@main.command()
@format_option
@click.option("--depth", "-d", type=click.IntRange(min=0), default=None, help="Maximum depth to show")
@click.pass_context
def show(ctx: click.Context, output_format: str, depth: int | None) -> None:
    """Show the tree with section totals."""
    editor = _load_editor(ctx)
    click.echo(_render(ctx, editor, output_format, depth), nl=False)
    if output_format == OutputFormat.JSON.value:
        click.echo()


@main.command()
@click.argument("path", type=TREE_PATH)
@click.argument("name")
@format_option
@click.pass_context
def rename(ctx: click.Context, path: TreePath, name: str, output_format: str) -> None:
    """Rename the node at PATH."""
    _run_edit(ctx, output_format, lambda editor: editor.rename(path, name))


@main.command("set-value")
@click.argument("path", type=TREE_PATH)
@click.argument("value")
@format_option
@click.pass_context
def set_value(ctx: click.Context, path: TreePath, value: str, output_format: str) -> None:
    """Set the value of the entry at PATH (non-numbers count as 0)."""
    _run_edit(ctx, output_format, lambda editor: editor.set_value(path, value))


@main.command("set-note")
@click.argument("path", type=TREE_PATH)
@click.argument("note")
@format_option
@click.pass_context
def set_note(ctx: click.Context, path: TreePath, note: str, output_format: str) -> None:
    """Set the note of the entry at PATH."""
    _run_edit(ctx, output_format, lambda editor: editor.set_note(path, note))


@main.command("add-entry")
@click.argument("path", type=TREE_PATH, default="root")
@format_option
@click.pass_context
def add_entry(ctx: click.Context, path: TreePath, output_format: str) -> None:
    """Append a new entry to the section at PATH."""
    _run_edit(ctx, output_format, lambda editor: editor.add_entry(path))


@main.command("add-section")
@click.argument("path", type=TREE_PATH, default="root")
@format_option
@click.pass_context
def add_section(ctx: click.Context, path: TreePath, output_format: str) -> None:
    """Append a new, empty section to the section at PATH."""
    _run_edit(ctx, output_format, lambda editor: editor.add_section(path))


@main.command()
@click.argument("path", type=TREE_PATH)
@format_option
@click.pass_context
def remove(ctx: click.Context, path: TreePath, output_format: str) -> None:
    """Remove the node at PATH (the root cannot be removed)."""
    _run_edit(ctx, output_format, lambda editor: editor.remove(path))


@main.command()
@click.option("--host", default=None, help="Host to bind to (default from config)")
@click.option("--port", "-p", type=int, default=None, help="Port to listen on (default from config)")
@click.pass_context
def serve(ctx: click.Context, host: str | None, port: int | None) -> None:
    """Serve the browser editor."""
    from splinde.server.app import run_server

    config = _load_config(ctx)
    if host is not None:
        config.server.host = host
    if port is not None:
        config.server.port = port

    try:
        config.validate()
    except ConfigValidationError as e:
        _fail(str(e))

    run_server(config)


@main.group()
def config() -> None:
    """Configuration management."""
    pass


@config.command("show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Show effective configuration (merged from all sources)."""
    print(json.dumps(_load_config(ctx).to_dict(), indent=2))


@config.command("init")
@click.option("--global", "is_global", is_flag=True, help="Create global config at ~/.splinde_config.json")
@click.option("--force", "-f", is_flag=True, help="Overwrite existing config file")
@click.pass_context
def config_init(ctx: click.Context, is_global: bool, force: bool) -> None:
    """Write a commented configuration template."""
    if is_global:
        config_path = get_global_config_path()
    else:
        config_path = ctx.obj.get("config_path") or get_project_config_path()

    if config_path.exists() and not force:
        console.print(f"[red]Error:[/red] Config file already exists: {config_path}")
        console.print("Use --force to overwrite")
        raise SystemExit(1)

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(json.dumps(generate_config_template(), indent=2))

    console.print(f"[green]Created config file:[/green] {config_path}")


@config.command("validate")
@click.pass_context
def config_validate(ctx: click.Context) -> None:
    """Validate the global and project config files.

    Unknown fields and invalid values are errors. Exits non-zero on failure.
    """
    paths = [
        ("global", get_global_config_path()),
        ("project", ctx.obj.get("config_path") or get_project_config_path()),
    ]

    errors = []
    for label, path in paths:
        if not path.exists():
            console.print(f"[dim]{label}: {path} (not found, skipped)[/dim]")
            continue
        try:
            load_config_file(path, strict=True).validate()
            console.print(f"[green]✓[/green] {label}: {path}")
        except (ConfigLoadError, ConfigValidationError) as e:
            errors.append(str(e))
            console.print(f"[red]✗[/red] {label}: {path}")
            console.print(f"  {e}")

    if errors:
        raise SystemExit(1)
