"""
Lens listing command.

Prints the code lenses computed for spec files, as a table or as JSON.
"""

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from rspec_lens.core.code_lens import collect_code_lenses, is_spec_file, relative_spec_path
from rspec_lens.core.config import LensSettings, load_settings
from rspec_lens.core.errors import RspecLensError
from rspec_lens.core.records import LensKind, LensRecord

console = Console()


def _spec_files(paths: list[Path]) -> list[Path]:
    """Expand directories into the spec files they contain."""
    files: list[Path] = []
    for path in paths:
        if path.is_dir():
            files.extend(sorted(p for p in path.rglob("*") if p.is_file() and is_spec_file(p)))
        else:
            files.append(path)
    return files


def _render_table(records: list[LensRecord]) -> Table:
    table = Table(title="Code Lenses")
    table.add_column("Line", justify="right")
    table.add_column("Name")
    table.add_column("Group", justify="right", style="dim")
    table.add_column("Id", justify="right")
    table.add_column("Command")

    # One row per example/group; the terminal lens carries the full command
    for record in records:
        if record.data.type is not LensKind.TEST_IN_TERMINAL:
            continue
        table.add_row(
            str(record.location.start_line + 1),
            escape(record.name),
            "" if record.data.group_id is None else str(record.data.group_id),
            "" if record.data.id is None else f"[bold]{record.data.id}[/bold]",
            escape(record.command_text),
        )
    return table


def lenses_command(
    paths: Annotated[list[Path], typer.Argument(help="Spec files or directories")],
    workspace: Annotated[
        Path | None,
        typer.Option("--workspace", "-w", help="Workspace root (default: current directory)"),
    ] = None,
    rspec_command: Annotated[
        str | None,
        typer.Option("--rspec-command", help="Base command for terminal runs"),
    ] = None,
    debug: Annotated[bool, typer.Option("--debug", help="Log every processed call")] = False,
    output_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """List run/debug code lenses for RSpec files."""
    workspace_root = (workspace or Path.cwd()).resolve()

    try:
        settings = load_settings(workspace_root).merged(
            {"rspecCommand": rspec_command, "debug": debug or None}
        )
    except RspecLensError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    if settings.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(message)s")

    results: dict[str, list[LensRecord]] = {}
    for spec_file in _spec_files(paths):
        try:
            source = spec_file.read_bytes()
        except OSError as e:
            console.print(f"[red]Cannot read {escape(str(spec_file))}: {escape(str(e))}[/red]")
            raise typer.Exit(1)
        try:
            name = relative_spec_path(spec_file, workspace_root)
            results[name] = _collect(source, spec_file, workspace_root, settings)
        except RspecLensError as e:
            console.print(f"[red]{escape(str(e))}[/red]")
            raise typer.Exit(1)

    if output_json:
        data = {name: [r.to_dict() for r in records] for name, records in results.items()}
        console.print_json(json.dumps(data))
        return

    if not results:
        console.print("[dim]No spec files found.[/dim]")
        return

    for name, records in results.items():
        console.print(f"[bold]{escape(name)}[/bold]", soft_wrap=True)
        if records:
            console.print(_render_table(records))
        else:
            console.print("[dim]  No examples or groups.[/dim]")


def _collect(
    source: bytes, spec_file: Path, workspace_root: Path, settings: LensSettings
) -> list[LensRecord]:
    return collect_code_lenses(
        source,
        spec_file.resolve(),
        workspace_root=workspace_root,
        rspec_command=settings.rspec_command,
        debug=settings.debug,
    )
