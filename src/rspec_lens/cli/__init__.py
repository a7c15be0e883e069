"""
rspec-lens CLI Package.

- lenses.py: lens listing command
- lsp.py: LSP server commands
- utils.py: Shared utilities
"""

import sys

import typer

from rspec_lens.cli.lenses import lenses_command
from rspec_lens.cli.lsp import lsp_app
from rspec_lens.cli.utils import version_callback

app = typer.Typer(
    help="rspec-lens - run/debug code lenses for RSpec files",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
) -> None:
    """rspec-lens CLI main callback for global options."""
    pass


app.command(name="lenses")(lenses_command)
app.add_typer(lsp_app, name="lsp")


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


__all__ = ["app", "main", "lsp_app", "lenses_command", "version_callback"]

if __name__ == "__main__":
    main(sys.argv[1:])
