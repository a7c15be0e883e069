"""
rspec-lens CLI Utilities.

Shared utility functions used across CLI modules.
"""

import platform

import typer

from rspec_lens._version import get_version


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        python_version = platform.python_version()
        python_impl = platform.python_implementation()

        # Check LSP server availability
        lsp_available = False
        try:
            # Suppress verbose pygls logging during import check
            # MUST set logging level BEFORE importing pygls/rspec_lens.lsp.server
            import logging

            logging.getLogger("pygls.feature_manager").setLevel(logging.ERROR)
            logging.getLogger("pygls").setLevel(logging.ERROR)

            import rspec_lens.lsp.server  # noqa: F401

            lsp_available = True
        except ImportError:
            pass

        typer.echo(f"rspec-lens {get_version()}")
        typer.echo(f"Python:       {python_version} ({python_impl})")
        typer.echo(f"LSP Server:   {'available' if lsp_available else 'not installed'}")

        raise typer.Exit()
