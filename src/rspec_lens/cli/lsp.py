"""
LSP (Language Server Protocol) CLI commands.

Commands for running the rspec-lens LSP server and checking its dependencies.
"""

import typer

lsp_app = typer.Typer(
    help="Language Server Protocol (LSP) commands.",
    no_args_is_help=True,
)


@lsp_app.command("run")
def lsp_run(
    tcp: bool = typer.Option(
        False,
        "--tcp",
        help="Use TCP transport (for debugging)",
    ),
    port: int = typer.Option(
        2087,
        "--port",
        help="TCP port (only used with --tcp)",
    ),
) -> None:
    """
    Start the rspec-lens LSP server.

    By default uses stdio transport for editor integration.
    Use --tcp --port for debugging with a TCP connection.
    """
    try:
        if tcp:
            typer.echo(f"Starting rspec-lens LSP server on TCP port {port}...")
            from rspec_lens.lsp.server import server

            server.start_tcp("127.0.0.1", port)
        else:
            from rspec_lens.lsp import start_server

            start_server()
    except ImportError as e:
        typer.echo(
            f"Error: LSP dependencies not installed: {e}\n"
            "Install with: pip install rspec-lens",
            err=True,
        )
        raise typer.Exit(code=1)
    except KeyboardInterrupt:
        typer.echo("\nLSP server stopped.")


@lsp_app.command("check")
def lsp_check() -> None:
    """
    Verify LSP and parser dependencies are installed and show version info.
    """
    from importlib.metadata import PackageNotFoundError, version

    errors = []
    for dist in ("pygls", "lsprotocol", "tree-sitter", "tree-sitter-ruby"):
        try:
            typer.echo(f"{dist + ':':<18}{version(dist)}")
        except PackageNotFoundError:
            errors.append(dist)

    if errors:
        typer.echo(
            f"\nMissing dependencies: {', '.join(errors)}\nInstall with: pip install rspec-lens",
            err=True,
        )
        raise typer.Exit(code=1)

    typer.echo("\nAll LSP dependencies installed.")
