"""
Entry point for the rspec-lens LSP server.

Usage:
    python -m rspec_lens.lsp
"""

from .server import start_server

if __name__ == "__main__":
    start_server()
