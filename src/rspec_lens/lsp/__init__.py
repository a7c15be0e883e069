"""
rspec-lens Language Server Protocol implementation.

Provides IDE features for RSpec files:
- Code lenses to run, run in terminal and debug examples and groups
"""

from .server import start_server

__all__ = ["start_server"]
