"""
rspec-lens - run/debug code lenses for RSpec files.

Statically analyzes Ruby spec files and derives one set of run, run-in-terminal
and debug affordances per example and per example group.
"""

from __future__ import annotations

from ._version import __version__
from .core.code_lens import CodeLensVisitor, collect_code_lenses, is_spec_file
from .core.errors import ConfigError, RspecLensError, WorkspaceError
from .core.records import LensCollector, LensRecord

__all__ = [
    "__version__",
    "CodeLensVisitor",
    "collect_code_lenses",
    "is_spec_file",
    "LensCollector",
    "LensRecord",
    "RspecLensError",
    "WorkspaceError",
    "ConfigError",
]
