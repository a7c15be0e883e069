"""
Shell commands attached to each lens.

Two command strings are produced per location:

- the terminal command, built from the resolved base command
- the runner command, always ``bundle exec rspec``, because the editor's test
  runner manages its own execution context

Paths are interpolated as-is; no shell quoting is applied.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

RUNNER = "rspec"
RUNNER_COMMAND = f"bundle exec {RUNNER}"
BUNDLER_PREFIX = "bundle exec "
BINSTUB = Path("bin") / RUNNER
LOCKFILE = "Gemfile.lock"


@dataclass(frozen=True)
class LensCommands:
    """Command strings for one source location."""

    terminal: str
    runner: str


def resolve_base_command(working_dir: Path, override: str | None = None) -> str:
    """
    Pick the base command used for terminal runs.

    Precedence:
        1. ``override``, verbatim
        2. ``bin/rspec`` if that binstub exists, else ``rspec``
        3. prefixed with ``bundle exec`` when ``Gemfile.lock`` exists
    """
    if override is not None:
        return override

    command = BINSTUB.as_posix() if (working_dir / BINSTUB).exists() else RUNNER
    if (working_dir / LOCKFILE).exists():
        command = f"{BUNDLER_PREFIX}{command}"

    logger.debug(f"Resolved base command for {working_dir}: {command}")
    return command


def build_commands(path: str, line: int, base_command: str) -> LensCommands:
    """Build both commands for ``path`` at 1-indexed ``line``."""
    target = f"{path}:{line}"
    return LensCommands(
        terminal=f"{base_command} {target}",
        runner=f"{RUNNER_COMMAND} {target}",
    )
