"""
Lens settings.

Settings come from ``.rspec-lens.toml`` at the workspace root and can be
overridden by editor initialization options::

    # .rspec-lens.toml
    rspec_command = "docker compose exec api bundle exec rspec"
    debug = false
"""

import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from .errors import make_config_error

CONFIG_FILENAME = ".rspec-lens.toml"

# Editor-side option names, as sent in initializationOptions
OPTION_KEYS = {
    "rspecCommand": "rspec_command",
    "debug": "debug",
}


@dataclass(frozen=True)
class LensSettings:
    """Per-workspace lens settings."""

    rspec_command: str | None = None
    debug: bool = False

    def merged(self, options: dict[str, Any] | None) -> "LensSettings":
        """Overlay editor options; unknown keys and None values are ignored."""
        if not options:
            return self

        changes: dict[str, Any] = {}
        for key, attr in OPTION_KEYS.items():
            value = options.get(key)
            if value is not None:
                changes[attr] = value

        if "debug" in changes:
            changes["debug"] = bool(changes["debug"])
        if "rspec_command" in changes:
            changes["rspec_command"] = str(changes["rspec_command"])
        return replace(self, **changes)


def load_settings(workspace_root: Path) -> LensSettings:
    """
    Load settings from the workspace's ``.rspec-lens.toml``.

    Returns defaults when the file is missing.

    Raises:
        ConfigError: if the file is not valid TOML or a value has the wrong type
    """
    path = workspace_root / CONFIG_FILENAME
    if not path.exists():
        return LensSettings()

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise make_config_error(f"Invalid TOML: {e}", path) from e
    except OSError as e:
        raise make_config_error(f"Cannot read settings: {e}", path) from e

    rspec_command = data.get("rspec_command")
    if rspec_command is not None and not isinstance(rspec_command, str):
        raise make_config_error("rspec_command must be a string", path)

    debug = data.get("debug", False)
    if not isinstance(debug, bool):
        raise make_config_error("debug must be true or false", path)

    return LensSettings(rspec_command=rspec_command, debug=debug)
