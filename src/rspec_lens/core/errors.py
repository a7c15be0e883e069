"""
Error types for rspec-lens.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class RspecLensError(Exception):
    """Base exception for all rspec-lens errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class WorkspaceError(RspecLensError):
    """Raised when a spec file is not under the workspace root."""

    pass


class ConfigError(RspecLensError):
    """
    Raised when the settings file cannot be used.

    Examples:
    - Malformed TOML
    - ``rspec_command`` that is not a string
    - ``debug`` that is not a boolean
    """

    pass


@dataclass
class ErrorContext:
    """
    Context information for an error, including source location.

    Attributes:
        file: Path to the file the error refers to
        line: Line number (1-indexed), 0 when unknown
        column: Column number (1-indexed), 0 when unknown
    """

    file: Path
    line: int = 0
    column: int = 0

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            ``file``, ``file:line`` or ``file:line:column``
        """
        location = str(self.file)
        if self.line:
            location += f":{self.line}"
            if self.column:
                location += f":{self.column}"
        return location


def make_workspace_error(file: Path, workspace_root: Path) -> WorkspaceError:
    """
    Helper to create a WorkspaceError for a file outside the workspace.

    Args:
        file: The offending file
        workspace_root: The workspace it should live under

    Returns:
        WorkspaceError with the file attached as context
    """
    return WorkspaceError(
        f"File is not under the workspace root {workspace_root}",
        ErrorContext(file=file),
    )


def make_config_error(message: str, file: Path, line: int = 0, column: int = 0) -> ConfigError:
    """
    Helper to create a ConfigError with context.

    Args:
        message: Error description
        file: Settings file path
        line: Optional line number
        column: Optional column number

    Returns:
        ConfigError with context attached
    """
    return ConfigError(message, ErrorContext(file=file, line=line, column=column))
