"""
rspec-lens Language Server implementation using pygls.

Serves run/debug code lenses for ``*_spec.rb`` documents.
"""

import logging
from pathlib import Path
from typing import Any, List, Optional

from lsprotocol.types import (
    INITIALIZE,
    TEXT_DOCUMENT_CODE_LENS,
    WORKSPACE_DID_CHANGE_CONFIGURATION,
    CodeLens,
    CodeLensOptions,
    CodeLensParams,
    Command,
    DidChangeConfigurationParams,
    InitializeParams,
    Position,
    Range,
)
from pygls.lsp.server import LanguageServer

from rspec_lens._version import __version__
from rspec_lens.core.code_lens import collect_code_lenses, is_spec_file
from rspec_lens.core.config import LensSettings, load_settings
from rspec_lens.core.errors import ConfigError, RspecLensError
from rspec_lens.core.records import LensRecord

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Key under which editors nest our options in settings payloads
SETTINGS_SECTION = "rspecLens"

# Create server instance
server = LanguageServer("rspec-lens", f"v{__version__}")

# Store workspace state on server
server.workspace_root: Optional[Path] = None
server.lens_settings = LensSettings()


@server.feature(INITIALIZE)
def initialize(ls: LanguageServer, params: InitializeParams):
    """Initialize the language server."""
    if params.root_uri:
        ls.workspace_root = Path(params.root_uri.replace("file://", ""))
        logger.info(f"Workspace root: {ls.workspace_root}")

    ls.lens_settings = _load_workspace_settings(ls.workspace_root, params.initialization_options)


@server.feature(WORKSPACE_DID_CHANGE_CONFIGURATION)
def did_change_configuration(ls: LanguageServer, params: DidChangeConfigurationParams):
    """Overlay settings pushed by the editor on the current ones."""
    ls.lens_settings = _apply_configuration_change(ls.lens_settings, params.settings)


@server.feature(TEXT_DOCUMENT_CODE_LENS, CodeLensOptions(resolve_provider=False))
def code_lens(ls: LanguageServer, params: CodeLensParams) -> List[CodeLens]:
    """Provide run/debug lenses for spec files."""
    document = ls.workspace.get_text_document(params.text_document.uri)
    workspace_root = ls.workspace_root or Path.cwd()
    return _lenses_for_document(
        Path(document.path), document.source, workspace_root, ls.lens_settings
    )


# Helper functions


def _options_section(options: Any) -> Optional[dict]:
    """Accept either our options directly or nested under SETTINGS_SECTION."""
    if not isinstance(options, dict):
        return None
    nested = options.get(SETTINGS_SECTION)
    if isinstance(nested, dict):
        return nested
    return options


def _load_workspace_settings(workspace_root: Optional[Path], options: Any) -> LensSettings:
    """Config file settings overlaid with editor options."""
    settings = LensSettings()
    if workspace_root:
        try:
            settings = load_settings(workspace_root)
        except ConfigError as e:
            logger.error(f"Ignoring invalid settings file: {e}")
    return settings.merged(_options_section(options))


def _apply_configuration_change(current: LensSettings, options: Any) -> LensSettings:
    """Merge a configuration change; keys the change leaves out keep their value."""
    return current.merged(_options_section(options))


def _lenses_for_document(
    path: Path, source: str, workspace_root: Path, settings: LensSettings
) -> List[CodeLens]:
    """Compute code lenses for one document; empty for non-spec files or errors."""
    if not is_spec_file(path):
        return []

    try:
        records = collect_code_lenses(
            source,
            path,
            workspace_root=workspace_root,
            rspec_command=settings.rspec_command,
            debug=settings.debug,
        )
    except RspecLensError as e:
        logger.error(f"Cannot compute code lenses for {path}: {e}")
        return []

    return [_code_lens_from_record(record) for record in records]


def _code_lens_from_record(record: LensRecord) -> CodeLens:
    """Convert a lens record to an LSP CodeLens."""
    location = record.location
    range_ = Range(
        start=Position(line=location.start_line, character=location.start_column),
        end=Position(line=location.end_line, character=location.end_column),
    )
    wire = record.to_dict()
    return CodeLens(
        range=range_,
        command=Command(title=record.title, command=record.command, arguments=wire["arguments"]),
        data=wire["data"],
    )


def start_server():
    """Start the rspec-lens LSP server."""
    logger.info("Starting rspec-lens Language Server...")
    server.start_io()


if __name__ == "__main__":
    start_server()
