"""
Code lens visitor for RSpec files.

Listens to call-node events from a :class:`Dispatcher` and emits three lens
records (run, run in terminal, debug) for every example (``it``, ``example``,
``specify``) and every example group (``describe``, ``context``).

Groups get a traversal-unique id when entered; lenses inside a group carry
that id as ``group_id`` so the editor can rebuild the hierarchy.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

from .commands import build_commands, resolve_base_command
from .dispatcher import CALL_NODE_ENTER, CALL_NODE_LEAVE, Dispatcher
from .errors import make_workspace_error
from .naming import resolve_name
from .records import LensCollector, LensKind, LensLocation, LensRecord, make_record
from .state import TraversalState
from .syntax import CallSite

logger = logging.getLogger(__name__)

EXAMPLE_KEYWORDS = frozenset({"example", "it", "specify"})
GROUP_KEYWORDS = frozenset({"context", "describe"})

# Only this receiver marks a group call as RSpec's own (``RSpec.describe``)
ROOT_NAMESPACE = "RSpec"

SPEC_FILE_SUFFIX = "_spec.rb"


class Keyword(Enum):
    EXAMPLE = "example"
    GROUP = "group"
    OTHER = "other"


def classify(message: str) -> Keyword:
    """Normalize a call's method name into a keyword kind."""
    if message in EXAMPLE_KEYWORDS:
        return Keyword.EXAMPLE
    if message in GROUP_KEYWORDS:
        return Keyword.GROUP
    return Keyword.OTHER


def is_valid_group(call_site: CallSite) -> bool:
    """A group call needs a block and, if it has a receiver, the RSpec one."""
    if not call_site.has_block:
        return False
    return call_site.receiver is None or call_site.receiver == ROOT_NAMESPACE


def is_spec_file(path: str | Path) -> bool:
    return Path(path).name.endswith(SPEC_FILE_SUFFIX)


def relative_spec_path(file_path: Path, workspace_root: Path) -> str:
    """Path of ``file_path`` relative to ``workspace_root``, POSIX style.

    Raises:
        WorkspaceError: if the file is not under the workspace root
    """
    root = workspace_root.resolve()
    try:
        return file_path.resolve().relative_to(root).as_posix()
    except ValueError:
        raise make_workspace_error(file_path, root) from None


class CodeLensVisitor:
    """
    Turns RSpec examples and groups into lens records.

    One instance serves exactly one traversal: construct a new visitor for
    every file. The base command is resolved once, here.

    Args:
        collector: Sink receiving the records, in emission order
        file_path: Absolute path of the file being traversed
        dispatcher: Dispatcher to register with
        workspace_root: Root the command paths are relative to (default: cwd)
        rspec_command: Explicit base command; skips command inference
        debug: Log one line per processed call
    """

    def __init__(
        self,
        collector: LensCollector,
        file_path: str | Path,
        dispatcher: Dispatcher,
        *,
        workspace_root: str | Path | None = None,
        rspec_command: str | None = None,
        debug: bool = False,
    ) -> None:
        self.collector = collector
        root = Path(workspace_root) if workspace_root is not None else Path.cwd()
        self.path = relative_spec_path(Path(file_path), root)
        self.state = TraversalState()
        self.debug = debug
        self.base_command = resolve_base_command(root, rspec_command)

        dispatcher.register(self, CALL_NODE_ENTER, CALL_NODE_LEAVE)

    def on_call_node_enter(self, call_site: CallSite) -> None:
        keyword = classify(call_site.message)

        if keyword is Keyword.EXAMPLE:
            name = resolve_name(call_site, self.state)
            self._add_test_code_lenses(call_site, name, group_id=self.state.current_group_id)

        elif keyword is Keyword.GROUP:
            if not is_valid_group(call_site):
                return

            name = resolve_name(call_site, self.state)
            group_id = self.state.allocate_group_id()
            self._add_test_code_lenses(
                call_site, name, group_id=self.state.current_group_id, own_id=group_id
            )
            self.state.push_group(call_site, group_id)

    def on_call_node_leave(self, call_site: CallSite) -> None:
        # Invalid groups were never pushed, so the marker cannot match them
        if classify(call_site.message) is Keyword.GROUP:
            self.state.pop_group(call_site)

    def _log(self, message: str) -> None:
        logger.info(f"[{type(self).__name__}]: {message}")

    def _add_test_code_lenses(
        self,
        call_site: CallSite,
        name: str,
        *,
        group_id: int | None,
        own_id: int | None = None,
    ) -> None:
        loc = call_site.location
        commands = build_commands(self.path, loc.start_line, self.base_command)

        if self.debug:
            self._log(f"{call_site.message} {name!r}: `{commands.terminal}`")

        location = LensLocation(
            start_line=loc.start_line - 1,
            start_column=loc.start_column,
            end_line=loc.end_line - 1,
            end_column=loc.end_column,
        )
        command_texts = {
            LensKind.TEST: commands.runner,
            LensKind.TEST_IN_TERMINAL: commands.terminal,
            LensKind.DEBUG: commands.runner,
        }
        for kind, command_text in command_texts.items():
            self.collector.append(
                make_record(kind, self.path, name, command_text, location, group_id, own_id)
            )


def collect_code_lenses(
    source: str | bytes,
    file_path: str | Path,
    workspace_root: str | Path | None = None,
    rspec_command: str | None = None,
    debug: bool = False,
) -> list[LensRecord]:
    """Parse ``source`` once and return its lens records in emission order."""
    dispatcher = Dispatcher()
    collector = LensCollector()
    CodeLensVisitor(
        collector,
        file_path,
        dispatcher,
        workspace_root=workspace_root,
        rspec_command=rspec_command,
        debug=debug,
    )
    dispatcher.dispatch(source)
    return collector.records()
