"""Shared pytest fixtures for rspec-lens tests."""

from pathlib import Path

import pytest

from rspec_lens.core.code_lens import CodeLensVisitor
from rspec_lens.core.dispatcher import Dispatcher
from rspec_lens.core.records import LensCollector
from rspec_lens.core.syntax import Argument, ArgumentKind, CallSite, SourceRange


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Return an empty workspace root with a spec/ directory."""
    (tmp_path / "spec").mkdir()
    return tmp_path


@pytest.fixture
def spec_path(workspace: Path) -> Path:
    """Return the path of a spec file inside the workspace (not created)."""
    return workspace / "spec" / "foo_spec.rb"


@pytest.fixture
def make_visitor(workspace: Path, spec_path: Path):
    """Factory building a visitor wired to a fresh dispatcher and collector."""

    def _make(**kwargs):
        dispatcher = Dispatcher()
        collector = LensCollector()
        kwargs.setdefault("workspace_root", workspace)
        visitor = CodeLensVisitor(collector, spec_path, dispatcher, **kwargs)
        return visitor, dispatcher, collector

    return _make


def string_arg(content: str) -> Argument:
    return Argument(ArgumentKind.STRING, f'"{content}"', content=content)


def call(
    message: str,
    *arguments: Argument,
    receiver: str | None = None,
    has_block: bool = True,
    line: int = 1,
    end_line: int | None = None,
) -> CallSite:
    """Build a CallSite by hand, without parsing."""
    return CallSite(
        message=message,
        arguments=tuple(arguments),
        receiver=receiver,
        has_block=has_block,
        location=SourceRange(line, 0, end_line or line, 3),
    )
