"""
Lens records and the collector they are appended to.

A record serializes to::

    {
      "title": "Run" | "Run In Terminal" | "Debug",
      "command": "<command identifier>",
      "arguments": [path, name, command_text, location],
      "data": {"type": ..., "group_id": int | None, "id"?: int},
    }
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class LensKind(str, Enum):
    """The three affordances emitted for every example and group."""

    TEST = "test"
    TEST_IN_TERMINAL = "test_in_terminal"
    DEBUG = "debug"


LENS_TITLES: dict[LensKind, str] = {
    LensKind.TEST: "Run",
    LensKind.TEST_IN_TERMINAL: "Run In Terminal",
    LensKind.DEBUG: "Debug",
}

LENS_COMMANDS: dict[LensKind, str] = {
    LensKind.TEST: "rubyLsp.runTest",
    LensKind.TEST_IN_TERMINAL: "rubyLsp.runTestInTerminal",
    LensKind.DEBUG: "rubyLsp.debugTest",
}


class LensLocation(BaseModel):
    """Editor location of a lens; all values are 0-indexed."""

    start_line: int
    start_column: int
    end_line: int
    end_column: int

    model_config = ConfigDict(frozen=True)


class LensData(BaseModel):
    """Grouping payload. ``id`` is only set on a group's own lenses."""

    type: LensKind
    group_id: int | None = None
    id: int | None = None

    model_config = ConfigDict(frozen=True)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type.value, "group_id": self.group_id}
        if self.id is not None:
            data["id"] = self.id
        return data


class LensRecord(BaseModel):
    """One run/debug affordance anchored to a source location."""

    title: str
    command: str
    arguments: tuple[str, str, str, LensLocation]
    data: LensData

    model_config = ConfigDict(frozen=True)

    @property
    def path(self) -> str:
        return self.arguments[0]

    @property
    def name(self) -> str:
        return self.arguments[1]

    @property
    def command_text(self) -> str:
        return self.arguments[2]

    @property
    def location(self) -> LensLocation:
        return self.arguments[3]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the wire shape, omitting ``data.id`` when unset."""
        return {
            "title": self.title,
            "command": self.command,
            "arguments": [self.path, self.name, self.command_text, self.location.model_dump()],
            "data": self.data.to_dict(),
        }


def make_record(
    kind: LensKind,
    path: str,
    name: str,
    command_text: str,
    location: LensLocation,
    group_id: int | None,
    own_id: int | None = None,
) -> LensRecord:
    """Build the record of ``kind`` with its fixed title and command identifier."""
    return LensRecord(
        title=LENS_TITLES[kind],
        command=LENS_COMMANDS[kind],
        arguments=(path, name, command_text, location),
        data=LensData(type=kind, group_id=group_id, id=own_id),
    )


class LensCollector:
    """Ordered, append-only sink for lens records."""

    def __init__(self) -> None:
        self._records: list[LensRecord] = []

    def append(self, record: LensRecord) -> None:
        self._records.append(record)

    def records(self) -> list[LensRecord]:
        return list(self._records)

    def __iter__(self) -> Iterator[LensRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)
