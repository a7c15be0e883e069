"""
Single-pass syntax tree dispatcher.

Listeners register for ``on_call_node_enter`` / ``on_call_node_leave`` and are
called in tree order: enter in pre-order, leave in post-order.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import tree_sitter

from .syntax import CallSite, build_call_site, parse_ruby

logger = logging.getLogger(__name__)

CALL_NODE_ENTER = "on_call_node_enter"
CALL_NODE_LEAVE = "on_call_node_leave"
EVENTS = (CALL_NODE_ENTER, CALL_NODE_LEAVE)


class Dispatcher:
    """Fans call-node events out to registered listeners."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[Callable[[CallSite], Any]]] = {e: [] for e in EVENTS}

    def register(self, listener: object, *events: str) -> None:
        """Register ``listener``'s methods named after ``events``."""
        for event in events:
            if event not in self._listeners:
                raise ValueError(f"Unknown dispatcher event: {event}")
            self._listeners[event].append(getattr(listener, event))

    def dispatch(self, source: str | bytes) -> tree_sitter.Tree:
        """Parse ``source`` and walk it once, firing callbacks."""
        tree = parse_ruby(source)
        if tree.root_node.has_error:
            logger.debug("Source contains syntax errors; walking the recovered tree")
        self.visit(tree.root_node)
        return tree

    def visit(self, root: tree_sitter.Node) -> None:
        """Walk ``root`` iteratively so deep nesting cannot hit the recursion limit."""
        stack: list[tuple[tree_sitter.Node, CallSite | None]] = [(root, None)]
        while stack:
            node, leaving = stack.pop()
            if leaving is not None:
                self._fire(CALL_NODE_LEAVE, leaving)
                continue

            if node.type == "call":
                call_site = build_call_site(node)
                self._fire(CALL_NODE_ENTER, call_site)
                stack.append((node, call_site))

            stack.extend((child, None) for child in reversed(node.children))

    def _fire(self, event: str, call_site: CallSite) -> None:
        for callback in self._listeners[event]:
            callback(call_site)
