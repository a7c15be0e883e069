"""
Display names for examples and groups.

Only the first argument is inspected, in this order:

1. no arguments        -> ``<unnamed-N>`` (N counts per traversal)
2. string literal      -> its literal content
3. call or reference   -> ``<callee>``
4. anything else       -> raw source text of the argument
"""

from __future__ import annotations

from .state import TraversalState
from .syntax import ArgumentKind, CallSite


def resolve_name(call_site: CallSite, state: TraversalState) -> str:
    """Derive the display name of ``call_site``; never raises."""
    if not call_site.arguments:
        return state.next_anonymous_name()

    argument = call_site.arguments[0]
    if argument.kind is ArgumentKind.STRING:
        return argument.content or ""
    if argument.kind is ArgumentKind.CALL:
        return f"<{argument.name}>"
    return argument.text
