"""
Ruby syntax access for lens analysis.

Parses Ruby source with tree-sitter and reduces each ``call`` node to a
:class:`CallSite`, the only shape the lens visitor looks at.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import tree_sitter
import tree_sitter_ruby

RUBY_LANGUAGE = tree_sitter.Language(tree_sitter_ruby.language())

_BLOCK_TYPES = frozenset({"block", "do_block"})
_KEYWORD_HASH_TYPES = frozenset({"pair", "hash_splat_argument"})
_ASSIGNMENT_TYPES = frozenset({"assignment", "operator_assignment"})
_PARAMETER_LIST_TYPES = frozenset({"block_parameters", "method_parameters", "lambda_parameters"})
_SCOPE_TYPES = frozenset(
    {"program", "method", "singleton_method", "class", "module", "singleton_class"}
)


class ArgumentKind(Enum):
    """Syntactic shape of a call argument, as far as naming cares."""

    STRING = "string"
    CALL = "call"
    OTHER = "other"


@dataclass(frozen=True)
class Argument:
    """
    One positional argument of a call.

    Attributes:
        kind: Shape of the argument
        text: Raw source text of the whole argument
        content: Literal content between the quotes (STRING only)
        name: Callee or constant name (CALL only)
    """

    kind: ArgumentKind
    text: str
    content: str | None = None
    name: str | None = None


@dataclass(frozen=True)
class SourceRange:
    """Node extent. Lines are 1-indexed, columns are 0-indexed byte offsets."""

    start_line: int
    start_column: int
    end_line: int
    end_column: int


@dataclass(eq=False)
class CallSite:
    """
    A method call found in the syntax tree.

    Instances compare by identity: the dispatcher hands the same object to the
    enter and leave callbacks of one node, so it doubles as a marker.
    """

    message: str
    arguments: tuple[Argument, ...] = ()
    receiver: str | None = None
    has_block: bool = False
    location: SourceRange = field(default_factory=lambda: SourceRange(1, 0, 1, 0))


def parse_ruby(source: str | bytes) -> tree_sitter.Tree:
    """Parse Ruby source. Never raises on syntax errors."""
    if isinstance(source, str):
        source = source.encode("utf-8")
    parser = tree_sitter.Parser(RUBY_LANGUAGE)
    return parser.parse(source)


def _text(node: tree_sitter.Node) -> str:
    return (node.text or b"").decode("utf-8", errors="replace")


def _string_content(node: tree_sitter.Node) -> str:
    children = node.children
    if len(children) < 2:
        return ""
    source = node.text or b""
    start = children[0].end_byte - node.start_byte
    end = children[-1].start_byte - node.start_byte
    return source[start:end].decode("utf-8", errors="replace")


def _binds(node: tree_sitter.Node, name: bytes) -> bool:
    """Whether ``node`` itself introduces the local variable ``name``."""
    if node.type in _ASSIGNMENT_TYPES:
        left = node.child_by_field_name("left")
        if left is None:
            return False
        if left.type == "identifier":
            return left.text == name
        if left.type == "left_assignment_list":
            return any(c.type == "identifier" and c.text == name for c in left.named_children)
        return False

    if node.type in _PARAMETER_LIST_TYPES:
        for parameter in node.named_children:
            if parameter.type != "identifier":
                parameter = parameter.child_by_field_name("name")
            if parameter is not None and parameter.text == name:
                return True
    return False


def _binds_within(node: tree_sitter.Node, name: bytes) -> bool:
    """Search ``node`` for a binding, without entering nested scopes or blocks."""
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type in _SCOPE_TYPES or current.type in _BLOCK_TYPES:
            continue
        if _binds(current, name):
            return True
        stack.extend(current.named_children)
    return False


def is_local_variable(node: tree_sitter.Node) -> bool:
    """
    Whether a bare identifier reads a local variable rather than calling a method.

    Ruby decides this statically: the name is a local if an assignment or a
    parameter earlier in the same scope (or an enclosing block) binds it.
    """
    name = node.text
    current = node
    while current.parent is not None:
        parent = current.parent
        for sibling in parent.named_children:
            if sibling.start_byte >= current.start_byte:
                break
            if sibling.type in _PARAMETER_LIST_TYPES:
                if _binds(sibling, name):
                    return True
            elif _binds_within(sibling, name):
                return True
        if parent.type in _SCOPE_TYPES:
            return False
        current = parent
    return False


def build_argument(node: tree_sitter.Node) -> Argument:
    """Classify a single argument node."""
    text = _text(node)

    if node.type == "string" and not any(c.type == "interpolation" for c in node.children):
        return Argument(ArgumentKind.STRING, text, content=_string_content(node))

    if node.type == "call":
        method = node.child_by_field_name("method")
        return Argument(ArgumentKind.CALL, text, name=_text(method) if method else "")

    if node.type == "identifier" and is_local_variable(node):
        return Argument(ArgumentKind.OTHER, text)

    # A bare identifier is a receiver-less call; a bare constant names a class
    if node.type in ("identifier", "constant"):
        return Argument(ArgumentKind.CALL, text, name=text)

    return Argument(ArgumentKind.OTHER, text)


def _keyword_hash(pairs: list[tree_sitter.Node], call: tree_sitter.Node) -> Argument:
    """Trailing ``key: value`` pairs form a single hash argument."""
    source = call.text or b""
    start = pairs[0].start_byte - call.start_byte
    end = pairs[-1].end_byte - call.start_byte
    return Argument(ArgumentKind.OTHER, source[start:end].decode("utf-8", errors="replace"))


def build_call_site(node: tree_sitter.Node) -> CallSite:
    """Reduce a tree-sitter ``call`` node to a CallSite."""
    method = node.child_by_field_name("method")
    receiver = node.child_by_field_name("receiver")
    block = node.child_by_field_name("block")
    args_node = node.child_by_field_name("arguments")

    arguments: list[Argument] = []
    pairs: list[tree_sitter.Node] = []
    has_block = block is not None and block.type in _BLOCK_TYPES
    if args_node is not None:
        for child in args_node.named_children:
            if child.type == "comment":
                continue
            if child.type in _KEYWORD_HASH_TYPES:
                pairs.append(child)
                continue
            if pairs:
                arguments.append(_keyword_hash(pairs, node))
                pairs = []
            if child.type == "block_argument":
                has_block = True
                continue
            arguments.append(build_argument(child))
        if pairs:
            arguments.append(_keyword_hash(pairs, node))

    return CallSite(
        message=_text(method) if method else "",
        arguments=tuple(arguments),
        receiver=_text(receiver) if receiver else None,
        has_block=has_block,
        location=SourceRange(
            start_line=node.start_point.row + 1,
            start_column=node.start_point.column,
            end_line=node.end_point.row + 1,
            end_column=node.end_point.column,
        ),
    )
