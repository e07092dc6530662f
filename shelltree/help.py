"""Help rendering for the command tree."""

from __future__ import annotations

from collections.abc import Sequence

from .models import HelpPathError
from .tree import CommandNode

__all__ = ["describe_command", "find_help_target", "render_help"]

INDENT = "  "


def find_help_target(root: CommandNode, path: Sequence[str]) -> CommandNode:
    """Follow `path` exactly from `root`, no greedy matching.

    Raises:
        HelpPathError: If a segment is not a child of the node reached so far
    """
    node = root
    for token in path:
        if token not in node.children:
            raise HelpPathError(node.full_name, token)
        node = node.children[token]
    return node


def describe_command(node: CommandNode) -> str:
    """Return the one-line description of a node.

    Invokable nodes show "name (args) - description", groups only their name.
    """
    if node.handler is None:
        return node.name
    line = node.name
    if node.arg_desc:
        line += f" ({node.arg_desc})"
    if node.description:
        line += f" - {node.description}"
    return line


def render_help(node: CommandNode) -> list[str]:
    """Render `node` and its descendants in declaration order.

    The root itself is not listed, its children start at depth zero.
    """
    lines: list[str] = []

    def _render(current: CommandNode, depth: int) -> None:
        if not current.is_root:
            lines.append(f"{INDENT * depth}{describe_command(current)}")
            depth += 1
        for child in current.children.values():
            _render(child, depth)

    _render(node, 0)
    return lines
