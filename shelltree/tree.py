"""The command tree.

Every addressable command is a `CommandNode`. A node may own a handler,
named children, or both. Resolution consumes leading tokens as long as they
name a child; the deepest node reached receives the remaining tokens.
"""

from __future__ import annotations

import inspect
import weakref
from collections.abc import Awaitable, Callable, Sequence

from .models import CommandConfigurationError, UnknownCommandError

__all__ = ["CommandHandler", "CommandNode"]

CommandHandler = Callable[[list[str]], Awaitable[object] | object]


class CommandNode:
    """A command, or group of commands, that can be typed at the prompt.

    Children are owned through `children`; `parent` is a weak back-reference
    only used to compute `full_name`.
    """

    def __init__(
        self,
        name: str,
        arg_desc: str | None = None,
        description: str | None = None,
        handler: CommandHandler | None = None,
        parent: CommandNode | None = None,
    ) -> None:
        self.name = name
        self.arg_desc = arg_desc
        self.description = description
        self.handler = handler
        self.children: dict[str, CommandNode] = {}
        self._parent = weakref.ref(parent) if parent is not None else None

    def __repr__(self) -> str:
        return f"<CommandNode {self.full_name or '(root)'}>"

    @property
    def parent(self) -> CommandNode | None:
        """Return the parent node, None for the root."""
        return self._parent() if self._parent is not None else None

    @property
    def is_root(self) -> bool:
        """Return True for the tree root."""
        return self._parent is None

    @property
    def full_name(self) -> str:
        """The full command a user has to type to reach this node."""
        parent = self.parent
        if parent is None or parent.is_root:
            return self.name
        return f"{parent.full_name} {self.name}"

    def add_command(
        self,
        name: str,
        arg_desc: str | None = None,
        description: str | None = None,
        handler: CommandHandler | None = None,
    ) -> CommandNode:
        """Register a child command.

        Args:
            name: Name typed by the user to reach the child
            arg_desc: Description of the arguments the command expects
            description: What the command does
            handler: Called with the remaining tokens when the command is typed

        Returns:
            The new child node

        Raises:
            CommandConfigurationError: If `name` is already a child of this node
        """
        if name in self.children:
            raise CommandConfigurationError(f"Multiple commands: {self.full_name}#{name}")
        child = CommandNode(name, arg_desc, description, handler, parent=self)
        self.children[name] = child
        return child

    def remove_command(self, name: str) -> None:
        """Detach the child named `name`, if any."""
        child = self.children.pop(name, None)
        if child is not None:
            child._parent = None

    def find_command(self, tokens: Sequence[str]) -> tuple[CommandNode, list[str]]:
        """Resolve tokens greedily against the children.

        Args:
            tokens: The statement tokens

        Returns:
            The deepest matching node and the tokens it did not consume
        """
        node = self
        remaining = list(tokens)
        while remaining and remaining[0] in node.children:
            node = node.children[remaining.pop(0)]
        return node, remaining

    async def handle(self, tokens: Sequence[str]) -> None:
        """Resolve `tokens` from this node and invoke the matching handler.

        For example, `a b` first checks whether `a` has a child `b`, and only
        calls `a` with `b` as an argument if it doesn't.

        Raises:
            UnknownCommandError: If the resolved node has no handler
        """
        if not tokens and self.is_root:
            return
        node, args = self.find_command(tokens)
        if node.handler is None:
            raise UnknownCommandError(node.full_name, args[0] if args else None)
        result = node.handler(args)
        if inspect.isawaitable(result):
            await result
