"""Tab completion over the command tree."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from prompt_toolkit.completion import Completer, Completion

from .tokenizer import split_statements, tokenize

if TYPE_CHECKING:
    from prompt_toolkit.completion import CompleteEvent
    from prompt_toolkit.document import Document

    from .tree import CommandNode

__all__ = ["TreeCompleter", "complete_words"]


def complete_words(root: CommandNode, text: str) -> tuple[str, list[str]]:
    """Compute completions for the last word of `text`.

    Only the statement being typed (after the last separator) is considered.

    Returns:
        The partial word being completed and the matching child names
    """
    statement = split_statements(text)[-1]
    tokens = tokenize(statement)
    if not tokens or statement.endswith(" "):
        prefix = ""
        path = tokens
    else:
        prefix = tokens[-1]
        path = tokens[:-1]
    node, remaining = root.find_command(path)
    if remaining:
        return prefix, []
    return prefix, [name for name in node.children if name.startswith(prefix)]


class TreeCompleter(Completer):
    """prompt_toolkit completer proposing child command names."""

    def __init__(self, root: CommandNode) -> None:
        self.root = root

    def get_completions(self, document: Document, complete_event: CompleteEvent) -> Iterator[Completion]:
        prefix, words = complete_words(self.root, document.text_before_cursor)
        for word in words:
            yield Completion(word, start_position=-len(prefix))
