"""Input line splitting.

A line is first split into statements on the chain separator, then each
statement is split into argument tokens. Only double quotes group words,
and a backslash escapes a quote only inside a quoted span.
"""

from .constants import ALIAS_COMMAND, STATEMENT_SEPARATOR

__all__ = ["split_statements", "tokenize"]


def tokenize(line: str) -> list[str]:
    """Split a statement into tokens.

    Examples:
        >>> tokenize('a "b c" d')
        ['a', 'b c', 'd']
        >>> tokenize('a "b\\\\"c" d')
        ['a', 'b"c', 'd']

    An unterminated quote closes at the end of the line.

    Args:
        line: The raw statement text
    """
    tokens: list[str] = []
    in_quotes = False
    escaped = False
    current: list[str] = []
    for char in line:
        if char == '"' and not escaped:
            in_quotes = not in_quotes
        elif char == "\\" and in_quotes and not escaped:
            escaped = True
            continue
        elif char == " " and not in_quotes:
            tokens.append("".join(current))
            current = []
        else:
            current.append(char)
        escaped = False
    tokens.append("".join(current))
    return [token for token in tokens if token]


def split_statements(line: str) -> list[str]:
    """Split an input line on the statement separator.

    Alias definitions are kept whole so their expansion may chain statements.

    Args:
        line: The raw input line
    """
    words = line.split(None, 1)
    if words and words[0] == ALIAS_COMMAND:
        return [line]
    return line.split(STATEMENT_SEPARATOR)
