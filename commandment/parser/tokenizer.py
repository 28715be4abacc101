# Commandment Command-Line Toolkit - MIT Licensed
"""
Splits a raw argument vector into lexical `Token`s.

The tokenizer is context-free and never fails. It only classifies the shape
of each argv entry; whether a value is a subcommand name, a positional value,
or an option value is decided by the parser, which knows the command tree.

Recognized forms:
- `--name`            -> OPTION
- `--name=value`      -> OPTION + attached VALUE
- `-n`                -> OPTION
- `-n=value`          -> OPTION + attached VALUE
- `-abc`              -> SHORT_GROUP (expanded by the parser)
- `-5`, `-1.5`        -> VALUE (negative numbers are values)
- `-`                 -> VALUE (conventionally stdin)
- `--`                -> SEPARATOR; every later entry is an escaped VALUE
- anything else       -> VALUE

Every token remembers the argv index it came from so errors can point at it.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

_NUMBER_PATTERN = re.compile(r"^-\d+(\.\d*)?([eE][-+]?\d+)?$|^-\.\d+$")


class TokenKind(Enum):
    """Lexical category of a token."""

    OPTION = "option"
    SHORT_GROUP = "short_group"
    VALUE = "value"
    COMMAND = "command"
    SEPARATOR = "separator"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Token:
    """
    A single lexical unit of input.

    Attributes:
        value (str): The token text (for attached values, just the value part).
        kind (TokenKind): Lexical category.
        position (int): Index of the originating argv entry.
        attached (bool): True for a value written as `--name=value`.
        escaped (bool): True for values that followed the `--` separator.
    """

    value: str
    kind: TokenKind
    position: int
    attached: bool = False
    escaped: bool = False

    def __str__(self) -> str:
        return self.value


def is_negative_number(text: str) -> bool:
    return bool(_NUMBER_PATTERN.match(text))


def tokenize(argv: Sequence[str]) -> list[Token]:
    """Classify each entry of `argv` into one or more tokens."""
    tokens: list[Token] = []
    escaped = False
    for position, raw in enumerate(argv):
        if escaped:
            tokens.append(Token(raw, TokenKind.VALUE, position, escaped=True))
        elif raw == "--":
            escaped = True
            tokens.append(Token(raw, TokenKind.SEPARATOR, position))
        elif raw.startswith("--"):
            name, sep, value = raw.partition("=")
            tokens.append(Token(name, TokenKind.OPTION, position))
            if sep:
                tokens.append(Token(value, TokenKind.VALUE, position, attached=True))
        elif raw.startswith("-") and len(raw) > 1 and not is_negative_number(raw):
            if len(raw) > 2 and raw[2] == "=":
                tokens.append(Token(raw[:2], TokenKind.OPTION, position))
                tokens.append(Token(raw[3:], TokenKind.VALUE, position, attached=True))
            elif len(raw) > 2:
                tokens.append(Token(raw, TokenKind.SHORT_GROUP, position))
            else:
                tokens.append(Token(raw, TokenKind.OPTION, position))
        else:
            tokens.append(Token(raw, TokenKind.VALUE, position))
    return tokens
