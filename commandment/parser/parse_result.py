# Commandment Command-Line Toolkit - MIT Licensed
"""
Result types produced by one parse pass.

- `ErrorKind` / `ParseError`: a uniform record for every user-input problem
  (syntax, arity, required-missing, parse, validation). Errors accumulate; a
  parse never stops at the first one.
- `SymbolResult`: the per-symbol context handed to custom parsers, default
  factories and validators. It exposes the raw tokens, the resolved value and
  `add_error()`.
- `ParseResult`: the immutable outcome of parsing, either resolved values for
  every symbol on the matched command path, or a non-empty tuple of errors.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Iterator, Mapping

from commandment.parser.tokenizer import Token

if TYPE_CHECKING:
    from commandment.cancellation import CancellationToken
    from commandment.command import Command
    from commandment.parser.symbol import Symbol


class ErrorKind(Enum):
    """Category of a user-input problem."""

    SYNTAX = "syntax"
    ARITY = "arity"
    REQUIRED_MISSING = "required_missing"
    PARSE = "parse"
    VALIDATION = "validation"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ParseError:
    """
    A single problem with the user's input.

    Attributes:
        kind (ErrorKind): Category of the problem.
        message (str): Human-readable description.
        symbol_name (str | None): Name of the offending option/argument, if any.
        position (int | None): argv index of the offending token, if known.
    """

    kind: ErrorKind
    message: str
    symbol_name: str | None = None
    position: int | None = None

    def __str__(self) -> str:
        return self.message


class SymbolResult:
    """
    Parse-time context for a single symbol.

    Passed to custom parsers (`with_parser`), default factories
    (`with_default_factory`) and validators (`with_validator`).
    """

    def __init__(
        self,
        symbol: Symbol,
        command: Command,
        tokens: tuple[Token, ...] = (),
        position: int | None = None,
    ) -> None:
        self.symbol = symbol
        self.command = command
        self.tokens = tokens
        self.position = position
        self.value: Any = None
        self.has_value: bool = False
        self.errors: list[ParseError] = []

    @property
    def values(self) -> list[str]:
        """The raw token strings bound to this symbol."""
        return [token.value for token in self.tokens]

    def get_value(self) -> Any:
        return self.value

    def set_value(self, value: Any) -> None:
        self.value = value
        self.has_value = True

    def add_error(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.VALIDATION,
        position: int | None = None,
    ) -> None:
        if position is None:
            position = self.tokens[0].position if self.tokens else self.position
        self.errors.append(
            ParseError(
                kind=kind,
                message=message.rstrip(),
                symbol_name=self.symbol.name,
                position=position,
            )
        )

    def __repr__(self) -> str:
        return (
            f"SymbolResult(symbol={self.symbol.name!r}, tokens={self.values!r}, "
            f"value={self.value!r}, errors={len(self.errors)})"
        )


@dataclass(frozen=True)
class ParseResult:
    """
    Immutable outcome of one parse attempt.

    Attributes:
        root (Command): The command the parse started from.
        command (Command): The deepest matched command.
        command_path (tuple[Command, ...]): Matched commands from root to `command`.
        tokens (tuple[Token, ...]): Tokens as classified by the parser.
        errors (tuple[ParseError, ...]): Accumulated errors; empty on success.
        values (Mapping[Symbol, Any]): Resolved values keyed by symbol.
        help_requested (bool): `-h/--help` was given.
        version_requested (bool): `--version` was given on the root.
    """

    root: Command
    command: Command
    command_path: tuple[Command, ...]
    tokens: tuple[Token, ...] = ()
    errors: tuple[ParseError, ...] = ()
    values: Mapping[Symbol, Any] = field(default_factory=dict)
    help_requested: bool = False
    version_requested: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.values, MappingProxyType):
            object.__setattr__(self, "values", MappingProxyType(dict(self.values)))
        object.__setattr__(self, "errors", tuple(self.errors))
        object.__setattr__(self, "tokens", tuple(self.tokens))
        object.__setattr__(self, "command_path", tuple(self.command_path))

    @property
    def succeeded(self) -> bool:
        return not self.errors

    def _find_symbol(self, name: str) -> Symbol | None:
        for symbol in reversed(list(self.values)):
            if name == symbol.dest or name == symbol.name or name in symbol.names:
                return symbol
        return None

    def get_value(self, symbol: Symbol | str, default: Any = None) -> Any:
        """
        Return the resolved value for a symbol or its name/dest.

        Lookups by name search the deepest command first.
        """
        if isinstance(symbol, str):
            found = self._find_symbol(symbol)
            if found is None:
                return default
            symbol = found
        return self.values.get(symbol, default)

    def __getitem__(self, name: str) -> Any:
        symbol = self._find_symbol(name)
        if symbol is None:
            raise KeyError(name)
        return self.values[symbol]

    def __contains__(self, name: object) -> bool:
        if isinstance(name, str):
            return self._find_symbol(name) is not None
        return name in self.values

    def __iter__(self) -> Iterator[str]:
        return iter(self.as_dict())

    def as_dict(self) -> dict[str, Any]:
        """Return values keyed by `dest`; deeper commands win on clashes."""
        return {symbol.dest: value for symbol, value in self.values.items()}

    def invoke(self) -> int:
        """Dispatch to the matched command's action and block until it returns."""
        from commandment.dispatcher import Dispatcher

        return Dispatcher().invoke(self)

    async def invoke_async(
        self, cancellation_token: CancellationToken | None = None
    ) -> int:
        """Dispatch to the matched command's action with cooperative cancellation."""
        from commandment.dispatcher import Dispatcher

        return await Dispatcher().invoke_async(self, cancellation_token)

    def __str__(self) -> str:
        path = " ".join(command.name for command in self.command_path)
        status = "OK" if self.succeeded else f"{len(self.errors)} error(s)"
        return f"ParseResult(command={path!r}, {status}, values={len(self.values)})"

    def __repr__(self) -> str:
        return str(self)
