# Commandment Command-Line Toolkit - MIT Licensed
"""
Resolves and validates the values bound to each symbol by the parser.

For every symbol on the matched command path, in declaration order:

0. Arity: each occurrence must carry at least `arity.minimum` values and the
   total must not exceed `arity.maximum`. A value attached to a zero-arity
   option (`--verbose=yes`) is an arity error.
1. Nothing supplied: the default factory runs once, if there is one.
2. Nothing supplied, no default: a required symbol reports one
   REQUIRED_MISSING error; an optional one is left unset.
3. Supplied: the custom parser, or type coercion, produces the value. A
   failure is a PARSE error.
4. Validators run in registration order; none of them short-circuits another.

Steps 0 and 3 halt further work on that symbol only. Errors from every symbol
accumulate.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Iterable

from commandment.logger import logger
from commandment.parser.parse_result import ErrorKind, ParseError, SymbolResult
from commandment.parser.tokenizer import Token
from commandment.parser.utils import coerce_value, type_name

if TYPE_CHECKING:
    from commandment.command import Command
    from commandment.parser.symbol import Symbol


@dataclass
class Occurrence:
    """One appearance of an option (or one positional run) with its value tokens."""

    option_token: Token | None = None
    tokens: list[Token] = field(default_factory=list)
    attached: bool = False

    @property
    def position(self) -> int | None:
        if self.option_token is not None:
            return self.option_token.position
        return self.tokens[0].position if self.tokens else None


@dataclass
class SymbolBinding:
    """Everything the parser bound to one symbol."""

    symbol: Symbol
    command: Command
    occurrences: list[Occurrence] = field(default_factory=list)

    @property
    def supplied(self) -> bool:
        return bool(self.occurrences)

    @property
    def tokens(self) -> tuple[Token, ...]:
        return tuple(token for occurrence in self.occurrences for token in occurrence.tokens)

    @property
    def position(self) -> int | None:
        return self.occurrences[0].position if self.occurrences else None

    def open_occurrence(self, option_token: Token | None = None) -> Occurrence:
        occurrence = Occurrence(option_token)
        self.occurrences.append(occurrence)
        return occurrence


def _kind(symbol: Symbol) -> str:
    return symbol.kind.capitalize()


def _check_arity(binding: SymbolBinding, result: SymbolResult) -> bool:
    symbol = binding.symbol
    arity = symbol.arity
    for occurrence in binding.occurrences:
        count = len(occurrence.tokens)
        if occurrence.attached and not arity.accepts_values:
            result.add_error(
                f"{_kind(symbol)} '{symbol.name}' does not take a value, "
                f"got '{occurrence.tokens[0].value}'",
                ErrorKind.ARITY,
                occurrence.position,
            )
        elif count < arity.minimum:
            expected = (
                f"{arity.minimum}"
                if arity.minimum == arity.maximum
                else f"at least {arity.minimum}"
            )
            result.add_error(
                f"{_kind(symbol)} '{symbol.name}' expects {expected} value(s), got {count}",
                ErrorKind.ARITY,
                occurrence.position,
            )
    if result.errors:
        return False
    total = len(binding.tokens)
    if arity.maximum is not None and total > arity.maximum:
        result.add_error(
            f"{_kind(symbol)} '{symbol.name}' accepts at most {arity.maximum} "
            f"value(s), got {total}",
            ErrorKind.ARITY,
            binding.position,
        )
        return False
    return True


def _as_parse_errors(result: SymbolResult, start: int) -> None:
    """Re-tag errors added since `start` (by a parser or factory) as PARSE errors."""
    for index in range(start, len(result.errors)):
        result.errors[index] = replace(result.errors[index], kind=ErrorKind.PARSE)


def _call_default(result: SymbolResult) -> bool:
    symbol = result.symbol
    start = len(result.errors)
    try:
        value = symbol.default_factory(result)
    except (ValueError, TypeError) as error:
        result.add_error(
            f"Default value for {symbol.kind} '{symbol.name}' failed: {error}",
            ErrorKind.PARSE,
        )
        return False
    if len(result.errors) > start:
        _as_parse_errors(result, start)
        return False
    result.set_value(value)
    return True


def _coerce_tokens(result: SymbolResult, tokens: tuple[Token, ...]) -> list[Any] | None:
    symbol = result.symbol
    values: list[Any] = []
    failed = False
    for token in tokens:
        try:
            values.append(coerce_value(token.value, symbol.value_type))
        except (ValueError, TypeError):
            failed = True
            result.add_error(
                f"Cannot parse argument '{token.value}' for {symbol.kind} "
                f"'{symbol.name}' as expected type '{type_name(symbol.value_type)}'",
                ErrorKind.PARSE,
                token.position,
            )
    return None if failed else values


def _resolve_supplied(binding: SymbolBinding, result: SymbolResult) -> bool:
    symbol = binding.symbol
    arity = symbol.arity
    tokens = binding.tokens

    if symbol.custom_parser is not None:
        start = len(result.errors)
        try:
            value = symbol.custom_parser(result)
        except (ValueError, TypeError) as error:
            result.add_error(
                str(error)
                or f"Cannot parse {result.values} for {symbol.kind} '{symbol.name}'",
                ErrorKind.PARSE,
            )
            return False
        if len(result.errors) > start:
            _as_parse_errors(result, start)
            return False
        result.set_value(value)
        return True

    if not arity.accepts_values:
        result.set_value(True)
        return True

    if not tokens:
        if symbol.default_factory is not None:
            return _call_default(result)
        if not arity.is_single:
            result.set_value([])
        elif symbol.value_type is bool:
            result.set_value(True)
        else:
            result.set_value(None)
        return True

    values = _coerce_tokens(result, tokens)
    if values is None:
        return False
    result.set_value(values[-1] if arity.is_single else values)
    return True


def _messages(outcome: Any) -> Iterable[str]:
    if outcome is None:
        return ()
    if isinstance(outcome, str):
        return (outcome,) if outcome else ()
    return tuple(str(message) for message in outcome if message)


def _run_validators(result: SymbolResult) -> None:
    for validator in result.symbol.validators:
        try:
            outcome = validator(result)
        except ValueError as error:
            result.add_error(str(error))
            continue
        for message in _messages(outcome):
            result.add_error(message)


def validate_binding(binding: SymbolBinding) -> SymbolResult:
    """Run the arity, required, parse and validator stages for one symbol."""
    symbol = binding.symbol
    result = SymbolResult(symbol, binding.command, binding.tokens, binding.position)

    if binding.supplied:
        if not _check_arity(binding, result):
            return result
        if not _resolve_supplied(binding, result):
            return result
    elif symbol.default_factory is not None:
        if not _call_default(result):
            return result
    elif symbol.is_required:
        if symbol.kind == "option":
            message = f"Option '{symbol.name}' is required."
        else:
            message = (
                f"Required argument '{symbol.name}' missing for command "
                f"'{binding.command.name}'."
            )
        result.add_error(message, ErrorKind.REQUIRED_MISSING)
        return result
    else:
        return result

    _run_validators(result)
    return result


def validate_bindings(
    bindings: Iterable[SymbolBinding],
) -> tuple[dict[Symbol, Any], list[ParseError]]:
    """Validate every binding; return the resolved values and all errors."""
    values: dict[Symbol, Any] = {}
    errors: list[ParseError] = []
    for binding in bindings:
        result = validate_binding(binding)
        if result.errors:
            logger.debug(
                "[Validation] %s '%s' -> %d error(s)",
                binding.symbol.kind,
                binding.symbol.name,
                len(result.errors),
            )
            errors.extend(result.errors)
        elif result.has_value:
            values[binding.symbol] = result.get_value()
    return values, errors
