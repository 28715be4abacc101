# Commandment Command-Line Toolkit - MIT Licensed
"""
Validator factories attached by the `Symbol` builder methods.

Every factory returns a callable taking a `SymbolResult` and recording
problems through `result.add_error()`. Validators only run once a value has
been resolved, either supplied or produced by a default factory.

Numeric constraints (`non_zero`, `greater_than`, ...) on options are gated:
they only fire when the option is marked required. An optional option with an
out-of-range value passes. Arguments are not gated. A multi-valued symbol is
checked element by element and reports each violated constraint once.

Path and enum validators run on any resolved value.
"""
from __future__ import annotations

import numbers
from enum import Enum, EnumMeta
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Iterable

from commandment.parser.parse_result import SymbolResult
from commandment.parser.utils import enum_variant_names

if TYPE_CHECKING:
    from commandment.parser.symbol import Symbol

Validator = Callable[[SymbolResult], Any]


def _numeric_values(symbol: Symbol, result: SymbolResult) -> list[numbers.Number]:
    """Return the numbers to check, empty when the constraint must not fire."""
    if symbol.numeric_checks_require_required and not symbol.is_required:
        return []
    if not result.has_value:
        return []
    return [
        value
        for value in _each(result.get_value())
        if isinstance(value, numbers.Number) and not isinstance(value, bool)
    ]


def non_zero(symbol: Symbol) -> Validator:
    def validate(result: SymbolResult) -> None:
        if any(value == 0 for value in _numeric_values(symbol, result)):
            result.add_error(f"{symbol.name} cannot be zero")

    return validate


def greater_than(symbol: Symbol, bound: Any) -> Validator:
    def validate(result: SymbolResult) -> None:
        if any(value <= bound for value in _numeric_values(symbol, result)):
            result.add_error(f"{symbol.name} cannot be less than or equal to {bound}")

    return validate


def greater_than_or_equal_to(symbol: Symbol, bound: Any) -> Validator:
    def validate(result: SymbolResult) -> None:
        if any(value < bound for value in _numeric_values(symbol, result)):
            result.add_error(f"{symbol.name} cannot be less than {bound}")

    return validate


def less_than(symbol: Symbol, bound: Any) -> Validator:
    def validate(result: SymbolResult) -> None:
        if any(value >= bound for value in _numeric_values(symbol, result)):
            result.add_error(
                f"{symbol.name} cannot be greater than or equal to {bound}"
            )

    return validate


def less_than_or_equal_to(symbol: Symbol, bound: Any) -> Validator:
    def validate(result: SymbolResult) -> None:
        if any(value > bound for value in _numeric_values(symbol, result)):
            result.add_error(f"{symbol.name} cannot be greater than {bound}")

    return validate


def _each(value: Any) -> list[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def file_path(symbol: Symbol) -> Validator:
    def validate(result: SymbolResult) -> None:
        if not result.has_value:
            return
        for path in _each(result.get_value()):
            if path is None or not Path(path).is_file():
                result.add_error(f"Path '{path}' doesn't exist")

    return validate


def directory_path(symbol: Symbol) -> Validator:
    def validate(result: SymbolResult) -> None:
        if not result.has_value:
            return
        for path in _each(result.get_value()):
            if path is None or not Path(path).is_dir():
                result.add_error(f"Path '{path}' doesn't exist")

    return validate


def enum_variant(
    symbol: Symbol,
    variants: EnumMeta | Iterable[str],
    ignore_case: bool = False,
    show_variants_on_error: bool = False,
) -> Validator:
    declared = enum_variant_names(variants)
    if ignore_case:
        accepted = {name.casefold() for name in declared}
    else:
        accepted = set(declared)

    def matches(value: Any) -> bool:
        if isinstance(variants, EnumMeta) and isinstance(value, variants):
            return True
        text = value.name if isinstance(value, Enum) else str(value)
        if ignore_case:
            text = text.casefold()
        return text in accepted

    def validate(result: SymbolResult) -> None:
        if not result.has_value:
            return
        for value in _each(result.get_value()):
            if matches(value):
                continue
            lines = [f"'{value}' is not a valid value for {symbol.kind} '{symbol.name}'"]
            if show_variants_on_error:
                names = enum_variant_names(variants, casefold=ignore_case)
                lines.append(f"\tValid {symbol.kind}s are: [{', '.join(names)}]")
            result.add_error("\n".join(lines))

    return validate


def from_among(symbol: Symbol, choices: Iterable[Any]) -> Validator:
    allowed = list(choices)
    allowed_text = [str(choice) for choice in allowed]

    def validate(result: SymbolResult) -> None:
        if not result.has_value:
            return
        for value in _each(result.get_value()):
            if value in allowed or str(value) in allowed_text:
                continue
            listing = "\n".join(f"\t'{choice}'" for choice in allowed_text)
            result.add_error(
                f"Argument '{value}' not recognized for {symbol.name}. "
                f"Must be one of:\n{listing}"
            )

    return validate
