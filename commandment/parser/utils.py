# Commandment Command-Line Toolkit - MIT Licensed
"""
Value coercion helpers used by the validation engine.

Functions:
- coerce_bool: Convert a string to a boolean.
- coerce_enum: Convert a string or raw value to an Enum instance.
- coerce_value: General-purpose coercion to a target type (including nested unions,
  enums, literals and datetimes).
- enum_variant_names: List the names of an enumerable set of constants.
"""
import types
from datetime import datetime
from enum import EnumMeta
from typing import Any, Iterable, Literal, Union, get_args, get_origin

from dateutil import parser as date_parser


def coerce_bool(value: str) -> bool:
    """
    Convert a string to a boolean.

    Accepts 'true', 'yes', '1', 'on' and 'false', 'no', '0', 'off' in any case.

    Raises:
        ValueError: If the string is not a recognized boolean.
    """
    if isinstance(value, bool):
        return value
    value = value.strip().lower()
    if value in {"true", "t", "1", "yes", "y", "on"}:
        return True
    elif value in {"false", "f", "0", "no", "n", "off"}:
        return False
    raise ValueError(f"'{value}' is not a valid boolean")


def coerce_enum(value: Any, enum_type: EnumMeta) -> Any:
    """
    Convert a raw value or string to an Enum instance.

    Tries to resolve by name, value, or coerced base type.

    Raises:
        ValueError: If the value cannot be resolved to a valid Enum member.
    """
    if isinstance(value, enum_type):
        return value

    if isinstance(value, str):
        try:
            return enum_type[value]
        except KeyError:
            pass

    base_type = type(next(iter(enum_type)).value)
    try:
        coerced_value = base_type(value)
        return enum_type(coerced_value)
    except (ValueError, TypeError):
        names = [member.name for member in enum_type]
        raise ValueError(f"'{value}' should be one of {{{', '.join(names)}}}") from None


def coerce_value(value: str, target_type: Any) -> Any:
    """
    Attempt to convert a string to the given target type.

    Handles Union, Literal, Enum, bool and datetime specially; anything else is
    called with the string.

    Raises:
        ValueError: If conversion fails or the value is invalid.
    """
    if target_type is None or target_type is Any or target_type is str:
        return value

    origin = get_origin(target_type)
    args = get_args(target_type)

    if origin is Literal:
        if value not in args:
            raise ValueError(
                f"Value '{value}' is not a valid literal for type {target_type}"
            )
        return value

    if isinstance(target_type, types.UnionType) or origin is Union:
        for arg in args:
            if arg is type(None):
                continue
            try:
                return coerce_value(value, arg)
            except (ValueError, TypeError):
                continue
        raise ValueError(f"Value '{value}' could not be coerced to any of {args}")

    if isinstance(target_type, EnumMeta):
        return coerce_enum(value, target_type)

    if target_type is bool:
        return coerce_bool(value)

    if target_type is datetime:
        try:
            return date_parser.parse(value)
        except (ValueError, OverflowError) as error:
            raise ValueError(f"Value '{value}' could not be parsed as a datetime") from error

    return target_type(value)


def type_name(target_type: Any) -> str:
    return getattr(target_type, "__name__", str(target_type))


def enum_variant_names(
    variants: EnumMeta | Iterable[str], casefold: bool = False
) -> list[str]:
    """
    Return the names of an enumerable set of named constants.

    Args:
        variants: An `Enum` subclass or any iterable of names.
        casefold: Lower-case every name.
    """
    if isinstance(variants, EnumMeta):
        names = list(variants.__members__)
    else:
        names = [str(name) for name in variants]
    if casefold:
        names = [name.lower() for name in names]
    return names
