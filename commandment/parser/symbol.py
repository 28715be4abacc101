# Commandment Command-Line Toolkit - MIT Licensed
"""
Defines `Symbol` and its two concrete forms, `Option` and `Argument`.

A symbol is a named, typed, independently validated unit of input. It is
configured with chainable builder methods, each of which mutates the symbol
and returns it, so calls compose in any order:

    count = (
        Option("--count", "-c", type=int)
        .with_description("How many times to run")
        .required()
        .greater_than(0)
    )
    path = Argument("path").valid_file_path()

Key Attributes:
- `names`: Primary name followed by aliases (`--count`, `-c`)
- `dest`: Key used in `ParseResult.as_dict()`
- `value_type`: Type used to coerce raw tokens when no custom parser is set
- `arity`: `Arity` bounds on the number of value tokens
- `default_factory`: Lazily evaluated when no value is supplied
- `custom_parser`: Turns the raw tokens into a typed value
- `validators`: Run in registration order on the resolved value
"""
from __future__ import annotations

from enum import EnumMeta
from typing import Any, Callable, ClassVar, Iterable, TypeVar

from commandment.exceptions import ConfigurationError
from commandment.parser import validators
from commandment.parser.arity import Arity
from commandment.parser.parse_result import SymbolResult
from commandment.parser.validators import Validator

Parser = Callable[[SymbolResult], Any]
DefaultFactory = Callable[[SymbolResult], Any]
SymbolT = TypeVar("SymbolT", bound="Symbol")


def _to_dest(name: str) -> str:
    dest = name.lstrip("-").replace("-", "_").lower()
    if not dest or not dest.replace("_", "").isalnum():
        raise ConfigurationError(
            f"Cannot derive a valid identifier from '{name}' "
            "(letters, digits, dashes and underscores only)"
        )
    if dest[0].isdigit():
        raise ConfigurationError(f"Name '{name}' must not start with a digit")
    return dest


class Symbol:
    """
    Base class for options and arguments.

    Subclasses decide how names are validated, what the default arity is and
    whether the symbol is required by default.
    """

    kind: ClassVar[str] = "symbol"
    numeric_checks_require_required: ClassVar[bool] = False

    def __init__(
        self,
        *names: str,
        type: Any = str,
        description: str = "",
        dest: str | None = None,
    ) -> None:
        if not names:
            raise ConfigurationError(f"A {self.kind} needs at least one name")
        for name in names:
            if not isinstance(name, str) or not name:
                raise ConfigurationError(
                    f"{self.kind.capitalize()} name {name!r} must be a non-empty string"
                )
        if len(set(names)) != len(names):
            raise ConfigurationError(f"Duplicate names in {names}")
        self._validate_names(names)
        self.names: tuple[str, ...] = tuple(names)
        self.dest: str = _to_dest(dest) if dest else self._default_dest()
        self.value_type: Any = type
        self.description: str = description
        self._arity: Arity | None = None
        self._required: bool | None = None
        self.default_factory: DefaultFactory | None = None
        self.custom_parser: Parser | None = None
        self.validators: list[Validator] = []

    def _validate_names(self, names: tuple[str, ...]) -> None:
        """Raise ConfigurationError if the names are malformed for this kind."""

    def _default_dest(self) -> str:
        return _to_dest(self.names[0])

    def _default_arity(self) -> Arity:
        return Arity.EXACTLY_ONE

    @property
    def name(self) -> str:
        return self.names[0]

    @property
    def aliases(self) -> tuple[str, ...]:
        return self.names[1:]

    @property
    def arity(self) -> Arity:
        return self._arity if self._arity is not None else self._default_arity()

    @property
    def is_required(self) -> bool:
        return bool(self._required)

    def with_arity(self: SymbolT, arity: Arity | int | str) -> SymbolT:
        """Set the number of value tokens this symbol accepts."""
        if not isinstance(arity, Arity):
            arity = Arity.from_nargs(arity)
        self._arity = arity
        return self

    def no_args(self: SymbolT) -> SymbolT:
        return self.with_arity(Arity.ZERO)

    def zero_or_one_arg(self: SymbolT) -> SymbolT:
        return self.with_arity(Arity.ZERO_OR_ONE)

    def zero_or_more_args(self: SymbolT) -> SymbolT:
        return self.with_arity(Arity.ZERO_OR_MORE)

    def one_arg(self: SymbolT) -> SymbolT:
        return self.with_arity(Arity.EXACTLY_ONE)

    def one_or_more_args(self: SymbolT) -> SymbolT:
        return self.with_arity(Arity.ONE_OR_MORE)

    def required(self: SymbolT, required: bool = True) -> SymbolT:
        """Mark this symbol as required, or as optional if `required` is False."""
        self._required = bool(required)
        return self

    def optional(self: SymbolT) -> SymbolT:
        return self.required(False)

    def with_parser(self: SymbolT, parser: Parser) -> SymbolT:
        """
        Resolve the value with `parser(result)` instead of type coercion.

        The parser may raise `ValueError`/`TypeError` or call
        `result.add_error()` to report a parse failure.
        """
        if not callable(parser):
            raise ConfigurationError(f"Parser for '{self.name}' must be callable")
        self.custom_parser = parser
        return self

    def with_description(self: SymbolT, description: str) -> SymbolT:
        self.description = description
        return self

    def with_default_value(self: SymbolT, value: Any) -> SymbolT:
        """Use `value` when nothing is supplied."""
        self.default_factory = lambda _result: value
        return self

    def with_default_factory(self: SymbolT, factory: DefaultFactory) -> SymbolT:
        """Evaluate `factory(result)` lazily when nothing is supplied."""
        if not callable(factory):
            raise ConfigurationError(f"Default factory for '{self.name}' must be callable")
        self.default_factory = factory
        return self

    def with_validator(self: SymbolT, validator: Validator) -> SymbolT:
        """
        Register a validator; validators run in registration order.

        A validator receives the `SymbolResult` and may call `result.add_error()`,
        or return a message or an iterable of messages.
        """
        if not callable(validator):
            raise ConfigurationError(f"Validator for '{self.name}' must be callable")
        self.validators.append(validator)
        return self

    def accept_only_from_among(self: SymbolT, *choices: Any) -> SymbolT:
        if not choices:
            raise ConfigurationError(f"No choices given for '{self.name}'")
        return self.with_validator(validators.from_among(self, choices))

    def non_zero(self: SymbolT) -> SymbolT:
        return self.with_validator(validators.non_zero(self))

    def greater_than(self: SymbolT, bound: Any) -> SymbolT:
        return self.with_validator(validators.greater_than(self, bound))

    def greater_than_or_equal_to(self: SymbolT, bound: Any) -> SymbolT:
        return self.with_validator(validators.greater_than_or_equal_to(self, bound))

    def less_than(self: SymbolT, bound: Any) -> SymbolT:
        return self.with_validator(validators.less_than(self, bound))

    def less_than_or_equal_to(self: SymbolT, bound: Any) -> SymbolT:
        return self.with_validator(validators.less_than_or_equal_to(self, bound))

    def valid_file_path(self: SymbolT) -> SymbolT:
        return self.with_validator(validators.file_path(self))

    def valid_directory_path(self: SymbolT) -> SymbolT:
        return self.with_validator(validators.directory_path(self))

    def valid_enum_variant(
        self: SymbolT,
        variants: EnumMeta | Iterable[str],
        ignore_case: bool = False,
        show_variants_on_error: bool = False,
    ) -> SymbolT:
        """Accept only the names of `variants` (an Enum subclass or names)."""
        return self.with_validator(
            validators.enum_variant(self, variants, ignore_case, show_variants_on_error)
        )

    def check(self) -> None:
        """Verify the finished configuration. Called when the command tree is sealed."""
        if self.is_required and self.arity.minimum < 1:
            raise ConfigurationError(
                f"{self.kind.capitalize()} '{self.name}' is required but its arity "
                f"({self.arity}) allows zero values"
            )

    def get_value_text(self) -> str:
        """Placeholder text for the value(s), e.g. `<COUNT>` or `<FILES>...`."""
        arity = self.arity
        if not arity.accepts_values:
            return ""
        text = f"<{self.dest.upper()}>"
        if arity.maximum is None or arity.maximum > 1:
            text = f"{text}..."
        if arity.minimum == 0:
            text = f"[{text}]"
        return text

    def __str__(self) -> str:
        return (
            f"{type(self).__name__}(name={self.name!r}, type="
            f"{getattr(self.value_type, '__name__', self.value_type)}, "
            f"arity={self.arity}, required={self.is_required})"
        )

    def __repr__(self) -> str:
        return str(self)


class Option(Symbol):
    """
    A named symbol introduced by `--long` or `-s` on the command line.

    Boolean options default to zero arity (plain flags); all others take
    exactly one value. Options are optional unless `required()` is called.
    """

    kind: ClassVar[str] = "option"
    numeric_checks_require_required: ClassVar[bool] = True

    def __init__(
        self,
        *names: str,
        type: Any = str,
        description: str = "",
        dest: str | None = None,
    ) -> None:
        super().__init__(*names, type=type, description=description, dest=dest)
        self.is_global: bool = False

    def _validate_names(self, names: tuple[str, ...]) -> None:
        for name in names:
            if not name.startswith("-"):
                raise ConfigurationError(
                    f"Option name '{name}' must start with '-' or '--'"
                )
            if name.startswith("--") and len(name) < 3:
                raise ConfigurationError(
                    f"Option name '{name}' must be at least 3 characters long"
                )
            if not name.startswith("--") and len(name) != 2:
                raise ConfigurationError(
                    f"Option name '{name}' must be a single character or start with '--'"
                )
            if "=" in name or " " in name:
                raise ConfigurationError(f"Option name '{name}' contains invalid characters")

    def _default_dest(self) -> str:
        for name in self.names:
            if name.startswith("--"):
                return _to_dest(name)
        return _to_dest(self.names[0])

    def _default_arity(self) -> Arity:
        if self.value_type is bool:
            return Arity.ZERO
        return Arity.EXACTLY_ONE

    def as_global(self, is_global: bool = True) -> Option:
        """Make this option visible in every descendant command."""
        self.is_global = is_global
        return self

    def get_usage_text(self) -> str:
        value_text = self.get_value_text()
        return f"{self.name} {value_text}" if value_text else self.name

    def get_help_text(self) -> str:
        names = ", ".join(sorted(self.names, key=len))
        value_text = self.get_value_text()
        return f"{names} {value_text}" if value_text else names


class Argument(Symbol):
    """
    A positional symbol, bound by order of declaration.

    Required by default when its arity needs at least one value.
    """

    kind: ClassVar[str] = "argument"

    def __init__(
        self,
        name: str,
        type: Any = str,
        description: str = "",
        dest: str | None = None,
    ) -> None:
        super().__init__(name, type=type, description=description, dest=dest)

    def _validate_names(self, names: tuple[str, ...]) -> None:
        name = names[0]
        if name.startswith("-"):
            raise ConfigurationError(
                f"Argument name '{name}' must not start with '-'; use Option instead"
            )

    @property
    def is_required(self) -> bool:
        if self._required is None:
            return self.arity.minimum >= 1
        return self._required

    def get_usage_text(self) -> str:
        text = f"<{self.name}>"
        if self.arity.maximum is None or self.arity.maximum > 1:
            text = f"{text}..."
        if not self.is_required:
            text = f"[{text}]"
        return text
