# Commandment Command-Line Toolkit - MIT Licensed
"""
Defines `Arity`, the minimum and maximum number of value tokens a symbol accepts.

`maximum=None` means unbounded. The named constants cover the common shapes,
and `Arity.from_nargs()` accepts the argparse-style vocabulary used in
configuration files:

    Arity.from_nargs("?")  -> Arity.ZERO_OR_ONE
    Arity.from_nargs("+")  -> Arity.ONE_OR_MORE
    Arity.from_nargs(3)    -> Arity(3, 3)
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from commandment.exceptions import ConfigurationError


@dataclass(frozen=True)
class Arity:
    """Inclusive bounds on the number of values a symbol may consume."""

    minimum: int
    maximum: int | None

    ZERO: ClassVar[Arity]
    ZERO_OR_ONE: ClassVar[Arity]
    ZERO_OR_MORE: ClassVar[Arity]
    EXACTLY_ONE: ClassVar[Arity]
    ONE_OR_MORE: ClassVar[Arity]

    def __post_init__(self) -> None:
        if not isinstance(self.minimum, int) or self.minimum < 0:
            raise ConfigurationError(
                f"Arity minimum must be a non-negative integer, got {self.minimum!r}"
            )
        if self.maximum is not None:
            if not isinstance(self.maximum, int) or self.maximum < 0:
                raise ConfigurationError(
                    f"Arity maximum must be a non-negative integer or None, "
                    f"got {self.maximum!r}"
                )
            if self.minimum > self.maximum:
                raise ConfigurationError(
                    f"Arity minimum ({self.minimum}) cannot exceed maximum ({self.maximum})"
                )

    @property
    def is_unbounded(self) -> bool:
        return self.maximum is None

    @property
    def accepts_values(self) -> bool:
        return self.maximum is None or self.maximum > 0

    @property
    def is_single(self) -> bool:
        """True if a resolved value is a scalar rather than a list."""
        return self.maximum == 1

    def room_after(self, count: int) -> int | None:
        """Return how many more values fit after `count`, or None if unbounded."""
        if self.maximum is None:
            return None
        return max(self.maximum - count, 0)

    def allows(self, count: int) -> bool:
        if count < self.minimum:
            return False
        return self.maximum is None or count <= self.maximum

    @classmethod
    def from_nargs(cls, nargs: int | str | None) -> Arity:
        """Convert argparse-style `nargs` or a constant name to an `Arity`."""
        if nargs is None:
            return cls.EXACTLY_ONE
        if isinstance(nargs, bool):
            raise ConfigurationError(f"Invalid nargs value: {nargs!r}")
        if isinstance(nargs, int):
            return cls(nargs, nargs)
        if not isinstance(nargs, str):
            raise ConfigurationError(
                f"nargs must be an int or one of ('?', '*', '+'), got {nargs!r}"
            )
        normalized = nargs.strip().lower()
        aliases = {
            "?": cls.ZERO_OR_ONE,
            "*": cls.ZERO_OR_MORE,
            "+": cls.ONE_OR_MORE,
            "zero": cls.ZERO,
            "zero_or_one": cls.ZERO_OR_ONE,
            "zero_or_more": cls.ZERO_OR_MORE,
            "one": cls.EXACTLY_ONE,
            "exactly_one": cls.EXACTLY_ONE,
            "one_or_more": cls.ONE_OR_MORE,
        }
        if normalized in aliases:
            return aliases[normalized]
        if normalized.isdigit():
            count = int(normalized)
            return cls(count, count)
        raise ConfigurationError(f"Invalid nargs value: {nargs!r}")

    def __str__(self) -> str:
        maximum = "*" if self.maximum is None else str(self.maximum)
        return f"{self.minimum}..{maximum}"


Arity.ZERO = Arity(0, 0)
Arity.ZERO_OR_ONE = Arity(0, 1)
Arity.ZERO_OR_MORE = Arity(0, None)
Arity.EXACTLY_ONE = Arity(1, 1)
Arity.ONE_OR_MORE = Arity(1, None)
