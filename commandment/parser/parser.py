# Commandment Command-Line Toolkit - MIT Licensed
"""
The parser walks a command tree over a token stream and builds a `ParseResult`.

Walk rules:
- The scope at any point is the current command's options plus the global
  options of its ancestors.
- An option occurrence takes its attached value if it has one; otherwise it
  greedily takes the following unescaped values up to its maximum arity,
  stopping early at a subcommand name once its minimum is met.
- A short group (`-abc`) expands to one occurrence per character. An option
  that takes values ends the group: the remaining characters are its value.
- An unescaped value naming a subcommand descends into it, after the current
  level's positional values have been distributed to its arguments.
- Any other value is queued as positional for the current level.

User-input problems never raise. They are collected as `ParseError`s, and
parsing continues so that every problem is reported at once. Only a malformed
command tree raises `ConfigurationError`, when the tree is sealed.
"""
from __future__ import annotations

import sys
from dataclasses import replace
from typing import TYPE_CHECKING, Iterator, Sequence

from commandment.logger import logger
from commandment.parser.parse_result import ErrorKind, ParseError, ParseResult
from commandment.parser.symbol import Argument, Option, Symbol
from commandment.parser.tokenizer import Token, TokenKind, tokenize
from commandment.parser.validation import Occurrence, SymbolBinding, validate_bindings

if TYPE_CHECKING:
    from commandment.command import Command


def distribute(arguments: Sequence[Argument], count: int) -> list[int]:
    """
    Split `count` positional values across `arguments` in declared order.

    Each argument first takes its own minimum, then as many extra values as
    its maximum allows while leaving enough for the minimums of the arguments
    after it. Returns how many values each argument takes; any remainder is
    unclaimed.
    """
    takes: list[int] = []
    remaining = count
    for index, argument in enumerate(arguments):
        arity = argument.arity
        later_minimum = sum(later.arity.minimum for later in arguments[index + 1 :])
        take = min(arity.minimum, remaining)
        room = remaining - later_minimum
        if room > take:
            take = room if arity.maximum is None else max(take, min(arity.maximum, room))
        takes.append(take)
        remaining -= take
    return takes


class _ParseState:
    """Mutable state for a single parse pass."""

    def __init__(self, root: Command, tokens: list[Token]) -> None:
        self.root = root
        self.tokens = tokens
        self.index = 0
        self.command = root
        self.path: list[Command] = [root]
        self.scope: dict[str, Option] = root.get_option_scope()
        self.classified: list[Token] = []
        self.errors: list[ParseError] = []
        self.bindings: dict[Symbol, SymbolBinding] = {}
        self.positionals: list[Token] = []

    def _peek(self) -> Token | None:
        if self.index < len(self.tokens):
            return self.tokens[self.index]
        return None

    def _advance(self) -> Token:
        token = self.tokens[self.index]
        self.index += 1
        return token

    def _unrecognized(self, text: str, position: int) -> None:
        self.errors.append(
            ParseError(
                kind=ErrorKind.SYNTAX,
                message=f"Unrecognized command or argument '{text}'",
                position=position,
            )
        )

    def _owner_of(self, option: Option) -> Command:
        for command in reversed(self.path):
            if option in command.options:
                return command
        return self.command

    def _binding(self, symbol: Symbol, command: Command) -> SymbolBinding:
        binding = self.bindings.get(symbol)
        if binding is None:
            binding = SymbolBinding(symbol, command)
            self.bindings[symbol] = binding
        return binding

    def run(self) -> None:
        while self.index < len(self.tokens):
            token = self._advance()
            if token.kind is TokenKind.SEPARATOR:
                self.classified.append(token)
            elif token.kind is TokenKind.OPTION:
                self._consume_option(token)
            elif token.kind is TokenKind.SHORT_GROUP:
                self._consume_short_group(token)
            else:
                self._consume_value(token)
        self._distribute_positionals()

    def _consume_option(self, token: Token) -> None:
        self.classified.append(token)
        option = self.scope.get(token.value)
        following = self._peek()
        has_attached = following is not None and following.attached
        if option is None:
            self._unrecognized(token.value, token.position)
            if has_attached:
                self.classified.append(self._advance())
            return
        occurrence = self._binding(option, self._owner_of(option)).open_occurrence(token)
        if has_attached:
            value = self._advance()
            self.classified.append(value)
            occurrence.tokens.append(value)
            occurrence.attached = True
            return
        self._consume_option_values(option, occurrence)

    def _consume_option_values(self, option: Option, occurrence: Occurrence) -> None:
        arity = option.arity
        while arity.maximum is None or len(occurrence.tokens) < arity.maximum:
            following = self._peek()
            if following is None or following.kind is not TokenKind.VALUE:
                break
            if following.escaped:
                break
            if (
                len(occurrence.tokens) >= arity.minimum
                and self.command.find_subcommand(following.value) is not None
            ):
                break
            value = self._advance()
            self.classified.append(value)
            occurrence.tokens.append(value)

    def _consume_short_group(self, token: Token) -> None:
        self.classified.append(token)
        letters = token.value[1:]
        if f"-{letters[0]}" not in self.scope:
            self._unrecognized(token.value, token.position)
            return
        for offset, letter in enumerate(letters):
            name = f"-{letter}"
            option = self.scope.get(name)
            if option is None:
                self.errors.append(
                    ParseError(
                        kind=ErrorKind.SYNTAX,
                        message=f"Unrecognized option '{name}' in '{token.value}'",
                        position=token.position,
                    )
                )
                continue
            binding = self._binding(option, self._owner_of(option))
            occurrence = binding.open_occurrence(Token(name, TokenKind.OPTION, token.position))
            if not option.arity.accepts_values:
                continue
            rest = letters[offset + 1 :]
            if rest.startswith("="):
                rest = rest[1:]
            if rest:
                occurrence.tokens.append(
                    Token(rest, TokenKind.VALUE, token.position, attached=True)
                )
                occurrence.attached = True
            else:
                self._consume_option_values(option, occurrence)
            break

    def _consume_value(self, token: Token) -> None:
        if not token.escaped:
            subcommand = self.command.find_subcommand(token.value)
            if subcommand is not None:
                self._distribute_positionals()
                self.classified.append(replace(token, kind=TokenKind.COMMAND))
                self.command = subcommand
                self.path.append(subcommand)
                self.scope = subcommand.get_option_scope()
                logger.debug("[Parser] Descended into '%s'", subcommand.full_name)
                return
        self.classified.append(token)
        self.positionals.append(token)

    def _distribute_positionals(self) -> None:
        tokens, self.positionals = self.positionals, []
        arguments = self.command.arguments
        start = 0
        for argument, take in zip(arguments, distribute(arguments, len(tokens))):
            if take:
                binding = self._binding(argument, self.command)
                binding.open_occurrence().tokens.extend(tokens[start : start + take])
            start += take
        for token in tokens[start:]:
            self._unrecognized(token.value, token.position)

    def ordered_bindings(self) -> Iterator[SymbolBinding]:
        for command in self.path:
            for symbol in (*command.options, *command.arguments):
                yield self.bindings.get(symbol) or SymbolBinding(symbol, command)

    def was_given(self, option: Option | None) -> bool:
        if option is None:
            return False
        binding = self.bindings.get(option)
        return binding is not None and binding.supplied


class Parser:
    """
    Parses an argument vector against a command tree.

    Example:
        result = Parser(root).parse(["build", "--release", "src/"])
        if result.succeeded:
            print(result["release"])
    """

    def __init__(self, root: Command) -> None:
        self.root = root

    def parse(self, argv: Sequence[str] | None = None) -> ParseResult:
        """Parse `argv` (default `sys.argv[1:]`) and return the outcome."""
        if argv is None:
            argv = sys.argv[1:]
        argv = [str(arg) for arg in argv]
        self.root.seal()

        state = _ParseState(self.root, tokenize(argv))
        state.run()
        values, errors = validate_bindings(state.ordered_bindings())

        help_requested = any(state.was_given(command.help_option) for command in state.path)
        version_requested = state.was_given(self.root.version_option)
        result = ParseResult(
            root=self.root,
            command=state.command,
            command_path=tuple(state.path),
            tokens=tuple(state.classified),
            errors=tuple(state.errors + errors),
            values=values,
            help_requested=help_requested,
            version_requested=version_requested,
        )
        logger.debug("[Parser] %s -> %s", argv, result)
        return result
