# Commandment Command-Line Toolkit - MIT Licensed
"""command.py

Defines the `Command` model, a node of the command tree.

A command owns:
- Options, looked up by any of their names
- Positional arguments, bound in declaration order
- Subcommands, looked up by name or alias
- An optional action (sync or cancellable async)
- A `HookManager` whose lifecycle hooks wrap its action

Every command gets an automatic `-h/--help` option. Options marked global
with `Option.as_global()` are visible to all descendant commands.

Builder methods return the command, so a tree reads top-down:

    build = (
        Command("build", "Compile the project")
        .add_option(Option("--release", type=bool))
        .add_argument(Argument("path").valid_directory_path())
        .with_action(run_build)
    )
"""
from __future__ import annotations

from typing import Any, Awaitable, Callable

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

from commandment.action import AsyncAction, CommandAction, SyncAction
from commandment.debug import register_debug_hooks
from commandment.exceptions import CommandAlreadyExistsError, ConfigurationError
from commandment.hook_manager import HookManager
from commandment.logger import logger
from commandment.parser.symbol import Argument, Option, Symbol


def _validate_command_name(name: str) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ValueError("Command names must be non-empty strings")
    if name.startswith("-"):
        raise ValueError(f"Command name '{name}' must not start with '-'")
    if any(char.isspace() for char in name):
        raise ValueError(f"Command name '{name}' must not contain whitespace")
    return name


class Command(BaseModel):
    """
    A named node of the command tree.

    Attributes:
        name (str): Name used on the command line.
        description (str): Short description shown in help.
        aliases (list[str]): Alternate names.
        hidden (bool): Leave the command out of its parent's help.
        help_epilog (str): Text printed at the end of help.
        hooks (HookManager): Lifecycle hooks around the action.
        logging_hooks (bool): Register the debug logging hooks on construction.
    """

    name: str
    description: str = ""
    aliases: list[str] = Field(default_factory=list)
    hidden: bool = False
    help_epilog: str = ""
    hooks: HookManager = Field(default_factory=HookManager)
    logging_hooks: bool = False

    _options: list[Option] = PrivateAttr(default_factory=list)
    _option_names: dict[str, Option] = PrivateAttr(default_factory=dict)
    _arguments: list[Argument] = PrivateAttr(default_factory=list)
    _subcommands: dict[str, Command] = PrivateAttr(default_factory=dict)
    _parent: Command | None = PrivateAttr(default=None)
    _action: CommandAction | None = PrivateAttr(default=None)
    _help_option: Option | None = PrivateAttr(default=None)

    model_config = ConfigDict(arbitrary_types_allowed=True)

    def __init__(self, name: str, description: str = "", **kwargs: Any) -> None:
        super().__init__(name=name, description=description, **kwargs)

    @field_validator("name")
    @classmethod
    def validate_name(cls, name: str) -> str:
        return _validate_command_name(name)

    @field_validator("aliases")
    @classmethod
    def validate_aliases(cls, aliases: list[str]) -> list[str]:
        for alias in aliases:
            _validate_command_name(alias)
        if len(set(aliases)) != len(aliases):
            raise ValueError(f"Duplicate aliases: {aliases}")
        return aliases

    def model_post_init(self, _: Any) -> None:
        if self.logging_hooks:
            register_debug_hooks(self.hooks)
        self._help_option = Option(
            "-h", "--help", type=bool, description="Show this help message and exit."
        )
        self.add_option(self._help_option)

    def __eq__(self, other: object) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    @property
    def options(self) -> tuple[Option, ...]:
        return tuple(self._options)

    @property
    def arguments(self) -> tuple[Argument, ...]:
        return tuple(self._arguments)

    @property
    def subcommands(self) -> tuple[Command, ...]:
        unique: dict[int, Command] = {}
        for command in self._subcommands.values():
            unique.setdefault(id(command), command)
        return tuple(unique.values())

    @property
    def parent(self) -> Command | None:
        return self._parent

    @property
    def action(self) -> CommandAction | None:
        return self._action

    @property
    def help_option(self) -> Option | None:
        return self._help_option

    @property
    def version_option(self) -> Option | None:
        return None

    @property
    def path(self) -> tuple[Command, ...]:
        """Commands from the root down to this one."""
        chain: list[Command] = []
        node: Command | None = self
        while node is not None:
            chain.append(node)
            node = node.parent
        return tuple(reversed(chain))

    @property
    def full_name(self) -> str:
        return " ".join(command.name for command in self.path)

    @property
    def names(self) -> tuple[str, ...]:
        return (self.name, *self.aliases)

    def add_option(self, *options: Option) -> Command:
        """Attach options. Raises `ConfigurationError` on a repeated name."""
        for option in options:
            if not isinstance(option, Option):
                raise ConfigurationError(
                    f"Expected an Option, got {type(option).__name__}: {option!r}"
                )
            for name in option.names:
                if name in self._option_names:
                    raise ConfigurationError(
                        f"Option name '{name}' is already used in command '{self.name}'"
                    )
            if any(option.dest == existing.dest for existing in self._options):
                raise ConfigurationError(
                    f"Option dest '{option.dest}' is already used in command '{self.name}'"
                )
            for name in option.names:
                self._option_names[name] = option
            self._options.append(option)
        return self

    def add_argument(self, *arguments: Argument) -> Command:
        """Attach positional arguments; they bind in the order added."""
        for argument in arguments:
            if not isinstance(argument, Argument):
                raise ConfigurationError(
                    f"Expected an Argument, got {type(argument).__name__}: {argument!r}"
                )
            if any(argument.dest == existing.dest for existing in self._arguments):
                raise ConfigurationError(
                    f"Argument '{argument.name}' is already defined in command '{self.name}'"
                )
            self._arguments.append(argument)
        return self

    def add_subcommand(self, *commands: Command) -> Command:
        """
        Attach subcommands.

        Raises:
            CommandAlreadyExistsError: A name or alias is already taken.
            ConfigurationError: The command already has a parent or would form a cycle.
        """
        for command in commands:
            if not isinstance(command, Command):
                raise ConfigurationError(
                    f"Expected a Command, got {type(command).__name__}: {command!r}"
                )
            if command.parent is not None:
                raise ConfigurationError(
                    f"Command '{command.name}' already belongs to '{command.parent.full_name}'"
                )
            if command in self.path:
                raise ConfigurationError(
                    f"Adding '{command.name}' to '{self.full_name}' would create a cycle"
                )
            for name in command.names:
                if name in self._subcommands:
                    raise CommandAlreadyExistsError(
                        f"Command '{self.full_name}' already has a subcommand named '{name}'"
                    )
            for name in command.names:
                self._subcommands[name] = command
            command._parent = self
            logger.debug("[Command:%s] Added subcommand '%s'", self.name, command.name)
        return self

    def with_action(self, action: Callable[..., int | None]) -> Command:
        """Bind a function called as `action(parse_result)`."""
        self._action = SyncAction(action)
        return self

    def with_async_action(
        self, action: Callable[..., Awaitable[int | None]]
    ) -> Command:
        """Bind a coroutine function called as `action(parse_result, cancellation_token)`."""
        self._action = AsyncAction(action)
        return self

    def with_description(self, description: str) -> Command:
        self.description = description
        return self

    def find_subcommand(self, name: str) -> Command | None:
        return self._subcommands.get(name)

    def find_option(self, name: str) -> Option | None:
        return self.get_option_scope().get(name)

    def inherited_options(self) -> list[Option]:
        """Global options declared on ancestors, outermost first."""
        inherited: list[Option] = []
        for ancestor in self.path[:-1]:
            inherited.extend(option for option in ancestor.options if option.is_global)
        return inherited

    def visible_options(self) -> list[Option]:
        return [*self._options, *self.inherited_options()]

    def get_option_scope(self) -> dict[str, Option]:
        """Map every option name usable at this command to its option."""
        scope: dict[str, Option] = {}
        for option in self.inherited_options():
            for name in option.names:
                scope[name] = option
        scope.update(self._option_names)
        return scope

    def symbols(self) -> list[Symbol]:
        return [*self._options, *self._arguments]

    def seal(self) -> None:
        """
        Check the finished tree below this command.

        Raises:
            ConfigurationError: A required symbol allows zero values, or an
                option name clashes with an inherited global option.
        """
        inherited: dict[str, Option] = {}
        for option in self.inherited_options():
            for name in option.names:
                inherited[name] = option
        for option in self._options:
            for name in option.names:
                if name in inherited and inherited[name] is not option:
                    raise ConfigurationError(
                        f"Option '{name}' on '{self.full_name}' conflicts with an "
                        "inherited global option"
                    )
        for symbol in self.symbols():
            symbol.check()
        for command in self.subcommands:
            command.seal()

    def __str__(self) -> str:
        return (
            f"Command(name={self.name!r}, options={len(self._options)}, "
            f"arguments={len(self._arguments)}, subcommands={len(self.subcommands)}, "
            f"action={self._action})"
        )

    def __repr__(self) -> str:
        return str(self)
