# Commandment Command-Line Toolkit - MIT Licensed
"""config.py
Builds a command tree from a YAML or TOML file.

Example (YAML):

    name: deploy
    version: 1.0.0
    options:
      - flags: [--verbose, -v]
        type: bool
        global: true
    commands:
      - name: push
        description: Push a release
        action: deploy.tasks.push
        arguments:
          - name: target
            validators:
              enum: {type: deploy.tasks.Target, ignore_case: true}
        options:
          - flags: [--retries]
            type: int
            required: true
            validators: {greater_than_or_equal_to: 0}

Actions, hooks, parsers, default factories, custom validators and non-builtin
types are dotted import paths. Coroutine functions become async actions.
"""
from __future__ import annotations

import importlib
from datetime import datetime
from pathlib import Path
from typing import Any, Union

import toml
import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator

from commandment.command import Command
from commandment.exceptions import ConfigurationError
from commandment.hook_manager import HookType
from commandment.logger import logger
from commandment.parser.symbol import Argument, Option, Symbol
from commandment.parser.utils import coerce_value
from commandment.root_command import RootCommand
from commandment.utils import is_coroutine

TYPE_NAMES: dict[str, Any] = {
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
    "path": Path,
    "datetime": datetime,
}


def import_action(dotted_path: str) -> Any:
    """Dynamically imports an object from a dotted path like 'my.module.func'."""
    module_path, _, attr = dotted_path.rpartition(".")
    if not module_path:
        raise ConfigurationError(f"Invalid import path: '{dotted_path}'")
    try:
        module = importlib.import_module(module_path)
    except ModuleNotFoundError as error:
        logger.error("Failed to import module '%s': %s", module_path, error)
        raise ConfigurationError(
            f"Could not import '{dotted_path}': {error}. Ensure the module is "
            "installed and discoverable via PYTHONPATH."
        ) from error
    try:
        return getattr(module, attr)
    except AttributeError as error:
        logger.error(
            "Module '%s' does not have attribute '%s': %s", module_path, attr, error
        )
        raise ConfigurationError(
            f"Module '{module_path}' has no attribute '{attr}'"
        ) from error


def resolve_type(name: str) -> Any:
    """Map a type name from a config file to a Python type."""
    if name in TYPE_NAMES:
        return TYPE_NAMES[name]
    if "." in name:
        return import_action(name)
    valid = ", ".join(TYPE_NAMES)
    raise ConfigurationError(f"Unknown type '{name}'. Use one of {valid} or a dotted path.")


class RawEnumConstraint(BaseModel):
    """Either a dotted path to an Enum type or an inline list of variant names."""

    type: str | None = None
    variants: list[str] = Field(default_factory=list)
    ignore_case: bool = False
    show_variants_on_error: bool = False

    @model_validator(mode="after")
    def validate_source(self) -> RawEnumConstraint:
        if bool(self.type) == bool(self.variants):
            raise ValueError("An enum constraint needs exactly one of 'type' or 'variants'")
        return self


class RawValidators(BaseModel):
    """Built-in validators and custom validator paths for one symbol."""

    non_zero: bool = False
    greater_than: Union[int, float, None] = None
    greater_than_or_equal_to: Union[int, float, None] = None
    less_than: Union[int, float, None] = None
    less_than_or_equal_to: Union[int, float, None] = None
    file_path: bool = False
    directory_path: bool = False
    choices: list[Any] = Field(default_factory=list)
    enum: RawEnumConstraint | None = None
    custom: list[str] = Field(default_factory=list)

    def apply(self, symbol: Symbol) -> None:
        if self.non_zero:
            symbol.non_zero()
        if self.greater_than is not None:
            symbol.greater_than(self.greater_than)
        if self.greater_than_or_equal_to is not None:
            symbol.greater_than_or_equal_to(self.greater_than_or_equal_to)
        if self.less_than is not None:
            symbol.less_than(self.less_than)
        if self.less_than_or_equal_to is not None:
            symbol.less_than_or_equal_to(self.less_than_or_equal_to)
        if self.file_path:
            symbol.valid_file_path()
        if self.directory_path:
            symbol.valid_directory_path()
        if self.choices:
            symbol.accept_only_from_among(*self.choices)
        if self.enum is not None:
            variants = import_action(self.enum.type) if self.enum.type else self.enum.variants
            symbol.valid_enum_variant(
                variants,
                ignore_case=self.enum.ignore_case,
                show_variants_on_error=self.enum.show_variants_on_error,
            )
        for path in self.custom:
            symbol.with_validator(import_action(path))


class RawSymbol(BaseModel):
    """Settings shared by options and arguments."""

    type: str = "str"
    description: str = ""
    dest: str | None = None
    nargs: Union[int, str, None] = None
    required: bool | None = None
    default: Any = None
    default_factory: str | None = None
    parser: str | None = None
    validators: RawValidators = Field(default_factory=RawValidators)

    def configure(self, symbol: Symbol) -> Symbol:
        if self.nargs is not None:
            symbol.with_arity(self.nargs)
        if self.required is not None:
            symbol.required(self.required)
        if "default" in self.model_fields_set:
            default = self.default
            if isinstance(default, str) and symbol.value_type is not str:
                try:
                    default = coerce_value(default, symbol.value_type)
                except (ValueError, TypeError) as error:
                    raise ConfigurationError(
                        f"Default {default!r} for '{symbol.name}' is not a valid "
                        f"{self.type}: {error}"
                    ) from error
            symbol.with_default_value(default)
        if self.default_factory:
            symbol.with_default_factory(import_action(self.default_factory))
        if self.parser:
            symbol.with_parser(import_action(self.parser))
        self.validators.apply(symbol)
        return symbol


class RawOption(RawSymbol):
    """Raw option model; `flags` holds the names, e.g. `[--count, -c]`."""

    flags: list[str]
    is_global: bool = Field(default=False, alias="global")

    model_config = ConfigDict(populate_by_name=True)

    def to_option(self) -> Option:
        option = Option(
            *self.flags,
            type=resolve_type(self.type),
            description=self.description,
            dest=self.dest,
        )
        self.configure(option)
        return option.as_global(self.is_global)


class RawArgument(RawSymbol):
    """Raw positional argument model."""

    name: str

    def to_argument(self) -> Argument:
        argument = Argument(
            self.name,
            type=resolve_type(self.type),
            description=self.description,
            dest=self.dest,
        )
        self.configure(argument)
        return argument


class RawCommand(BaseModel):
    """Raw command model; `commands` nests subcommands."""

    name: str
    description: str = ""
    aliases: list[str] = Field(default_factory=list)
    hidden: bool = False
    help_epilog: str = ""
    action: str | None = None
    logging_hooks: bool = False

    before_hooks: list[str] = Field(default_factory=list)
    success_hooks: list[str] = Field(default_factory=list)
    error_hooks: list[str] = Field(default_factory=list)
    after_hooks: list[str] = Field(default_factory=list)
    teardown_hooks: list[str] = Field(default_factory=list)

    options: list[RawOption] = Field(default_factory=list)
    arguments: list[RawArgument] = Field(default_factory=list)
    commands: list[RawCommand] = Field(default_factory=list)

    def build(self, command: Command) -> Command:
        """Populate `command` with this entry's symbols, hooks, action and children."""
        command.add_option(*(raw.to_option() for raw in self.options))
        command.add_argument(*(raw.to_argument() for raw in self.arguments))
        hooks = {
            HookType.BEFORE: self.before_hooks,
            HookType.ON_SUCCESS: self.success_hooks,
            HookType.ON_ERROR: self.error_hooks,
            HookType.AFTER: self.after_hooks,
            HookType.ON_TEARDOWN: self.teardown_hooks,
        }
        for hook_type, paths in hooks.items():
            for path in paths:
                command.hooks.register(hook_type, import_action(path))
        if self.action:
            action = import_action(self.action)
            if is_coroutine(action):
                command.with_async_action(action)
            else:
                command.with_action(action)
        for raw_command in self.commands:
            command.add_subcommand(raw_command.to_command())
        return command

    def to_command(self) -> Command:
        command = Command(
            self.name,
            self.description,
            aliases=self.aliases,
            hidden=self.hidden,
            help_epilog=self.help_epilog,
            logging_hooks=self.logging_hooks,
        )
        return self.build(command)


class CommandmentConfig(RawCommand):
    """Top-level configuration; describes the root command."""

    name: str | None = None  # type: ignore[assignment]
    version: str | None = None

    def to_root(self) -> RootCommand:
        root = RootCommand(
            self.name,
            self.description,
            aliases=self.aliases,
            hidden=self.hidden,
            help_epilog=self.help_epilog,
            logging_hooks=self.logging_hooks,
            version=self.version,
        )
        return self.build(root)  # type: ignore[return-value]


def loader(file_path: Path | str) -> RootCommand:
    """
    Load a command tree from a YAML or TOML file.

    Args:
        file_path (Path | str): Path to a `.yaml`, `.yml` or `.toml` file.

    Returns:
        RootCommand: The root of the configured tree.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the format is unsupported or the content is invalid.
        ConfigurationError: If an import path or symbol definition is invalid.
    """
    if isinstance(file_path, (str, Path)):
        path = Path(file_path)
    else:
        raise TypeError("file_path must be a string or Path object.")

    if not path.is_file():
        raise FileNotFoundError(f"No such config file: {file_path}")

    suffix = path.suffix
    with path.open("r", encoding="UTF-8") as config_file:
        if suffix in (".yaml", ".yml"):
            raw_config = yaml.safe_load(config_file)
        elif suffix == ".toml":
            raw_config = toml.load(config_file)
        else:
            raise ValueError(f"Unsupported config format: {suffix}")

    if not isinstance(raw_config, dict):
        raise ValueError(
            "Configuration file must contain a mapping describing the root command.\n"
            "Example:\n"
            "name: 'tool'\n"
            "commands:\n"
            "  - name: 'build'\n"
            "    action: 'my_module.build'"
        )

    logger.debug("Loading command tree from %s", path)
    return CommandmentConfig.model_validate(raw_config).to_root()
