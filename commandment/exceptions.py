# Commandment Command-Line Toolkit - MIT Licensed
"""
Defines all custom exception classes used by Commandment.

These exceptions signal programming misuse: a malformed symbol, a conflicting
command tree, or an action that cannot be invoked. Problems with the user's
input are never raised. They are collected as `ParseError` records on the
`ParseResult` instead.

Exception Hierarchy:
- CommandmentError
    ├── ConfigurationError
    ├── CommandAlreadyExistsError
    └── InvalidActionError
"""


class CommandmentError(Exception):
    """Base exception for Commandment."""


class ConfigurationError(CommandmentError):
    """Exception raised when a symbol or command is configured incorrectly."""


class CommandAlreadyExistsError(ConfigurationError):
    """Exception raised when a subcommand with the same name already exists."""


class InvalidActionError(CommandmentError):
    """Exception raised when an action is not callable or returns a non-int."""
