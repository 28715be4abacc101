"""
Commandment Command-Line Toolkit

Copyright (c) 2025 The Commandment Authors.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging

from .cancellation import CancellationToken
from .command import Command
from .dispatcher import Dispatcher, ExitCode
from .hook_manager import HookManager, HookType
from .parser import (
    Argument,
    Arity,
    ErrorKind,
    Option,
    ParseError,
    ParseResult,
    SymbolResult,
)
from .reporter import Reporter
from .root_command import RootCommand
from .version import __version__

logger = logging.getLogger("commandment")


__all__ = [
    "Argument",
    "Arity",
    "CancellationToken",
    "Command",
    "Dispatcher",
    "ErrorKind",
    "ExitCode",
    "HookManager",
    "HookType",
    "Option",
    "ParseError",
    "ParseResult",
    "Reporter",
    "RootCommand",
    "SymbolResult",
    "__version__",
]
