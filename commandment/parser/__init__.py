"""
Commandment Command-Line Toolkit

Copyright (c) 2025 The Commandment Authors.
Licensed under the MIT License. See LICENSE file for details.
"""

from .arity import Arity
from .parse_result import ErrorKind, ParseError, ParseResult, SymbolResult
from .parser import Parser
from .symbol import Argument, Option, Symbol
from .tokenizer import Token, TokenKind, tokenize

__all__ = [
    "Argument",
    "Arity",
    "ErrorKind",
    "Option",
    "ParseError",
    "ParseResult",
    "Parser",
    "Symbol",
    "SymbolResult",
    "Token",
    "TokenKind",
    "tokenize",
]
