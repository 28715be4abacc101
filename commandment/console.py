# Commandment Command-Line Toolkit - MIT Licensed
"""Global console instances: `console` for normal output, `error_console` for errors."""
from rich.console import Console

from commandment.themes import get_theme

console = Console(theme=get_theme())
error_console = Console(stderr=True, theme=get_theme())
