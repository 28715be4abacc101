# Commandment Command-Line Toolkit - MIT Licensed
"""Global logger instance for Commandment."""
import logging

logger: logging.Logger = logging.getLogger("commandment")
