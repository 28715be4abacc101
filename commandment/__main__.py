"""
Commandment Command-Line Toolkit

Copyright (c) 2025 The Commandment Authors.
Licensed under the MIT License. See LICENSE file for details.
"""

import os
import sys
from pathlib import Path
from typing import Any, Sequence

from rich.markup import escape

from commandment.config import loader
from commandment.console import error_console
from commandment.exceptions import CommandmentError
from commandment.utils import setup_logging


def find_commandment_config() -> Path | None:
    candidates = [
        Path.cwd() / "commandment.yaml",
        Path.cwd() / "commandment.toml",
        Path.cwd() / ".commandment.yaml",
        Path.cwd() / ".commandment.toml",
        Path(os.environ.get("COMMANDMENT_CONFIG", "commandment.yaml")),
        Path.home() / ".config" / "commandment" / "commandment.yaml",
        Path.home() / ".config" / "commandment" / "commandment.toml",
    ]
    return next((p for p in candidates if p.is_file()), None)


def bootstrap() -> Path | None:
    config_path = find_commandment_config()
    if config_path and str(config_path.parent) not in sys.path:
        sys.path.insert(0, str(config_path.parent))
    return config_path


def main(argv: Sequence[str] | None = None) -> Any:
    setup_logging()
    config_path = bootstrap()
    if not config_path:
        error_console.print("[error]❌ No commandment.yaml or commandment.toml found.[/]")
        error_console.print(
            "[hint]Create one in the current directory or point "
            "COMMANDMENT_CONFIG at it.[/]"
        )
        sys.exit(1)
    try:
        root = loader(config_path)
    except (CommandmentError, ValueError, FileNotFoundError) as error:
        error_console.print(f"[error]❌ {escape(str(error))}[/]")
        sys.exit(1)
    root.run(argv)


if __name__ == "__main__":
    main()
