"""deploy.py"""
import asyncio
from enum import Enum
from pathlib import Path

from commandment import Argument, Command, Option, RootCommand
from commandment.debug import register_debug_hooks


class Target(Enum):
    STAGING = "staging"
    PRODUCTION = "production"


def build(result) -> int:
    release = result.get_value("release", False)
    print(f"Building {result['path']} ({'release' if release else 'debug'})")
    return 0


async def deploy(result, token) -> int:
    target = Target[result["target"].upper()]
    for attempt in range(1, result["retries"] + 1):
        token.raise_if_cancelled()
        print(f"[{attempt}] Uploading to {target.value}...")
        await asyncio.sleep(0.5)
    print("Done.")
    return 0


def parse_size(result) -> int:
    text = result.values[0].lower()
    units = {"k": 1024, "m": 1024**2, "g": 1024**3}
    if text[-1:] in units:
        return int(text[:-1]) * units[text[-1]]
    return int(text)


root = RootCommand("deploy", "Build and ship the project", version="1.0.0")
root.add_option(Option("--verbose", "-v", type=bool).as_global())

build_command = (
    Command("build", "Compile the project", aliases=["b"])
    .add_option(Option("--release", "-r", type=bool))
    .add_option(
        Option("--max-size", type=int)
        .with_parser(parse_size)
        .with_description("Fail if the artifact is larger, e.g. 10m")
    )
    .add_argument(
        Argument("path", type=Path)
        .with_default_factory(lambda _: Path.cwd())
        .zero_or_one_arg()
        .valid_directory_path()
    )
    .with_action(build)
)

ship_command = (
    Command("ship", "Upload a build")
    .add_argument(
        Argument("target").valid_enum_variant(
            Target, ignore_case=True, show_variants_on_error=True
        )
    )
    .add_option(
        Option("--retries", "-n", type=int)
        .required()
        .greater_than(0)
        .less_than_or_equal_to(5)
    )
    .with_async_action(deploy)
)
register_debug_hooks(ship_command.hooks)

root.add_subcommand(build_command, ship_command)

if __name__ == "__main__":
    root.run()
