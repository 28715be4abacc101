"""tasks.py"""
import asyncio


def greet(result) -> int:
    name = result["name"]
    for _ in range(result["times"]):
        print(f"Hello, {name}!")
    return 0


async def countdown(result, token) -> int:
    for remaining in range(result["seconds"], 0, -1):
        token.raise_if_cancelled()
        print(remaining)
        await asyncio.sleep(1)
    print("Liftoff!")
    return 0


def before(context) -> None:
    print(f"-> {context.name}")
