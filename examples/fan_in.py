"""
fan_in.py — Aggregate callback-style and asyncio work into one promise.

Demonstrates construction from a callback-style function, progress
reporting from `when`, and awaiting the aggregate on an asyncio loop.

Usage:
    python examples/fan_in.py
"""

import asyncio

from pledge import Promise, from_awaitable, when


def load_document(callback):
    callback(None, "# Title")


async def render(markdown: str) -> str:
    await asyncio.sleep(0.01)
    return markdown.replace("# ", "<h1>") + "</h1>"


async def main() -> None:
    document = Promise(load_document)
    rendered = document.then(lambda text: from_awaitable(render(text)))
    stats = Promise.do(lambda: {"words": 1})

    aggregate = when(document, rendered, stats)
    aggregate.then(None, None, lambda fraction: print(f"{fraction:.0%} done"))
    source, html, counts = await aggregate
    print(source, html, counts)


if __name__ == "__main__":
    asyncio.run(main())
