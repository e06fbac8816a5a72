import asyncio
import sys
from typing import AsyncIterator

from .maps_core import ConfigurationError, Settings, setup_logging
from .maps_core.services import redact_key
from .maps_impl.gemini import LiveMapsAgent


async def read_prompts() -> AsyncIterator[str]:
    """Yield stdin lines as user turns until EOF or 'exit'/'quit'."""
    while True:
        line = await asyncio.to_thread(sys.stdin.readline)
        if not line:
            return
        text = line.strip()
        if text.lower() in ["exit", "quit"]:
            return
        if text:
            yield text


async def main() -> None:
    """
    Run the maps agent against a live session, reading user turns from stdin.
    """
    try:
        settings = Settings.from_env()
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    setup_logging()

    async with LiveMapsAgent(settings, on_text=lambda text: print(f"Agent: {text}")) as agent:
        agent.display.subscribe(lambda url: print(f"Map: {redact_key(url)}"))
        print("Connected. Type a request, 'exit' or 'quit' to stop.")
        await agent.run(read_prompts())


def cli() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    cli()
