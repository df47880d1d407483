"""Interactive terminal front-end for the chat surface."""

from __future__ import annotations

import argparse
import asyncio
import logging

import httpx

from chatty_client.surface import ChatSurface

DEFAULT_URL = "http://127.0.0.1:8000"
CLEAR_COMMAND = "/clear"
QUIT_COMMAND = "/quit"


async def apply_line(surface: ChatSurface, line: str) -> bool:
    """Feed one typed line into the surface; return False to stop.

    A trailing backslash stands for Shift+Enter: the newline is kept and
    nothing is sent.
    """

    command = line.strip()
    if command == QUIT_COMMAND:
        return False
    if command == CLEAR_COMMAND:
        surface.clear()
        return True

    # Only a pending Shift+Enter continues the input; otherwise the line replaces it.
    if not surface.prompt.endswith("\n"):
        surface.prompt = ""

    if line.endswith("\\"):
        surface.prompt += line[:-1]
        await surface.handle_key("Enter", shift=True)
    else:
        surface.prompt += line
        await surface.handle_key("Enter")
    return True


async def run_client(url: str, timeout: float | None) -> None:
    """Read prompts from stdin until EOF or ``/quit``."""

    async with httpx.AsyncClient(base_url=url, timeout=timeout) as client:
        surface = ChatSurface(client)
        print(surface.render())
        while True:
            try:
                line = await asyncio.to_thread(input, "> ")
            except EOFError:
                break
            if not await apply_line(surface, line):
                break
            print(surface.render())


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Terminal chat client for Chatty AI.")
    parser.add_argument("--url", default=DEFAULT_URL, help="Server base URL (default: %(default)s)")
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds to wait for a reply (default: no client-side timeout).",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING))
    try:
        asyncio.run(run_client(args.url, args.timeout))
    except KeyboardInterrupt:  # pragma: no cover - manual usage only
        pass


if __name__ == "__main__":  # pragma: no cover
    main()
