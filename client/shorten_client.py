"""Command line client that drives one shortening session over the WebSocket."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import time
from typing import Any

import websockets

DEFAULT_URL = "ws://127.0.0.1:8000/ws"


async def _next_frame(websocket: Any, timeout: float) -> dict[str, Any]:
    return json.loads(await asyncio.wait_for(websocket.recv(), timeout=timeout))


async def run_client(url: str, long_url: str, copy: bool, timeout: float) -> str:
    """Submit ``long_url`` and return the short URL the session settled on."""

    logger = logging.getLogger("shorten_client")
    start = time.perf_counter()

    async with websockets.connect(url, ping_interval=None) as websocket:
        await websocket.send(json.dumps({"action": "set_input", "text": long_url}))
        await websocket.send(json.dumps({"action": "submit"}))
        logger.info("Submitted %d chars", len(long_url))

        while True:
            frame = await _next_frame(websocket, timeout)
            if "error" in frame and "type" not in frame:
                logger.error("Received error frame: %s", frame)
                raise SystemExit(1)
            if frame.get("type") != "state" or frame["request_in_flight"]:
                continue
            if frame["error"]:
                logger.error("Shortening failed: %s", frame["error"])
                raise SystemExit(1)
            if frame["result"]:
                break

        short_url = frame["result"]
        elapsed = time.perf_counter() - start
        logger.info("Received short URL in %.2fs", elapsed)

        if copy:
            await websocket.send(json.dumps({"action": "copy"}))
            while True:
                frame = await _next_frame(websocket, timeout)
                if frame.get("type") == "clipboard":
                    logger.info("Clipboard frame received for %s", frame["text"])
                    break

    return short_url


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Client for the UReduce WebSocket service.")
    parser.add_argument("long_url", help="URL to shorten.")
    parser.add_argument("--url", default=DEFAULT_URL, help="WebSocket URL (default: %(default)s)")
    parser.add_argument("--copy", action="store_true", help="Also exercise the copy action.")
    parser.add_argument(
        "--timeout", type=float, default=15.0, help="Seconds to wait for each frame."
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))
    try:
        short_url = asyncio.run(run_client(args.url, args.long_url, args.copy, args.timeout))
    except KeyboardInterrupt:  # pragma: no cover - manual usage only
        return
    print(short_url)


if __name__ == "__main__":  # pragma: no cover
    main()
