"""WebSocket handlers for the application."""

from __future__ import annotations

import asyncio
import logging
from contextlib import suppress
from typing import Annotated

from fastapi import Depends, WebSocket, WebSocketDisconnect, status
from pydantic import BaseModel
from starlette.websockets import WebSocketState

from ureduce.config import Settings, get_settings
from ureduce.dependencies import get_shortener_service
from ureduce.models import ActionIn, ClipboardFrame, ErrorResponse, SessionState, StateFrame
from ureduce.services.shortener_service import ShortenerService
from ureduce.session import ShortenSession

logger = logging.getLogger(__name__)


class OutboxClipboard:
    """Clipboard that hands copied text to the browser as a frame."""

    def __init__(self, outbox: asyncio.Queue[BaseModel]) -> None:
        self._outbox = outbox

    def write(self, text: str) -> None:
        self._outbox.put_nowait(ClipboardFrame(text=text))


async def websocket_endpoint(
    websocket: WebSocket,
    shortener_service: Annotated[ShortenerService, Depends(get_shortener_service)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> None:
    """One form per connection: action frames in, state frames out."""

    await websocket.accept()
    should_close = True
    logger.info(
        "WebSocket connection accepted",
        extra={"client": _client_repr(websocket)},
    )

    outbox: asyncio.Queue[BaseModel] = asyncio.Queue()

    def push_state(state: SessionState) -> None:
        outbox.put_nowait(StateFrame(**state.model_dump()))

    session = ShortenSession(
        shortener_service,
        settings,
        clipboard=OutboxClipboard(outbox),
        on_change=push_state,
    )
    push_state(session.snapshot())
    sender = asyncio.create_task(_pump(websocket, outbox))
    submissions: set[asyncio.Task[None]] = set()

    try:
        while True:
            try:
                message = await asyncio.wait_for(
                    websocket.receive_text(),
                    timeout=settings.ws_inactivity_timeout,
                )
            except asyncio.TimeoutError:
                logger.info(
                    "WebSocket inactive; closing",
                    extra={"client": _client_repr(websocket)},
                )
                await websocket.close(code=status.WS_1000_NORMAL_CLOSURE)
                should_close = False
                break
            except WebSocketDisconnect:
                logger.info(
                    "WebSocket client disconnected",
                    extra={"client": _client_repr(websocket)},
                )
                should_close = False
                break

            try:
                payload = ActionIn.model_validate_json(message)
            except ValueError:
                outbox.put_nowait(
                    ErrorResponse(error="invalid_payload", detail="Invalid action frame.")
                )
                continue

            if payload.action == "set_input":
                session.set_input(payload.text)
            elif payload.action == "submit":
                task = asyncio.create_task(session.submit())
                submissions.add(task)
                task.add_done_callback(_submission_done(submissions))
            elif payload.action == "clear":
                session.clear()
            else:
                session.copy()
    finally:
        session.close()
        for task in submissions:
            task.cancel()
        sender.cancel()
        with suppress(asyncio.CancelledError, RuntimeError, WebSocketDisconnect):
            await sender
        if should_close and websocket.application_state == WebSocketState.CONNECTED:
            with suppress(RuntimeError, WebSocketDisconnect):
                await websocket.close()
        logger.info(
            "WebSocket connection closed",
            extra={"client": _client_repr(websocket)},
        )


async def _pump(websocket: WebSocket, outbox: asyncio.Queue[BaseModel]) -> None:
    """Send queued frames in the order the session produced them."""

    while True:
        frame = await outbox.get()
        await websocket.send_text(frame.model_dump_json())


def _submission_done(submissions: set[asyncio.Task[None]]):
    def callback(task: asyncio.Task[None]) -> None:
        submissions.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Submission crashed", exc_info=task.exception())

    return callback


def _client_repr(websocket: WebSocket) -> str:
    """Render the remote client for logging purposes."""

    client = websocket.client
    if client is None:
        return "unknown"
    return f"{client.host}:{client.port}"
