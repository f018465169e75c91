"""Request-lifecycle state machine behind the shorten-and-copy form."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from ureduce.clipboard import Clipboard, MemoryClipboard
from ureduce.config import Settings
from ureduce.exceptions import RequestError, ServiceError, ValidationError
from ureduce.models import SessionState
from ureduce.services.shortener_service import ShortenerService
from ureduce.validation import validate_url

logger = logging.getLogger(__name__)

StateListener = Callable[[SessionState], None]


class ShortenSession:
    """One user's in-progress interaction with the shortening workflow.

    All mutation happens on the event loop thread. ``submit`` is the only
    coroutine and its HTTP call is the only suspension point, so the
    ``request_in_flight`` flag is enough to keep a single request outstanding.

    ``clear`` and ``close`` advance a generation counter captured by every
    submission; a response that arrives for an older generation is dropped
    instead of writing into the reset form.
    """

    def __init__(
        self,
        service: ShortenerService,
        settings: Settings,
        clipboard: Clipboard | None = None,
        on_change: StateListener | None = None,
    ) -> None:
        self._service = service
        self._settings = settings
        self._clipboard = clipboard if clipboard is not None else MemoryClipboard()
        self._on_change = on_change

        self._input = ""
        self._result: str | None = None
        self._error: str | None = None
        self._copied = False
        self._request_in_flight = False

        self._generation = 0
        self._copy_sequence = 0
        self._copy_reset: asyncio.TimerHandle | None = None

    @property
    def input(self) -> str:
        return self._input

    @property
    def result(self) -> str | None:
        return self._result

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def copied(self) -> bool:
        return self._copied

    @property
    def request_in_flight(self) -> bool:
        return self._request_in_flight

    def snapshot(self) -> SessionState:
        return SessionState(
            input=self._input,
            result=self._result,
            error=self._error,
            copied=self._copied,
            request_in_flight=self._request_in_flight,
        )

    def set_input(self, text: str) -> None:
        """Replace the current input. Validation waits for ``submit``."""

        self._input = text
        self._notify()

    async def submit(self) -> None:
        """Validate the input and, if it is a URL, request its short form."""

        if self._request_in_flight:
            logger.debug("Submit ignored; a request is already in flight")
            return

        try:
            url = validate_url(self._input, max_length=self._settings.max_url_length)
        except ValidationError as exc:
            logger.info("Rejected input", extra={"input_length": len(self._input)})
            self._fail(exc)
            return

        generation = self._generation
        self._error = None
        self._drop_result()
        self._request_in_flight = True
        self._notify()

        outcome: str | ServiceError
        try:
            outcome = await self._service.shorten(url)
        except RequestError as exc:
            outcome = exc
        finally:
            self._request_in_flight = False

        if generation != self._generation:
            logger.info(
                "Discarding response for a cleared session",
                extra={"generation": generation, "current_generation": self._generation},
            )
            self._notify()
            return

        if isinstance(outcome, ServiceError):
            self._fail(outcome)
            return

        self._result = outcome
        self._error = None
        self._notify()

    def clear(self) -> None:
        """Reset the form. A request already in flight keeps running but its
        response is ignored."""

        self._generation += 1
        self._cancel_copy_reset()
        self._input = ""
        self._result = None
        self._error = None
        self._copied = False
        self._notify()

    def copy(self) -> None:
        """Write the current result to the clipboard and flag it as copied."""

        if not self._result:
            return

        self._clipboard.write(self._result)
        self._cancel_copy_reset()
        self._copy_sequence += 1
        loop = asyncio.get_running_loop()
        self._copy_reset = loop.call_later(
            self._settings.copied_reset_seconds,
            self._reset_copied,
            self._copy_sequence,
        )
        self._copied = True
        self._notify()

    def close(self) -> None:
        """Discard the session; pending timers stop and late responses are ignored."""

        self._generation += 1
        self._cancel_copy_reset()
        self._on_change = None

    def _fail(self, exc: ServiceError) -> None:
        self._drop_result()
        self._error = exc.message
        self._notify()

    def _drop_result(self) -> None:
        # copied only makes sense while there is a result to have copied
        self._result = None
        self._copied = False
        self._cancel_copy_reset()

    def _reset_copied(self, sequence: int) -> None:
        if sequence != self._copy_sequence:
            return
        self._copy_reset = None
        self._copied = False
        self._notify()

    def _cancel_copy_reset(self) -> None:
        if self._copy_reset is not None:
            self._copy_reset.cancel()
            self._copy_reset = None

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change(self.snapshot())
