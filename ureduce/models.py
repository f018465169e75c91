"""Pydantic models shared across application layers."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ShortenRequest(BaseModel):
    """Body sent to the shortening service."""

    url: str


class ShortenResponse(BaseModel):
    """Successful reply from the shortening service."""

    short_url: str = Field(min_length=1, pattern=r"^[A-Za-z0-9_-]+$")


class SessionState(BaseModel):
    """Immutable snapshot of a ShortenSession."""

    model_config = ConfigDict(frozen=True)

    input: str = ""
    result: str | None = None
    error: str | None = None
    copied: bool = False
    request_in_flight: bool = False


class ActionIn(BaseModel):
    """Incoming WebSocket payload."""

    action: Literal["set_input", "submit", "clear", "copy"]
    text: str = Field(default="", description="New input for set_input.")


class StateFrame(SessionState):
    """State frame pushed to WebSocket clients after every change."""

    type: Literal["state"] = "state"


class ClipboardFrame(BaseModel):
    """Asks the browser to place ``text`` on the system clipboard."""

    type: Literal["clipboard"] = "clipboard"
    text: str


class ErrorResponse(BaseModel):
    """Error frame returned to WebSocket clients."""

    error: str
    detail: str | None = None
