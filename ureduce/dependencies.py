"""Dependency providers for the FastAPI application."""

import httpx
from fastapi import Depends
from starlette.requests import HTTPConnection

from ureduce.config import Settings, get_settings
from ureduce.services.shortener_service import ShortenerService


async def get_http_client(connection: HTTPConnection) -> httpx.AsyncClient:
    """Retrieve the shared AsyncClient from application state."""

    return connection.app.state.http_client  # type: ignore[return-value]


async def get_shortener_service(
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> ShortenerService:
    """Dependency provider for ShortenerService."""

    return ShortenerService(client=client, settings=settings)
