import json

import httpx
import pytest

from ureduce.config import Settings
from ureduce.exceptions import REQUEST_FAILED_MESSAGE, RequestError
from ureduce.services.shortener_service import ShortenerService


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.mark.asyncio
async def test_shortener_service_success(settings: Settings) -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "POST"
        assert str(request.url) == "http://localhost:8080/shorten"
        assert request.headers["Content-Type"] == "application/json"
        assert json.loads(request.content.decode()) == {
            "url": "https://example.com/very/long/path"
        }
        return httpx.Response(200, json={"short_url": "abc123"})

    transport = httpx.MockTransport(handler)

    async with httpx.AsyncClient(transport=transport) as client:
        service = ShortenerService(client, settings)
        result = await service.shorten("https://example.com/very/long/path")

    assert result == "http://localhost:8080/abc123"


@pytest.mark.asyncio
async def test_shortener_service_redirect_path() -> None:
    settings = Settings(base_url="https://sho.rt/", use_redirect_path=True)

    async def handler(request: httpx.Request) -> httpx.Response:
        assert str(request.url) == "https://sho.rt/shorten"
        return httpx.Response(201, json={"short_url": "xYz9"})

    transport = httpx.MockTransport(handler)

    async with httpx.AsyncClient(transport=transport) as client:
        service = ShortenerService(client, settings)
        result = await service.shorten("https://example.com")

    assert result == "https://sho.rt/redirect/xYz9"


@pytest.mark.asyncio
async def test_shortener_service_http_error(settings: Settings) -> None:
    async def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(400, text="Invalid request body")

    transport = httpx.MockTransport(handler)

    async with httpx.AsyncClient(transport=transport) as client:
        service = ShortenerService(client, settings)
        with pytest.raises(RequestError) as exc:
            await service.shorten("https://example.com")

    assert exc.value.status_code == 400
    assert exc.value.message == REQUEST_FAILED_MESSAGE
    assert "Invalid request body" not in str(exc.value)


@pytest.mark.asyncio
async def test_shortener_service_timeout(settings: Settings) -> None:
    async def handler(_: httpx.Request) -> httpx.Response:
        raise httpx.TimeoutException("timeout")

    transport = httpx.MockTransport(handler)

    async with httpx.AsyncClient(transport=transport) as client:
        service = ShortenerService(client, settings)
        with pytest.raises(RequestError):
            await service.shorten("https://example.com")


@pytest.mark.asyncio
async def test_shortener_service_connection_error(settings: Settings) -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    transport = httpx.MockTransport(handler)

    async with httpx.AsyncClient(transport=transport) as client:
        service = ShortenerService(client, settings)
        with pytest.raises(RequestError):
            await service.shorten("https://example.com")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"text": "not json"},
        {"json": {"unexpected": "structure"}},
        {"json": {"short_url": ""}},
        {"json": {"short_url": "../etc"}},
    ],
)
async def test_shortener_service_bad_payload(
    settings: Settings, body: dict
) -> None:
    async def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, **body)

    transport = httpx.MockTransport(handler)

    async with httpx.AsyncClient(transport=transport) as client:
        service = ShortenerService(client, settings)
        with pytest.raises(RequestError):
            await service.shorten("https://example.com")
