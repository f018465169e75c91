"""Adapter for the remote URL shortening service."""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError as PydanticValidationError

from ureduce.config import Settings
from ureduce.exceptions import RequestError
from ureduce.models import ShortenRequest, ShortenResponse

logger = logging.getLogger(__name__)


class ShortenerService:
    """Wrapper around the service's ``POST /shorten`` endpoint."""

    def __init__(self, client: httpx.AsyncClient, settings: Settings) -> None:
        self._client = client
        self._settings = settings

    @property
    def endpoint(self) -> str:
        return f"{self._settings.base_url}/shorten"

    def compose_short_url(self, token: str) -> str:
        """Build the user-visible link for a token returned by the service."""

        if self._settings.use_redirect_path:
            return f"{self._settings.base_url}/redirect/{token}"
        return f"{self._settings.base_url}/{token}"

    async def shorten(self, url: str) -> str:
        """Request a short token for ``url`` and return the full short URL."""

        payload = ShortenRequest(url=url).model_dump()
        headers = {"Content-Type": "application/json"}

        try:
            response = await self._client.post(
                self.endpoint,
                headers=headers,
                json=payload,
                timeout=self._settings.request_timeout,
            )
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.warning("Shorten request timed out", exc_info=exc)
            raise RequestError() from exc
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Shorten request failed",
                extra={
                    "status_code": exc.response.status_code,
                    "response_text": exc.response.text,
                },
            )
            raise RequestError(status_code=exc.response.status_code) from exc
        except httpx.HTTPError as exc:
            logger.exception("Unexpected shorten HTTP error")
            raise RequestError() from exc

        try:
            body = ShortenResponse.model_validate_json(response.content)
        except PydanticValidationError as exc:
            logger.error(
                "Malformed shorten response", extra={"raw_response": response.text}
            )
            raise RequestError(status_code=response.status_code) from exc

        short_url = self.compose_short_url(body.short_url)
        logger.info("URL shortened", extra={"short_url": short_url})
        return short_url
