"""Synchronous checks applied to user input before any request is made."""

from pydantic import HttpUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ureduce.exceptions import ValidationError

_http_url = TypeAdapter(HttpUrl)


def validate_url(text: str, max_length: int = 2048) -> str:
    """Return the trimmed input if it is an absolute http(s) URL with a host.

    Raises ``ValidationError`` for empty, relative, scheme-less or oversized
    input. The returned value is the user's text, not pydantic's normalized
    form, so the service receives exactly what was typed.
    """

    candidate = text.strip()
    if not candidate or len(candidate) > max_length:
        raise ValidationError()

    try:
        parsed = _http_url.validate_python(candidate)
    except PydanticValidationError as exc:
        raise ValidationError() from exc

    if not parsed.host:
        raise ValidationError()

    return candidate


def is_valid_url(text: str, max_length: int = 2048) -> bool:
    """Boolean form of :func:`validate_url`."""

    try:
        validate_url(text, max_length=max_length)
    except ValidationError:
        return False
    return True
