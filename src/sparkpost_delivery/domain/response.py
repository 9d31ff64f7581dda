"""Interpret transmission responses as a result or a typed failure.

The API answers with one of two JSON shapes::

    {"results": {"total_accepted_recipients": 1, "total_rejected_recipients": 0, "id": "..."}}
    {"errors": [{"message": "...", "description": "...", "code": "..."}, ...]}

An ``errors`` array wins regardless of HTTP status. Rejected recipients in
an otherwise successful response are reported through the result counts,
not as an error.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

import orjson
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ProviderError, ResponseFormatError

_GENERIC_PROVIDER_MESSAGE = "SparkPost API error"


class DeliveryResult(BaseModel):
    """Normalized summary of an accepted transmission.

    Example:
        >>> result = DeliveryResult(total_accepted_recipients=1, total_rejected_recipients=0, id="abc")
        >>> result.id
        'abc'
        >>> result.fully_accepted
        True
    """

    model_config = ConfigDict(frozen=True)

    total_accepted_recipients: int = 0
    total_rejected_recipients: int = 0
    id: str
    raw: dict[str, Any] = Field(default_factory=dict, repr=False)

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @property
    def fully_accepted(self) -> bool:
        """True when no recipient was rejected."""
        return self.total_rejected_recipients == 0


class ApiErrorEntry(BaseModel):
    """One element of an ``errors`` array."""

    model_config = ConfigDict(extra="ignore")

    message: str = ""
    description: str | None = None
    code: str | None = None

    @field_validator("message", mode="before")
    @classmethod
    def _coerce_message(cls, v: Any) -> Any:
        if v is None:
            return ""
        return v if isinstance(v, str) else _as_text(v)

    @field_validator("description", "code", mode="before")
    @classmethod
    def _coerce_optional(cls, v: Any) -> Any:
        if v is None or isinstance(v, str):
            return v
        return _as_text(v)


def _as_text(value: Any) -> str:
    """Render a non-string error field as text, keeping JSON structure readable.

    Examples:
        >>> _as_text(1902)
        '1902'
        >>> _as_text({"field": "to"})
        '{"field":"to"}'
    """
    if isinstance(value, (Mapping, list)):
        return orjson.dumps(value).decode("utf-8")
    return str(value)


def _body_text(body: bytes | str) -> str:
    if isinstance(body, bytes):
        return body.decode("utf-8", errors="replace")
    return body


def _provider_error(errors: list[Any]) -> ProviderError:
    """Surface the first error entry and keep all of them on the exception."""
    entries = [cast(Mapping[str, Any], e) for e in errors if isinstance(e, Mapping)]
    first_raw = errors[0]
    if isinstance(first_raw, Mapping):
        first = ApiErrorEntry.model_validate(first_raw)
    else:
        first = ApiErrorEntry(message=_as_text(first_raw))
    return ProviderError(
        first.message or _GENERIC_PROVIDER_MESSAGE,
        description=first.description,
        code=first.code,
        errors=entries,
    )


def interpret_response(status_code: int, body: bytes | str) -> DeliveryResult:
    """Map an HTTP status and response body to a DeliveryResult.

    Args:
        status_code: HTTP status of the response.
        body: Raw response body.

    Returns:
        The accepted/rejected counts and transmission id.

    Raises:
        ProviderError: The body carries a non-empty ``errors`` array.
        ResponseFormatError: The body is not JSON, matches neither shape,
            or a non-2xx status came without error details.

    Example:
        >>> body = b'{"results": {"total_accepted_recipients": 1, "id": "abc"}}'
        >>> interpret_response(200, body)
        DeliveryResult(total_accepted_recipients=1, total_rejected_recipients=0, id='abc')
    """
    text = _body_text(body)
    try:
        data: Any = orjson.loads(body)
    except orjson.JSONDecodeError as exc:
        raise ResponseFormatError("Unparseable response from SparkPost", description=text) from exc

    if not isinstance(data, Mapping):
        raise ResponseFormatError("Unparseable response from SparkPost", description=text)
    document = cast(Mapping[str, Any], data)

    errors = document.get("errors")
    if isinstance(errors, list) and errors:
        raise _provider_error(cast(list[Any], errors))

    if not 200 <= status_code < 300:
        raise ResponseFormatError(f"Unexpected HTTP {status_code} response without error details", description=text)

    results = document.get("results")
    if not isinstance(results, Mapping):
        raise ResponseFormatError("Response contains neither results nor errors", description=text)

    results_map = dict(cast(Mapping[str, Any], results))
    try:
        return DeliveryResult.model_validate({**results_map, "raw": results_map})
    except ValidationError as exc:
        raise ResponseFormatError("Malformed results object in SparkPost response", description=text) from exc


__all__ = [
    "ApiErrorEntry",
    "DeliveryResult",
    "interpret_response",
]
