"""Domain-specific exceptions for typed error handling at boundaries."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from .enums import ErrorKind


class ConfigurationError(Exception):
    """Missing, invalid, or incomplete configuration.

    Raised when required configuration values are absent, malformed, or
    logically inconsistent. Typically caught at CLI boundaries to provide
    user-friendly error messages.

    Example:
        >>> from sparkpost_delivery.domain.errors import ConfigurationError
        >>> err = ConfigurationError("No SparkPost API key configured")
        >>> str(err)
        'No SparkPost API key configured'
    """


class InvalidRecipientError(ValueError):
    """Recipient address validation failure.

    Raised when a recipient address fails RFC 5321/5322 validation or when
    a message resolves to no recipients at all. Inherits from ValueError so
    generic ``except ValueError`` handlers still catch it.

    Example:
        >>> from sparkpost_delivery.domain.errors import InvalidRecipientError
        >>> err = InvalidRecipientError("Invalid recipient: not-an-email")
        >>> str(err)
        'Invalid recipient: not-an-email'
        >>> isinstance(err, ValueError)
        True
    """


class DeliveryError(Exception):
    """A transmission could not be completed.

    Base class for every failed send. Carries the error ``kind`` plus the
    provider's ``message``, ``description`` and ``code``. When the API
    reports several errors, the first one is surfaced through the
    attributes and all of them remain available on ``errors``.

    Example:
        >>> err = DeliveryError("API Error", description="Test error", code="test_code")
        >>> str(err)
        'API Error'
        >>> err.code
        'test_code'
    """

    kind: ErrorKind = ErrorKind.PROVIDER

    def __init__(
        self,
        message: str,
        *,
        description: str | None = None,
        code: str | None = None,
        errors: Sequence[Mapping[str, Any]] = (),
    ) -> None:
        super().__init__(message)
        self.message = message
        self.description = description
        self.code = code
        self.errors: tuple[Mapping[str, Any], ...] = tuple(errors)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(kind={self.kind.value!r}, message={self.message!r}, "
            f"description={self.description!r}, code={self.code!r})"
        )


class ProviderError(DeliveryError):
    """The API understood the request but refused the transmission.

    Built from the ``errors`` array of a response (validation, auth, quota).
    """

    kind = ErrorKind.PROVIDER


class TransportError(DeliveryError):
    """The HTTP call itself failed (DNS, connection, TLS, timeout).

    The underlying client error text is stored as ``description``.
    """

    kind = ErrorKind.TRANSPORT


class ResponseFormatError(DeliveryError):
    """The API answered, but the body is neither a success nor an error shape.

    The raw response body is preserved as ``description``.

    Example:
        >>> err = ResponseFormatError("Unparseable response", description="<html>")
        >>> err.kind.value
        'response_format'
    """

    kind = ErrorKind.RESPONSE_FORMAT


__all__ = [
    "ConfigurationError",
    "DeliveryError",
    "InvalidRecipientError",
    "ProviderError",
    "ResponseFormatError",
    "TransportError",
]
