"""Type-safe domain enums for output formats and delivery failure kinds."""

from __future__ import annotations

from enum import Enum


class OutputFormat(str, Enum):
    """Output format options for configuration and payload display.

    Inherits from str to allow direct string comparison and Click integration.

    Attributes:
        HUMAN: Human-readable TOML-like output format.
        JSON: Machine-readable JSON output format.

    Example:
        >>> OutputFormat.HUMAN.value
        'human'
        >>> OutputFormat.JSON == "json"
        True
    """

    HUMAN = "human"
    JSON = "json"


class ErrorKind(str, Enum):
    """Classification of a failed transmission.

    Attributes:
        PROVIDER: The API rejected the send and returned an ``errors`` array.
        TRANSPORT: The HTTP request never produced a response.
        RESPONSE_FORMAT: The response body could not be interpreted.

    Example:
        >>> ErrorKind.TRANSPORT.value
        'transport'
        >>> ErrorKind.PROVIDER == "provider"
        True
    """

    PROVIDER = "provider"
    TRANSPORT = "transport"
    RESPONSE_FORMAT = "response_format"


__all__ = [
    "ErrorKind",
    "OutputFormat",
]
