"""Domain layer - pure message translation logic with no I/O.

Contains the composed-message value objects, the provider options model,
the wire payload builder and the response interpreter.

Contents:
    * :mod:`.message` - Composed message value objects
    * :mod:`.options` - Provider options and their resolution
    * :mod:`.payload` - Message to transmission body translation
    * :mod:`.response` - Response interpretation
    * :mod:`.enums` - Domain enumerations (OutputFormat, ErrorKind)
    * :mod:`.errors` - Domain exception types
"""

from __future__ import annotations

from .enums import ErrorKind, OutputFormat
from .errors import (
    ConfigurationError,
    DeliveryError,
    InvalidRecipientError,
    ProviderError,
    ResponseFormatError,
    TransportError,
)
from .message import Address, Attachment, ComposedMessage, InlineImage
from .options import DeliveryOptions, resolve_options
from .payload import build_payload
from .response import DeliveryResult, interpret_response

__all__ = [
    # Message
    "Address",
    "Attachment",
    "ComposedMessage",
    "InlineImage",
    # Options
    "DeliveryOptions",
    "resolve_options",
    # Translation
    "build_payload",
    "DeliveryResult",
    "interpret_response",
    # Enums
    "ErrorKind",
    "OutputFormat",
    # Errors
    "ConfigurationError",
    "DeliveryError",
    "InvalidRecipientError",
    "ProviderError",
    "ResponseFormatError",
    "TransportError",
]
