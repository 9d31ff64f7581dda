"""Public package surface for SparkPost transmission delivery.

This module provides the stable public API for the package, routing imports
through the proper architectural layers:
- Domain exports: message model, payload builder, response interpretation
- Adapter exports: the delivery method and its configuration
- Composition exports: wired configuration loader
- Metadata: package information
"""

from __future__ import annotations

# Metadata
from .__init__conf__ import print_info

# SparkPost adapter
from .adapters.sparkpost import (
    SparkPostConfig,
    SparkPostDelivery,
    load_sparkpost_config_from_dict,
    send_transmission,
)

# Composition exports (wired adapters)
from .composition import get_config

# Domain exports
from .domain import (
    Address,
    Attachment,
    ComposedMessage,
    ConfigurationError,
    DeliveryError,
    DeliveryOptions,
    DeliveryResult,
    InlineImage,
    InvalidRecipientError,
    ProviderError,
    ResponseFormatError,
    TransportError,
    build_payload,
    interpret_response,
    resolve_options,
)

__all__ = [
    "Address",
    "Attachment",
    "ComposedMessage",
    "ConfigurationError",
    "DeliveryError",
    "DeliveryOptions",
    "DeliveryResult",
    "InlineImage",
    "InvalidRecipientError",
    "ProviderError",
    "ResponseFormatError",
    "SparkPostConfig",
    "SparkPostDelivery",
    "TransportError",
    "build_payload",
    "get_config",
    "interpret_response",
    "load_sparkpost_config_from_dict",
    "print_info",
    "resolve_options",
    "send_transmission",
]
