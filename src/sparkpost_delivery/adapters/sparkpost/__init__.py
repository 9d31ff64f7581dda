"""SparkPost adapter - transmissions API delivery.

Provides the HTTP delivery adapter using httpx.

Structure:
    * :mod:`.config` - SparkPost configuration model and loader
    * :mod:`.validation` - Recipient validation
    * :mod:`.transport` - HTTP POST to the transmissions endpoint
    * :mod:`.delivery` - Delivery method used by host frameworks

Contents:
    * :class:`.config.SparkPostConfig` - SparkPost configuration container
    * :func:`.config.load_sparkpost_config_from_dict` - Config dict loader
    * :func:`.transport.post_transmission` - Single POST returning the raw response
    * :func:`.transport.send_transmission` - POST plus response interpretation
    * :class:`.delivery.SparkPostDelivery` - Message delivery entry point
"""

from __future__ import annotations

from .config import SparkPostConfig, apply_validated_overrides, load_sparkpost_config_from_dict
from .delivery import SparkPostDelivery
from .transport import RawResponse, post_transmission, send_transmission

__all__ = [
    "RawResponse",
    "SparkPostConfig",
    "SparkPostDelivery",
    "apply_validated_overrides",
    "load_sparkpost_config_from_dict",
    "post_transmission",
    "send_transmission",
]
