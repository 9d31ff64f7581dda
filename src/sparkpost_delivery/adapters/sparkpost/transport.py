"""HTTP transport for the SparkPost transmissions endpoint.

Performs exactly one synchronous POST per call with httpx. There are no
retries and no timeout override beyond the httpx client default.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import httpx
import orjson

from sparkpost_delivery.domain.errors import ConfigurationError, TransportError
from sparkpost_delivery.domain.response import DeliveryResult, interpret_response

from .config import TRANSMISSIONS_PATH, SparkPostConfig

logger = logging.getLogger(__name__)

SUBACCOUNT_HEADER = "X-MSYS-SUBACCOUNT"


@dataclass(frozen=True, slots=True)
class RawResponse:
    """Status code and untouched body of an API response."""

    status_code: int
    body: bytes


def _redact(text: str, secret: str | None) -> str:
    """Remove the API key from error text before it is logged or raised.

    Example:
        >>> _redact("bad key abc123", "abc123")
        'bad key [REDACTED]'
        >>> _redact("connection refused", None)
        'connection refused'
    """
    if secret:
        return text.replace(secret, "[REDACTED]")
    return text


def _build_headers(config: SparkPostConfig) -> dict[str, str]:
    if config.api_key is None:
        raise ConfigurationError("No SparkPost API key configured (sparkpost.api_key is empty)")
    headers = {
        "Authorization": config.api_key,
        "Content-Type": "application/json",
        "Accept": "application/json",
    }
    if config.subaccount is not None:
        headers[SUBACCOUNT_HEADER] = config.subaccount
    return headers


def post_transmission(
    payload: Mapping[str, Any],
    *,
    config: SparkPostConfig,
    transport: httpx.BaseTransport | None = None,
) -> RawResponse:
    """POST a transmission body and return the raw response.

    Args:
        payload: JSON-serializable transmission body.
        config: SparkPost settings providing the API key and host.
        transport: Optional httpx transport (e.g. ``httpx.MockTransport`` in tests).

    Returns:
        Status code and body of the response, whatever the status.

    Raises:
        ConfigurationError: No API key configured, or the host is not a usable URL.
        TransportError: The request failed before a response arrived.
    """
    headers = _build_headers(config)
    body = orjson.dumps(payload)

    logger.debug("Posting transmission", extra={"url": config.transmissions_url, "bytes": len(body)})
    try:
        with httpx.Client(base_url=config.api_host, transport=transport) as client:
            response = client.post(TRANSMISSIONS_PATH, content=body, headers=headers)
    except httpx.InvalidURL as exc:
        raise ConfigurationError(f"Invalid SparkPost api_host {config.api_host!r}: {exc}") from exc
    except httpx.HTTPError as exc:
        description = _redact(str(exc) or type(exc).__name__, config.api_key)
        logger.debug("Transmission request failed", exc_info=True)
        raise TransportError("Could not reach SparkPost", description=description) from exc

    return RawResponse(status_code=response.status_code, body=response.content)


def send_transmission(
    payload: Mapping[str, Any],
    *,
    config: SparkPostConfig,
    transport: httpx.BaseTransport | None = None,
) -> DeliveryResult:
    """Send a built payload and interpret the reply.

    Raises:
        ConfigurationError: No API key configured.
        TransportError: The HTTP call failed.
        ProviderError: The API returned an ``errors`` array.
        ResponseFormatError: The reply could not be interpreted.
    """
    raw = post_transmission(payload, config=config, transport=transport)
    return interpret_response(raw.status_code, raw.body)


__all__ = [
    "RawResponse",
    "SUBACCOUNT_HEADER",
    "post_transmission",
    "send_transmission",
]
