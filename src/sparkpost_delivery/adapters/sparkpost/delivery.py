"""SparkPost delivery method for host mail frameworks.

:class:`SparkPostDelivery` is the entry point a mail-composition layer
calls instead of an SMTP delivery method. It holds an explicit
configuration value; tests build fresh instances rather than mutating
shared state.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from sparkpost_delivery.domain.errors import ConfigurationError, DeliveryError
from sparkpost_delivery.domain.message import ComposedMessage
from sparkpost_delivery.domain.options import resolve_options
from sparkpost_delivery.domain.payload import build_payload
from sparkpost_delivery.domain.response import DeliveryResult, interpret_response

from .config import SparkPostConfig, apply_validated_overrides
from .transport import RawResponse, post_transmission
from .validation import validate_message_recipients

logger = logging.getLogger(__name__)

PostFunction = Callable[..., RawResponse]


class SparkPostDelivery:
    """Deliver composed messages through the transmissions API.

    Args:
        config: Process-wide SparkPost settings. Defaults to an empty config.
        post: Function performing the HTTP call; replaced in tests.
        **settings: Per-instance overrides of config fields, e.g.
            ``api_key="..."`` or ``sandbox=True``.

    Example:
        >>> delivery = SparkPostDelivery(SparkPostConfig(api_key="k"), sandbox=True)
        >>> delivery.settings.sandbox
        True
    """

    def __init__(
        self,
        config: SparkPostConfig | None = None,
        *,
        post: PostFunction = post_transmission,
        **settings: Any,
    ) -> None:
        base = config if config is not None else SparkPostConfig()
        self.settings = apply_validated_overrides(base, settings)
        self._post = post

    def build(self, message: ComposedMessage) -> dict[str, Any]:
        """Resolve options, validate recipients and build the wire payload.

        Raises:
            InvalidRecipientError: The message has no valid recipients.
            pydantic.ValidationError: A provider option has the wrong type.
        """
        options = resolve_options(self.settings.default_options(), message.provider_data)
        validate_message_recipients(message, options)
        return build_payload(message, options)

    def deliver(self, message: ComposedMessage) -> DeliveryResult:
        """Send one message and return the accepted/rejected summary.

        Partial rejection is not an error; inspect
        ``total_rejected_recipients`` on the result.

        Raises:
            ConfigurationError: No API key configured.
            InvalidRecipientError: The message has no valid recipients.
            ProviderError: The API rejected the transmission.
            TransportError: The HTTP call failed.
            ResponseFormatError: The response could not be interpreted.
        """
        if self.settings.api_key is None:
            raise ConfigurationError("No SparkPost API key configured (sparkpost.api_key is empty)")

        payload = self.build(message)
        logger.info("Sending transmission", extra=_describe(payload))

        try:
            raw = self._post(payload, config=self.settings)
            result = interpret_response(raw.status_code, raw.body)
        except DeliveryError as exc:
            logger.error(
                "Transmission failed",
                extra={"kind": exc.kind.value, "error": exc.message, "code": exc.code},
            )
            raise

        summary = {
            "transmission_id": result.id,
            "accepted": result.total_accepted_recipients,
            "rejected": result.total_rejected_recipients,
        }
        if result.fully_accepted:
            logger.info("Transmission accepted", extra=summary)
        else:
            logger.warning("Transmission accepted with rejected recipients", extra=summary)
        return result


def _describe(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Log-safe summary of a payload (no bodies, no attachment data)."""
    recipients = payload.get("recipients")
    content = payload.get("content", {})
    return {
        "recipient_count": len(recipients) if isinstance(recipients, list) else None,
        "recipient_list": recipients.get("list_id") if isinstance(recipients, dict) else None,
        "campaign_id": payload.get("campaign_id"),
        "template_id": content.get("template_id"),
        "attachment_count": len(content.get("attachments", ())),
        "sandbox": payload.get("options", {}).get("sandbox"),
    }


__all__ = ["SparkPostDelivery"]
