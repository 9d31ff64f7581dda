"""Recipient validation shared between production and test adapters.

Provides recipient validation that raises domain exceptions
(InvalidRecipientError) rather than library-specific exceptions.
"""

from __future__ import annotations

from btx_lib_mail import validate_email_address

from sparkpost_delivery.domain.errors import InvalidRecipientError
from sparkpost_delivery.domain.message import ComposedMessage
from sparkpost_delivery.domain.options import DeliveryOptions


def validate_recipient(recipient: str) -> None:
    """Validate a single email address.

    Args:
        recipient: Email address to validate.

    Raises:
        InvalidRecipientError: When the email address is invalid.

    Example:
        >>> validate_recipient("valid@example.com")  # no exception
        >>> validate_recipient("invalid")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        InvalidRecipientError: Invalid recipient: invalid
    """
    try:
        validate_email_address(recipient)
    except ValueError as e:
        raise InvalidRecipientError(f"Invalid recipient: {recipient}") from e


def validate_message_recipients(message: ComposedMessage, options: DeliveryOptions) -> None:
    """Ensure the message resolves to a non-empty list of well-formed recipients.

    A stored recipient list (``recipient_list_id``) replaces the message's
    own recipients, so no inline recipient is required in that case.

    Args:
        message: Message about to be translated.
        options: Resolved provider options.

    Raises:
        InvalidRecipientError: When there are no recipients or one is malformed.
    """
    if options.recipient_list_id is not None:
        return
    recipients = message.recipients
    if not recipients:
        raise InvalidRecipientError("Message has no recipients and no recipient_list_id")
    for address in recipients:
        validate_recipient(address.email)


__all__ = ["validate_message_recipients", "validate_recipient"]
