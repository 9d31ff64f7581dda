"""Translate a composed message into a SparkPost transmission request body.

:func:`build_payload` is pure: it performs no I/O, does not validate its
input and returns a JSON-serializable ``dict``. Options that were never
set are left out of the payload entirely so the API applies its own
defaults.

Wire layout::

    {
        "options":    {open_tracking, click_tracking, transactional, sandbox,
                       inline_css, ip_pool, skip_suppression, start_time},
        "recipients": [{"address": ..., "substitution_data": ..., "metadata": ...}]
                      | {"list_id": ...},
        "content":    {"template_id": ...} | {"ab_test_id": ...}
                      | {from, subject, html, text, reply_to, headers,
                         attachments, inline_images},
        "campaign_id", "return_path", "description", "metadata",
        "substitution_data", "customer_id"
    }
"""

from __future__ import annotations

import base64
from collections.abc import Iterable, Mapping
from typing import Any

from .message import Address, Attachment, ComposedMessage, InlineImage
from .options import DeliveryOptions

_OPTION_FIELDS: tuple[str, ...] = (
    "open_tracking",
    "click_tracking",
    "transactional",
    "sandbox",
    "inline_css",
    "ip_pool",
    "skip_suppression",
    "start_time",
)

# (wire key, option field)
_TOP_LEVEL_FIELDS: tuple[tuple[str, str], ...] = (
    ("campaign_id", "campaign_id"),
    ("return_path", "return_path"),
    ("description", "description"),
    ("metadata", "metadata"),
    ("substitution_data", "global_substitution_data"),
    ("customer_id", "subaccount"),
)


class _HeaderMap:
    """Ordered header collection with case-insensitive, last-write-wins keys.

    The most recent spelling of a header name is the one emitted.

    Example:
        >>> headers = _HeaderMap()
        >>> headers.set("X-Tag", "a")
        >>> headers.set("x-tag", "b")
        >>> headers.as_dict()
        {'x-tag': 'b'}
    """

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: dict[str, tuple[str, str]] = {}

    def set(self, name: str, value: str) -> None:
        self._entries[name.lower()] = (name, value)

    def extend(self, pairs: Iterable[tuple[str, str]]) -> None:
        for name, value in pairs:
            self.set(name, value)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def as_dict(self) -> dict[str, str]:
        return {name: value for name, value in self._entries.values()}


def _address_value(address: Address) -> str | dict[str, str]:
    """Bare string without a display name, ``{email, name}`` otherwise."""
    if address.name is None:
        return address.email
    return {"email": address.email, "name": address.name}


def _lookup_by_address(table: Mapping[str, Any] | None, email: str) -> Any:
    if not table:
        return None
    wanted = email.lower()
    for key, value in table.items():
        if key.lower() == wanted:
            return value
    return None


_UNDISCLOSED_RECIPIENTS = "undisclosed-recipients:;"


def _visible_to_line(message: ComposedMessage) -> str:
    for addresses in (message.to, message.cc):
        if addresses:
            return ", ".join(str(address) for address in addresses)
    return _UNDISCLOSED_RECIPIENTS


def _recipient(address: Address, options: DeliveryOptions, *, header_to: str | None = None) -> dict[str, Any]:
    if header_to is not None:
        wire_address: str | dict[str, str] = {"email": address.email, "header_to": header_to}
        if address.name is not None:
            wire_address["name"] = address.name
    else:
        wire_address = _address_value(address)

    entry: dict[str, Any] = {"address": wire_address}
    substitution = _lookup_by_address(options.substitution_data, address.email)
    if substitution is not None:
        entry["substitution_data"] = substitution
    metadata = _lookup_by_address(options.recipient_metadata, address.email)
    if metadata is not None:
        entry["metadata"] = metadata
    return entry


def _build_recipients(
    message: ComposedMessage,
    options: DeliveryOptions,
    headers: _HeaderMap,
) -> list[dict[str, Any]] | dict[str, str]:
    """Flatten to/cc/bcc and synthesize the visible ``CC`` header.

    The API has no notion of cc or bcc. Every cc and bcc recipient gets
    ``header_to`` so its copy still shows the real ``To`` line; cc addresses
    are listed in the ``CC`` header, bcc addresses never are. Without a
    ``To`` line the copies show the ``CC`` line, or an undisclosed group
    when there is no cc either.
    """
    if options.recipient_list_id is not None:
        return {"list_id": options.recipient_list_id}

    header_to = _visible_to_line(message)
    recipients = [_recipient(address, options) for address in message.to]
    recipients.extend(_recipient(address, options, header_to=header_to) for address in message.cc + message.bcc)

    if message.cc:
        headers.set("CC", ", ".join(str(address) for address in message.cc))
    return recipients


def _encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _wire_attachment(attachment: Attachment) -> dict[str, str]:
    return {"name": attachment.filename, "type": attachment.content_type, "data": _encode(attachment.data)}


def _wire_inline_image(image: InlineImage) -> dict[str, str]:
    return {"name": image.content_id, "type": image.content_type, "data": _encode(image.data)}


def _build_content(message: ComposedMessage, options: DeliveryOptions, headers: _HeaderMap) -> dict[str, Any]:
    """Select template, A/B test, or inline content; never more than one."""
    template_id = options.template_id or message.template_id
    if template_id:
        template_content: dict[str, Any] = {"template_id": template_id}
        if options.use_draft_template is not None:
            template_content["use_draft_template"] = options.use_draft_template
        return template_content

    if options.ab_test_id:
        return {"ab_test_id": options.ab_test_id}

    if message.html is None and message.text is None:
        return {}

    content: dict[str, Any] = {}
    if message.sender is not None:
        content["from"] = _address_value(message.sender)
    content["subject"] = message.subject
    if message.html is not None:
        content["html"] = message.html
    if message.text is not None and not (options.html_content_only and message.html is not None):
        content["text"] = message.text
    if message.reply_to:
        content["reply_to"] = message.reply_to
    if headers:
        content["headers"] = headers.as_dict()
    if message.attachments:
        content["attachments"] = [_wire_attachment(a) for a in message.attachments]
    if message.inline_images:
        content["inline_images"] = [_wire_inline_image(i) for i in message.inline_images]
    return content


def build_options_block(options: DeliveryOptions) -> dict[str, Any]:
    """Return only the transmission options that were explicitly set.

    Example:
        >>> build_options_block(DeliveryOptions(sandbox=True))
        {'sandbox': True}
        >>> build_options_block(DeliveryOptions())
        {}
    """
    block: dict[str, Any] = {}
    for name in _OPTION_FIELDS:
        value = getattr(options, name)
        if value is not None:
            block[name] = value
    return block


def build_payload(message: ComposedMessage, options: DeliveryOptions) -> dict[str, Any]:
    """Build the transmission request body for one message.

    Args:
        message: The composed message to send.
        options: Options already resolved against configured defaults.

    Returns:
        JSON-serializable transmission body.

    Example:
        >>> msg = ComposedMessage(to=["a@example.com"], sender="b@example.com", subject="Hi", text="Hello")
        >>> payload = build_payload(msg, DeliveryOptions(campaign_id="c1"))
        >>> payload["recipients"]
        [{'address': 'a@example.com'}]
        >>> payload["content"]
        {'from': 'b@example.com', 'subject': 'Hi', 'text': 'Hello'}
        >>> payload["campaign_id"]
        'c1'
        >>> "options" in payload
        False
    """
    headers = _HeaderMap()
    headers.extend(message.headers)

    payload: dict[str, Any] = {}
    options_block = build_options_block(options)
    if options_block:
        payload["options"] = options_block
    payload["recipients"] = _build_recipients(message, options, headers)
    payload["content"] = _build_content(message, options, headers)

    for wire_key, field_name in _TOP_LEVEL_FIELDS:
        value = getattr(options, field_name)
        if value is not None:
            payload[wire_key] = value
    return payload


__all__ = [
    "build_options_block",
    "build_payload",
]
