"""Composed message value objects handed to the delivery method.

A :class:`ComposedMessage` is built by the caller for each send and is not
modified afterwards. Provider-specific settings travel with it in the
declared ``provider_data`` mapping.

Contents:
    * :class:`Address` - email address with optional display name.
    * :class:`Attachment` - regular file attachment.
    * :class:`InlineImage` - image referenced from HTML by content id.
    * :class:`ComposedMessage` - everything needed to render one email.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from email.utils import formataddr, parseaddr
from typing import Any


@dataclass(frozen=True, slots=True)
class Address:
    """An email address with an optional display name.

    Example:
        >>> Address.parse("Jane Doe <jane@example.com>")
        Address(email='jane@example.com', name='Jane Doe')
        >>> Address.parse("jane@example.com").name is None
        True
        >>> str(Address("jane@example.com", "Jane Doe"))
        'Jane Doe <jane@example.com>'
    """

    email: str
    name: str | None = None

    @classmethod
    def parse(cls, raw: str) -> Address:
        """Split ``"Name <addr>"`` or a bare address into an Address."""
        name, email = parseaddr(raw)
        if not email:
            return cls(email=raw.strip())
        return cls(email=email, name=name or None)

    def __str__(self) -> str:
        if self.name:
            return formataddr((self.name, self.email))
        return self.email


@dataclass(frozen=True, slots=True)
class Attachment:
    """A file attached to the message.

    Raises:
        ValueError: When filename or MIME type is empty.
    """

    filename: str
    content_type: str
    data: bytes

    def __post_init__(self) -> None:
        if not self.filename:
            raise ValueError("Attachment filename must not be empty")
        if not self.content_type:
            raise ValueError(f"Attachment {self.filename!r} has no MIME type")


@dataclass(frozen=True, slots=True)
class InlineImage:
    """An image embedded in the HTML body, referenced as ``cid:<content_id>``."""

    content_id: str
    content_type: str
    data: bytes

    def __post_init__(self) -> None:
        if not self.content_id:
            raise ValueError("Inline image content id must not be empty")
        if not self.content_type:
            raise ValueError(f"Inline image {self.content_id!r} has no MIME type")


def _as_addresses(values: Iterable[Address | str]) -> tuple[Address, ...]:
    return tuple(v if isinstance(v, Address) else Address.parse(v) for v in values)


def _empty_provider_data() -> dict[str, Any]:
    return {}


@dataclass(frozen=True, slots=True)
class ComposedMessage:
    """An email ready to be handed to a delivery method.

    Recipient fields accept :class:`Address` objects or plain strings; strings
    are parsed on construction so the stored value is always a tuple of
    Address.

    Attributes:
        to: Primary recipients.
        cc: Carbon-copy recipients (visible in the ``CC`` header).
        bcc: Blind recipients (never rendered in headers).
        sender: The ``From`` address.
        subject: Subject line.
        text: Plain-text body.
        html: HTML body.
        headers: Custom headers as ordered ``(name, value)`` pairs.
        attachments: File attachments, in order.
        inline_images: Images referenced from the HTML body.
        reply_to: Optional ``Reply-To`` address.
        template_id: Optional stored template to render instead of inline content.
        provider_data: Provider options for this message only; they take
            precedence over configured defaults.

    Example:
        >>> msg = ComposedMessage(to=["a@example.com"], sender="b@example.com", subject="Hi")
        >>> msg.to
        (Address(email='a@example.com', name=None),)
        >>> msg.provider_data
        {}
    """

    to: tuple[Address, ...] = ()
    cc: tuple[Address, ...] = ()
    bcc: tuple[Address, ...] = ()
    sender: Address | None = None
    subject: str = ""
    text: str | None = None
    html: str | None = None
    headers: tuple[tuple[str, str], ...] = ()
    attachments: tuple[Attachment, ...] = ()
    inline_images: tuple[InlineImage, ...] = ()
    reply_to: str | None = None
    template_id: str | None = None
    provider_data: Mapping[str, Any] = field(default_factory=_empty_provider_data)

    def __post_init__(self) -> None:
        # frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "to", _as_addresses(self.to))
        object.__setattr__(self, "cc", _as_addresses(self.cc))
        object.__setattr__(self, "bcc", _as_addresses(self.bcc))
        if isinstance(self.sender, str):
            object.__setattr__(self, "sender", Address.parse(self.sender))
        object.__setattr__(self, "headers", tuple((str(k), str(v)) for k, v in self.headers))
        object.__setattr__(self, "attachments", tuple(self.attachments))
        object.__setattr__(self, "inline_images", tuple(self.inline_images))

    @property
    def recipients(self) -> tuple[Address, ...]:
        """All envelope recipients in to, cc, bcc order."""
        return self.to + self.cc + self.bcc


__all__ = [
    "Address",
    "Attachment",
    "ComposedMessage",
    "InlineImage",
]
