"""Shared utilities for the send-email command.

Contains message assembly from CLI input, SparkPost option decorators and
the exception-to-exit-code mapping.
"""

from __future__ import annotations

import functools
import logging
import mimetypes
import os
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

import rich_click as click

from sparkpost_delivery.adapters.sparkpost.config import SparkPostConfig, apply_validated_overrides
from sparkpost_delivery.domain.enums import ErrorKind
from sparkpost_delivery.domain.errors import ConfigurationError, DeliveryError
from sparkpost_delivery.domain.message import Attachment, InlineImage

from ...exit_codes import ExitCode

logger = logging.getLogger(__name__)

_DEFAULT_CONTENT_TYPE = "application/octet-stream"

_EXIT_CODE_BY_KIND: dict[ErrorKind, ExitCode] = {
    ErrorKind.PROVIDER: ExitCode.PROVIDER_REJECTED,
    ErrorKind.TRANSPORT: ExitCode.TRANSPORT_FAILURE,
    ErrorKind.RESPONSE_FORMAT: ExitCode.RESPONSE_FORMAT,
}


def filter_sentinels(**kwargs: Any) -> dict[str, Any]:
    """Drop ``None`` values so unset CLI flags do not override configuration.

    Example:
        >>> filter_sentinels(api_key=None, sandbox=False)
        {'sandbox': False}
    """
    return {k: v for k, v in kwargs.items() if v is not None}


def sparkpost_config_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add CLI flags overriding the ``[sparkpost]`` configuration section."""
    options = [
        click.option("--api-key", default=None, help="Override sparkpost.api_key"),
        click.option("--api-host", default=None, help="Override sparkpost.api_host"),
        click.option("--sandbox/--no-sandbox", default=None, help="Override sparkpost.sandbox"),
    ]
    return functools.reduce(lambda f, opt: opt(f), reversed(options), func)


def resolve_sparkpost_config(base: SparkPostConfig, **overrides: Any) -> SparkPostConfig:
    """Merge CLI overrides into the configured settings.

    Raises:
        pydantic.ValidationError: An override has an invalid value.
    """
    return apply_validated_overrides(base, filter_sentinels(**overrides))


def parse_headers(raw_headers: Iterable[str]) -> tuple[tuple[str, str], ...]:
    """Split ``NAME:VALUE`` strings into header pairs.

    Raises:
        ValueError: An entry has no colon or an empty name.

    Example:
        >>> parse_headers(["X-Tag: spring", "X-Empty:"])
        (('X-Tag', 'spring'), ('X-Empty', ''))
    """
    headers: list[tuple[str, str]] = []
    for raw in raw_headers:
        name, sep, value = raw.partition(":")
        if not sep or not name.strip():
            raise ValueError(f"Invalid header {raw!r}: expected NAME:VALUE")
        headers.append((name.strip(), value.strip()))
    return tuple(headers)


def _guess_content_type(path: Path) -> str:
    content_type, _ = mimetypes.guess_type(path.name)
    return content_type or _DEFAULT_CONTENT_TYPE


def read_attachments(paths: Iterable[str]) -> tuple[Attachment, ...]:
    """Read attachment files, guessing each MIME type from the file name.

    Raises:
        FileNotFoundError: A file does not exist.
    """
    attachments: list[Attachment] = []
    for raw in paths:
        path = Path(raw)
        attachments.append(
            Attachment(filename=path.name, content_type=_guess_content_type(path), data=path.read_bytes())
        )
    return tuple(attachments)


def read_inline_images(assignments: Iterable[str]) -> tuple[InlineImage, ...]:
    """Read ``CID=PATH`` inline images referenced from the HTML body as ``cid:CID``.

    Raises:
        ValueError: An entry has no ``=`` or an empty content id.
        FileNotFoundError: A file does not exist.
    """
    images: list[InlineImage] = []
    for raw in assignments:
        content_id, sep, location = raw.partition("=")
        if not sep or not content_id.strip():
            raise ValueError(f"Invalid inline image {raw!r}: expected CID=PATH")
        path = Path(location)
        images.append(
            InlineImage(content_id=content_id.strip(), content_type=_guess_content_type(path), data=path.read_bytes())
        )
    return tuple(images)


def execute_with_delivery_error_handling(*, operation: Callable[[], None], recipients: list[str]) -> None:
    """Run a send or dry-run operation, translating failures to exit codes.

    Exception Priority Order:
        1. ConfigurationError -> CONFIG_ERROR (78)
        2. ValueError (bad recipients, options, headers) -> INVALID_ARGUMENT (22)
        3. FileNotFoundError -> FILE_NOT_FOUND (2)
        4. DeliveryError -> 69, 75 or 76 according to its kind
        5. Exception -> GENERAL_ERROR (1)

    Set the DEVELOPMENT_MODE environment variable to re-raise unexpected
    exceptions with their full traceback.

    Raises:
        SystemExit: On any error (unless DEVELOPMENT_MODE is set).
    """
    try:
        operation()
    except ConfigurationError as exc:
        _handle_send_error(
            exc, "SparkPost configuration error", "Configuration error", exit_code=ExitCode.CONFIG_ERROR
        )
    except ValueError as exc:
        _handle_send_error(
            exc, "Invalid message parameters", "Invalid message parameters", exit_code=ExitCode.INVALID_ARGUMENT
        )
    except FileNotFoundError as exc:
        _handle_send_error(
            exc, "Attachment file not found", "Attachment file not found", exit_code=ExitCode.FILE_NOT_FOUND
        )
    except DeliveryError as exc:
        _handle_send_error(
            exc,
            "SparkPost delivery failed",
            f"Delivery failed ({exc.kind.value})",
            exit_code=_EXIT_CODE_BY_KIND[exc.kind],
            recipients=recipients,
        )
    except Exception as exc:
        if os.environ.get("DEVELOPMENT_MODE"):
            raise
        _handle_send_error(
            exc,
            "Unexpected error sending email",
            "Unexpected error",
            exit_code=ExitCode.GENERAL_ERROR,
            log_traceback=True,
        )


def _handle_send_error(
    exc: Exception,
    log_message: str,
    user_message: str,
    *,
    exit_code: ExitCode,
    recipients: list[str] | None = None,
    log_traceback: bool = False,
) -> None:
    """Log the failure, tell the user and exit with ``exit_code``."""
    extra: dict[str, Any] = {"error": str(exc), "error_type": type(exc).__name__}
    if recipients is not None:
        extra["recipients"] = recipients
    logger.error(log_message, extra=extra, exc_info=log_traceback)
    click.echo(f"\nError: {user_message} - {exc}", err=True)
    if isinstance(exc, DeliveryError) and exc.description:
        click.echo(f"  {exc.description}", err=True)
    raise SystemExit(exit_code)


__all__ = [
    "execute_with_delivery_error_handling",
    "filter_sentinels",
    "parse_headers",
    "read_attachments",
    "read_inline_images",
    "resolve_sparkpost_config",
    "sparkpost_config_options",
]
