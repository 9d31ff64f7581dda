"""Send email CLI command.

Composes a message from command-line input and hands it to
:class:`~sparkpost_delivery.adapters.sparkpost.delivery.SparkPostDelivery`.
``--dry-run`` prints the transmission payload instead of posting it.
"""

from __future__ import annotations

import logging
from typing import Any

import lib_log_rich.runtime
import orjson
import rich_click as click
from pydantic import ValidationError

from sparkpost_delivery.adapters.config.overrides import parse_option_assignments
from sparkpost_delivery.adapters.sparkpost.config import SparkPostConfig
from sparkpost_delivery.adapters.sparkpost.delivery import SparkPostDelivery
from sparkpost_delivery.domain.enums import OutputFormat
from sparkpost_delivery.domain.message import Address, ComposedMessage
from sparkpost_delivery.domain.response import DeliveryResult

from ...context import CLICK_CONTEXT_SETTINGS, CLIContext, get_cli_context
from ...exit_codes import ExitCode
from ._common import (
    execute_with_delivery_error_handling,
    parse_headers,
    read_attachments,
    read_inline_images,
    resolve_sparkpost_config,
    sparkpost_config_options,
)

logger = logging.getLogger(__name__)


def _load_configured_settings(cli_ctx: CLIContext) -> SparkPostConfig:
    """Validate the ``[sparkpost]`` section, exiting with CONFIG_ERROR when invalid."""
    try:
        return cli_ctx.sparkpost_config()
    except ValidationError as exc:
        logger.error("Invalid sparkpost configuration", extra={"error": str(exc)})
        click.echo(f"\nError: Invalid [sparkpost] configuration - {exc}", err=True)
        raise SystemExit(ExitCode.CONFIG_ERROR) from exc


def _echo_json(document: Any) -> None:
    click.echo(orjson.dumps(document, option=orjson.OPT_INDENT_2).decode("utf-8"))


def _report_result(result: DeliveryResult, fmt: OutputFormat) -> None:
    """Print the accepted/rejected summary of a transmission."""
    if fmt is OutputFormat.JSON:
        _echo_json(result.model_dump(exclude={"raw"}))
    else:
        click.echo(
            f"\nTransmission {result.id} accepted: "
            f"{result.total_accepted_recipients} accepted, {result.total_rejected_recipients} rejected"
        )
    if not result.fully_accepted:
        click.echo(f"Warning: {result.total_rejected_recipients} recipient(s) rejected", err=True)


@click.command("send-email", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--to", "to", multiple=True, help="Recipient, 'addr' or 'Name <addr>' (repeatable)")
@click.option("--cc", "cc", multiple=True, help="Carbon-copy recipient (repeatable)")
@click.option("--bcc", "bcc", multiple=True, help="Blind carbon-copy recipient (repeatable)")
@click.option("--from", "from_address", default=None, help="Sender address, 'addr' or 'Name <addr>'")
@click.option("--subject", default="", help="Subject line")
@click.option("--text", default=None, help="Plain-text body")
@click.option("--html", default=None, help="HTML body")
@click.option("--reply-to", default=None, help="Reply-To address")
@click.option("--header", "headers", multiple=True, metavar="NAME:VALUE", help="Custom header (repeatable)")
@click.option(
    "--attachment",
    "attachments",
    multiple=True,
    type=click.Path(path_type=str),
    help="File to attach (repeatable)",
)
@click.option(
    "--inline-image",
    "inline_images",
    multiple=True,
    metavar="CID=PATH",
    help="Image embedded in the HTML body as cid:CID (repeatable)",
)
@click.option("--template-id", default=None, help="Render a stored template instead of inline content")
@click.option("--campaign-id", default=None, help="Campaign identifier for this transmission")
@click.option(
    "--option",
    "options",
    multiple=True,
    metavar="KEY=VALUE",
    help="Provider option for this message, JSON-coerced (e.g. open_tracking=true) (repeatable)",
)
@sparkpost_config_options
@click.option("--dry-run", is_flag=True, default=False, help="Print the transmission payload instead of sending")
@click.option(
    "--format",
    "output_format",
    type=click.Choice([f.value for f in OutputFormat], case_sensitive=False),
    default=OutputFormat.HUMAN.value,
    help="Output format of the delivery summary",
)
@click.pass_context
def cli_send_email(
    ctx: click.Context,
    to: tuple[str, ...],
    cc: tuple[str, ...],
    bcc: tuple[str, ...],
    from_address: str | None,
    subject: str,
    text: str | None,
    html: str | None,
    reply_to: str | None,
    headers: tuple[str, ...],
    attachments: tuple[str, ...],
    inline_images: tuple[str, ...],
    template_id: str | None,
    campaign_id: str | None,
    options: tuple[str, ...],
    api_key: str | None,
    api_host: str | None,
    sandbox: bool | None,
    dry_run: bool,
    output_format: str,
) -> None:
    """Send an email through the SparkPost transmissions API.

    Exit codes: 69 rejected by the API, 75 API unreachable, 76 unreadable
    response, 78 missing API key, 22 invalid input, 2 missing attachment.
    """
    cli_ctx = get_cli_context(ctx)
    fmt = OutputFormat(output_format.lower())
    recipients = [*to, *cc, *bcc]
    extra = {"command": "send-email", "recipients": recipients, "dry_run": dry_run}

    with lib_log_rich.runtime.bind(job_id="cli-send-email", extra=extra):
        configured = _load_configured_settings(cli_ctx)

        def operation() -> None:
            settings = resolve_sparkpost_config(configured, api_key=api_key, api_host=api_host, sandbox=sandbox)
            provider_data = parse_option_assignments(options)
            if campaign_id is not None:
                provider_data["campaign_id"] = campaign_id
            message = ComposedMessage(
                to=to,
                cc=cc,
                bcc=bcc,
                sender=Address.parse(from_address) if from_address else None,
                subject=subject,
                text=text,
                html=html,
                headers=parse_headers(headers),
                attachments=read_attachments(attachments),
                inline_images=read_inline_images(inline_images),
                reply_to=reply_to,
                template_id=template_id,
                provider_data=provider_data,
            )
            delivery = SparkPostDelivery(settings, post=cli_ctx.services.post_transmission)

            if dry_run:
                logger.info("Building transmission payload (dry run)", extra={"recipients": recipients})
                _echo_json(delivery.build(message))
                return

            _report_result(delivery.deliver(message), fmt)

        execute_with_delivery_error_handling(operation=operation, recipients=recipients)


__all__ = ["cli_send_email"]
