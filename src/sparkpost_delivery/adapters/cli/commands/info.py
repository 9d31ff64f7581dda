"""``info``: package metadata plus the SparkPost endpoint this install talks to."""

from __future__ import annotations

import logging

import lib_log_rich.runtime
import rich_click as click
from pydantic import ValidationError

from sparkpost_delivery import __init__conf__

from ..context import CLICK_CONTEXT_SETTINGS, get_cli_context

logger = logging.getLogger(__name__)


@click.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
@click.pass_context
def cli_info(ctx: click.Context) -> None:
    """Print package metadata and the effective ``[sparkpost]`` endpoint.

    The API key itself is never printed, only whether one is configured.
    Invalid settings are reported here instead of failing, so ``info``
    stays usable while the configuration is being fixed.
    """
    cli_ctx = get_cli_context(ctx)
    with lib_log_rich.runtime.bind(job_id="cli-info", extra={"command": "info"}):
        logger.info("Displaying package information")
        __init__conf__.print_info()

        try:
            settings = cli_ctx.sparkpost_config()
        except ValidationError as exc:
            count = exc.error_count()
            logger.warning("Invalid [sparkpost] configuration", extra={"errors": count})
            click.echo(f"\nSparkPost: invalid configuration ({count} error(s)), run 'config --section sparkpost'")
            return

        sandbox = "on" if settings.sandbox else "off"
        click.echo("\nSparkPost:")
        click.echo(f"    endpoint     = {settings.transmissions_url}")
        click.echo(f"    api_key      = {'configured' if settings.api_key else 'missing'}")
        click.echo(f"    sandbox      = {sandbox}")


__all__ = ["cli_info"]
