"""Configuration display CLI command.

Contents:
    * :func:`cli_config` - Display merged configuration or the bundled defaults.
"""

from __future__ import annotations

import logging

import lib_log_rich.runtime
import rich_click as click

from sparkpost_delivery.domain.enums import OutputFormat

from ..context import CLICK_CONTEXT_SETTINGS, get_cli_context
from ..exit_codes import ExitCode

logger = logging.getLogger(__name__)


@click.command("config", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--format",
    "output_format",
    type=click.Choice([f.value for f in OutputFormat], case_sensitive=False),
    default=OutputFormat.HUMAN.value,
    help="Output format (human-readable or JSON)",
)
@click.option(
    "--section",
    type=str,
    default=None,
    help="Show only a specific configuration section (e.g., 'sparkpost')",
)
@click.option(
    "--profile",
    type=str,
    default=None,
    help="Override profile from root command (e.g., 'production', 'test')",
)
@click.option(
    "--defaults",
    "show_defaults",
    is_flag=True,
    default=False,
    help="Print the bundled default configuration file instead of the merged result",
)
@click.pass_context
def cli_config(
    ctx: click.Context,
    output_format: str,
    section: str | None,
    profile: str | None,
    show_defaults: bool,
) -> None:
    """Display the current merged configuration from all sources.

    Precedence: defaults -> app -> host -> user -> dotenv -> env.
    ``sparkpost.api_key`` is redacted by the renderer.
    """
    cli_ctx = get_cli_context(ctx)
    fmt = OutputFormat(output_format.lower())

    if show_defaults:
        path = cli_ctx.services.get_default_config_path()
        with lib_log_rich.runtime.bind(job_id="cli-config", extra={"command": "config", "defaults": True}):
            logger.info("Displaying bundled defaults", extra={"path": str(path)})
            click.echo(path.read_text(encoding="utf-8"))
        return

    effective_config, effective_profile = cli_ctx.config_for_profile(profile)
    extra = {"command": "config", "format": fmt.value, "profile": effective_profile}
    with lib_log_rich.runtime.bind(job_id="cli-config", extra=extra):
        logger.info(
            "Displaying configuration",
            extra={"format": fmt.value, "section": section, "profile": effective_profile},
        )
        click.echo()
        try:
            cli_ctx.services.display_config(
                effective_config, output_format=fmt, section=section, profile=effective_profile
            )
        except ValueError as exc:
            click.echo(f"\nError: {exc}", err=True)
            raise SystemExit(ExitCode.INVALID_ARGUMENT) from exc


__all__ = ["cli_config"]
