"""Render the merged configuration for ``sparkpost-delivery config``.

Secrets such as ``sparkpost.api_key`` are redacted by lib_layered_config's
renderer, so the key never reaches the terminal or a JSON dump.
"""

from __future__ import annotations

import lib_log_rich.runtime
from lib_layered_config import Config
from lib_layered_config import OutputFormat as LibOutputFormat
from lib_layered_config import display_config as _render
from rich.console import Console

from sparkpost_delivery.domain.enums import OutputFormat


def display_config(
    config: Config,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
    section: str | None = None,
    console: Console | None = None,
    profile: str | None = None,
) -> None:
    """Print *config*, or one *section* of it, with provenance comments.

    Pending log records are flushed first so they do not interleave with
    the rendered configuration.

    Raises:
        ValueError: *section* is not present in the configuration.
    """
    if lib_log_rich.runtime.is_initialised():
        lib_log_rich.runtime.flush()

    _render(
        config,
        output_format=LibOutputFormat(output_format.value),
        section=section,
        profile=profile,
        console=console,
    )


__all__ = ["display_config"]
