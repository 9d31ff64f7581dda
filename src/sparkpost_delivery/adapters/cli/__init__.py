"""Command-line adapter: the ``sparkpost-delivery`` group and its commands."""

from __future__ import annotations

from .commands import cli_config, cli_info, cli_send_email
from .context import (
    CLICK_CONTEXT_SETTINGS,
    CLIContext,
    apply_traceback_preferences,
    get_cli_context,
    preserved_traceback_state,
    store_cli_context,
)
from .exit_codes import ExitCode
from .main import cli, main

__all__ = [
    "CLICK_CONTEXT_SETTINGS",
    "CLIContext",
    "ExitCode",
    "apply_traceback_preferences",
    "cli",
    "cli_config",
    "cli_info",
    "cli_send_email",
    "get_cli_context",
    "main",
    "preserved_traceback_state",
    "store_cli_context",
]
