"""The ``sparkpost-delivery`` command group and its process entry point.

:func:`cli` is the root group: it loads layered configuration, applies
``--set`` values, starts logging and hands a :class:`CLIContext` to
``info``, ``config`` and ``send-email``. :func:`main` runs the group for
console scripts and ``python -m`` and turns every outcome into an exit
code. Send failures already leave as ``SystemExit`` with their
:class:`ExitCode`; anything else is rendered by lib_cli_exit_tools.
"""

from __future__ import annotations

import sys
import threading
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

import click as click_core
import lib_cli_exit_tools
import lib_log_rich.runtime
import rich_click as click

from sparkpost_delivery import __init__conf__
from sparkpost_delivery.adapters.config.overrides import apply_overrides

from .commands import cli_config, cli_info, cli_send_email
from .context import (
    CLICK_CONTEXT_SETTINGS,
    apply_traceback_preferences,
    preserved_traceback_state,
    store_cli_context,
)

if TYPE_CHECKING:
    from sparkpost_delivery.composition import AppServices

_SHORT_TRACEBACK_CHARS = 500
_FULL_TRACEBACK_CHARS = 10_000


@click.group(
    help=__init__conf__.title,
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=True,
)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option("--traceback/--no-traceback", default=False, help="Show full Python traceback on errors")
@click.option("--profile", default=None, help="Load configuration from a named profile (e.g. 'staging')")
@click.option(
    "--set",
    "set_overrides",
    multiple=True,
    metavar="SECTION.KEY=VALUE",
    help="Override a configuration setting, e.g. sparkpost.sandbox=true (repeatable).",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, profile: str | None, set_overrides: tuple[str, ...]) -> None:
    """Resolve configuration and services once for the invoked command.

    ``ctx.obj`` arrives as the services factory and leaves as a CLIContext.
    """
    if not callable(ctx.obj):
        raise RuntimeError("Services factory not provided. This is a bug.")
    services: AppServices = ctx.obj()  # type: ignore[assignment]  # click types obj as Any

    try:
        config = apply_overrides(services.get_config(profile=profile), set_overrides)
    except (ValueError, TypeError) as exc:
        raise click.UsageError(str(exc)) from exc

    services.init_logging(config)
    store_cli_context(
        ctx,
        traceback=traceback,
        config=config,
        services=services,
        profile=profile,
        set_overrides=set_overrides,
    )
    apply_traceback_preferences(traceback)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


for _command in (cli_info, cli_config, cli_send_email):
    cli.add_command(_command)


def _exit_code_for(argv: Sequence[str] | None, services_factory: Callable[[], AppServices]) -> int:
    args = list(argv) if argv is not None else sys.argv[1:]
    try:
        cli.main(args=args, prog_name=__init__conf__.shell_command, obj=services_factory, standalone_mode=False)
    except click_core.exceptions.Exit as exc:
        return exc.exit_code
    except click_core.ClickException as exc:
        exc.show()
        return exc.exit_code
    except BaseException as exc:
        full = bool(getattr(lib_cli_exit_tools.config, "traceback", False))
        lib_cli_exit_tools.print_exception_message(
            trace_back=full,
            length_limit=_FULL_TRACEBACK_CHARS if full else _SHORT_TRACEBACK_CHARS,
        )
        return lib_cli_exit_tools.get_system_exit_code(exc)
    return 0


def main(
    argv: Sequence[str] | None = None,
    *,
    restore_traceback: bool = True,
    services_factory: Callable[[], AppServices] | None = None,
) -> int:
    """Run ``sparkpost-delivery`` and return its exit code.

    Args:
        argv: Arguments without the program name; ``None`` reads ``sys.argv``.
        restore_traceback: Put the traceback flags back afterwards.
        services_factory: ``build_production`` for real use, ``build_testing``
            in tests.

    Raises:
        ValueError: No services factory was given.
    """
    if services_factory is None:
        raise ValueError("services_factory is required. Pass build_production from composition layer.")

    try:
        with preserved_traceback_state(restore=restore_traceback):
            return _exit_code_for(argv, services_factory)
    finally:
        # other threads may still be logging
        if threading.current_thread() is threading.main_thread() and lib_log_rich.runtime.is_initialised():
            lib_log_rich.runtime.shutdown()


__all__ = ["cli", "main"]
