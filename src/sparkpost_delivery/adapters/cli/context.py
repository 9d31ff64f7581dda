"""Per-invocation CLI state shared by the root group and its commands.

The root group loads configuration once, applies ``--set`` values and
stores a :class:`CLIContext` on the click context. Commands read the
``[sparkpost]`` settings and, for ``config --profile``, a reloaded
configuration from it.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

import lib_cli_exit_tools
import rich_click as click
from lib_layered_config import Config

from sparkpost_delivery.adapters.config.overrides import apply_overrides

if TYPE_CHECKING:
    from sparkpost_delivery.adapters.sparkpost.config import SparkPostConfig
    from sparkpost_delivery.composition import AppServices

#: ``-h`` is accepted wherever ``--help`` is.
CLICK_CONTEXT_SETTINGS: Final[dict[str, list[str]]] = {"help_option_names": ["-h", "--help"]}


@dataclass(slots=True)
class CLIContext:
    """Configuration, services and global flags resolved by the root group."""

    traceback: bool
    config: Config
    services: AppServices
    profile: str | None = None
    set_overrides: tuple[str, ...] = ()

    def sparkpost_config(self) -> SparkPostConfig:
        """Validate the ``[sparkpost]`` section of the loaded configuration.

        Raises:
            pydantic.ValidationError: The section holds invalid values.
        """
        return self.services.load_sparkpost_config_from_dict(self.config.as_dict())

    def config_for_profile(self, profile: str | None) -> tuple[Config, str | None]:
        """Return the root configuration, or a reload for *profile*.

        A reload gets the root ``--set`` values applied again, so
        ``--set sparkpost.sandbox=true config --profile staging`` still shows
        the override.
        """
        if not profile:
            return self.config, self.profile
        reloaded = self.services.get_config(profile=profile)
        return apply_overrides(reloaded, self.set_overrides), profile


def store_cli_context(
    ctx: click.Context,
    *,
    traceback: bool,
    config: Config,
    services: AppServices,
    profile: str | None = None,
    set_overrides: tuple[str, ...] = (),
) -> CLIContext:
    """Swap the services factory in ``ctx.obj`` for the resolved CLIContext.

    Example:
        >>> from unittest.mock import MagicMock
        >>> from sparkpost_delivery.composition import build_testing
        >>> stored = store_cli_context(MagicMock(), traceback=True, config=MagicMock(), services=build_testing())
        >>> stored.traceback, stored.profile
        (True, None)
    """
    cli_ctx = CLIContext(
        traceback=traceback,
        config=config,
        services=services,
        profile=profile,
        set_overrides=set_overrides,
    )
    ctx.obj = cli_ctx
    return cli_ctx


def get_cli_context(ctx: click.Context) -> CLIContext:
    """Return the CLIContext stored by the root group.

    Raises:
        RuntimeError: The root group did not run for this context.
    """
    if not isinstance(ctx.obj, CLIContext):
        raise RuntimeError("CLI context not initialized. Call store_cli_context first.")
    return ctx.obj


def apply_traceback_preferences(enabled: bool) -> None:
    """Switch full, colored tracebacks on or off for lib_cli_exit_tools.

    Example:
        >>> apply_traceback_preferences(True)
        >>> bool(lib_cli_exit_tools.config.traceback)
        True
        >>> apply_traceback_preferences(False)
    """
    lib_cli_exit_tools.config.traceback = bool(enabled)
    lib_cli_exit_tools.config.traceback_force_color = bool(enabled)


@contextmanager
def preserved_traceback_state(*, restore: bool = True) -> Iterator[None]:
    """Put the traceback flags back as they were once the block exits.

    With ``restore=False`` whatever the block set is kept.
    """
    config = lib_cli_exit_tools.config
    saved = (bool(getattr(config, "traceback", False)), bool(getattr(config, "traceback_force_color", False)))
    try:
        yield
    finally:
        if restore:
            config.traceback, config.traceback_force_color = saved


__all__ = [
    "CLICK_CONTEXT_SETTINGS",
    "CLIContext",
    "apply_traceback_preferences",
    "get_cli_context",
    "preserved_traceback_state",
    "store_cli_context",
]
