"""Quiet logging initializer for tests and ``build_testing()``.

Commands wrap their work in ``lib_log_rich.runtime.bind``, which needs an
initialised runtime. This initializer provides one that only prints
warnings and never attaches the stdlib bridge, so ``caplog`` keeps seeing
the delivery log records unchanged.
"""

from __future__ import annotations

import lib_log_rich.runtime
from lib_layered_config import Config

from sparkpost_delivery import __init__conf__


def init_logging_in_memory(config: Config) -> None:
    """Start a warnings-only lib_log_rich runtime once per process; *config* is ignored."""
    if lib_log_rich.runtime.is_initialised():
        return
    lib_log_rich.runtime.init(
        lib_log_rich.runtime.RuntimeConfig(
            service=__init__conf__.name,
            environment="test",
            console_level="WARNING",
        )
    )


__all__ = ["init_logging_in_memory"]
