"""Adapters wired by ``build_testing()``.

Configuration is a fixed sandboxed section, transmissions go to a
:class:`TransmissionSpy` instead of HTTP, and logging is a quiet
lib_log_rich runtime.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .config import (
    display_config_in_memory,
    get_config_in_memory,
    get_default_config_path_in_memory,
)
from .logging import init_logging_in_memory
from .transmission import (
    TransmissionSpy,
    load_sparkpost_config_from_dict_in_memory,
)

# Static conformance assertions
if TYPE_CHECKING:
    from sparkpost_delivery.application.ports import (
        DisplayConfig,
        GetConfig,
        GetDefaultConfigPath,
        InitLogging,
        LoadSparkPostConfigFromDict,
    )

    _assert_get_config: GetConfig = get_config_in_memory
    _assert_get_default_config_path: GetDefaultConfigPath = get_default_config_path_in_memory
    _assert_display_config: DisplayConfig = display_config_in_memory
    _assert_load_sparkpost_config: LoadSparkPostConfigFromDict = load_sparkpost_config_from_dict_in_memory
    _assert_init_logging: InitLogging = init_logging_in_memory

__all__ = [
    "TransmissionSpy",
    "display_config_in_memory",
    "get_config_in_memory",
    "get_default_config_path_in_memory",
    "init_logging_in_memory",
    "load_sparkpost_config_from_dict_in_memory",
]
