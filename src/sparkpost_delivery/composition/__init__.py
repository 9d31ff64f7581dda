"""Composition root wiring adapters to application ports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..adapters.config.display import display_config

# Configuration services
from ..adapters.config.loader import get_config, get_default_config_path

# Logging services
from ..adapters.logging.setup import init_logging

# SparkPost services
from ..adapters.sparkpost.config import load_sparkpost_config_from_dict
from ..adapters.sparkpost.transport import post_transmission

# Static conformance assertions — pyright verifies that each adapter function
# structurally satisfies its corresponding Protocol at type-check time.
if TYPE_CHECKING:
    from ..adapters.memory.transmission import TransmissionSpy
    from ..application.ports import (
        DisplayConfig,
        GetConfig,
        GetDefaultConfigPath,
        InitLogging,
        LoadSparkPostConfigFromDict,
        PostTransmission,
    )

    _assert_get_config: GetConfig = get_config
    _assert_get_default_config_path: GetDefaultConfigPath = get_default_config_path
    _assert_display_config: DisplayConfig = display_config
    _assert_load_sparkpost_config_from_dict: LoadSparkPostConfigFromDict = load_sparkpost_config_from_dict
    _assert_post_transmission: PostTransmission = post_transmission
    _assert_init_logging: InitLogging = init_logging


@dataclass(frozen=True, slots=True)
class AppServices:
    """Frozen container holding all application port implementations."""

    get_config: GetConfig
    get_default_config_path: GetDefaultConfigPath
    display_config: DisplayConfig
    load_sparkpost_config_from_dict: LoadSparkPostConfigFromDict
    post_transmission: PostTransmission
    init_logging: InitLogging


def build_production() -> AppServices:
    """Wire production adapters into an AppServices container."""
    return AppServices(
        get_config=get_config,
        get_default_config_path=get_default_config_path,
        display_config=display_config,
        load_sparkpost_config_from_dict=load_sparkpost_config_from_dict,
        post_transmission=post_transmission,
        init_logging=init_logging,
    )


def build_testing(*, spy: TransmissionSpy | None = None) -> AppServices:
    """Wire in-memory adapters into an AppServices container.

    Args:
        spy: Optional TransmissionSpy for capturing posted payloads. When
            None, a fresh spy answering with an accepted response is created.

    Returns:
        AppServices container with in-memory adapters.
    """
    from ..adapters.memory import (
        TransmissionSpy,
        display_config_in_memory,
        get_config_in_memory,
        get_default_config_path_in_memory,
        init_logging_in_memory,
        load_sparkpost_config_from_dict_in_memory,
    )

    transmission_spy = spy if spy is not None else TransmissionSpy()

    return AppServices(
        get_config=get_config_in_memory,
        get_default_config_path=get_default_config_path_in_memory,
        display_config=display_config_in_memory,
        load_sparkpost_config_from_dict=load_sparkpost_config_from_dict_in_memory,
        post_transmission=transmission_spy.post_transmission,
        init_logging=init_logging_in_memory,
    )


__all__ = [
    # Configuration
    "get_config",
    "get_default_config_path",
    "display_config",
    # SparkPost
    "load_sparkpost_config_from_dict",
    "post_transmission",
    # Logging
    "init_logging",
    # Composition
    "AppServices",
    "build_production",
    "build_testing",
]
