"""Configuration adapters for ``build_testing()``.

Tests get a fixed ``[sparkpost]`` section with sandbox mode on instead of
the layered files of the machine they run on. Profile names are still
checked the way the real loader checks them.
"""

from __future__ import annotations

from pathlib import Path

from lib_layered_config import Config

from ...domain.enums import OutputFormat
from ..config.loader import get_default_config_path, validate_profile
from ..sparkpost.config import DEFAULT_API_HOST

#: What ``get_config_in_memory`` serves for every profile.
SANDBOX_SETTINGS: dict[str, object] = {"api_host": DEFAULT_API_HOST, "sandbox": True}


def get_config_in_memory(
    *,
    profile: str | None = None,
    start_dir: str | None = None,
) -> Config:
    """Return a sandboxed ``[sparkpost]`` configuration without reading files.

    Raises:
        ValueError: *profile* is not a valid profile name.

    Example:
        >>> get_config_in_memory().as_dict()["sparkpost"]["sandbox"]
        True
    """
    if profile is not None:
        validate_profile(profile)
    return Config({"sparkpost": dict(SANDBOX_SETTINGS)}, {})


def get_default_config_path_in_memory() -> Path:
    """Return the bundled defaults file so ``config --defaults`` has something to print."""
    return get_default_config_path()


def display_config_in_memory(
    config: Config,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
    section: str | None = None,
    profile: str | None = None,
) -> None:
    """Print nothing, but reject an unknown *section* like the real renderer.

    Raises:
        ValueError: *section* is not present in *config*.
    """
    if section is not None and section not in config.as_dict():
        raise ValueError(f"Section {section!r} not found in configuration")


__all__ = [
    "SANDBOX_SETTINGS",
    "display_config_in_memory",
    "get_config_in_memory",
    "get_default_config_path_in_memory",
]
