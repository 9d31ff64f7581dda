"""Configuration adapter - loading, display, and overrides.

Provides adapters for configuration management using lib_layered_config.

Contents:
    * :mod:`.loader` - Configuration loading with caching
    * :mod:`.display` - Configuration display in human/JSON formats
    * :mod:`.overrides` - CLI ``--set`` and ``--option`` parsing
"""

from __future__ import annotations

from .display import display_config
from .loader import get_config, get_default_config_path
from .overrides import apply_overrides, parse_option_assignments

__all__ = [
    "get_config",
    "get_default_config_path",
    "display_config",
    "apply_overrides",
    "parse_option_assignments",
]
