"""Parse CLI assignments: ``--set SECTION.KEY=VALUE`` and ``--option KEY=VALUE``.

``--set`` entries are deep-merged into the layered Config. ``--option``
entries become the ``provider_data`` of a message composed on the command
line. Values of both are coerced with orjson so ``true``, ``42`` or
``{"a": 1}`` arrive as booleans, numbers and mappings.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, cast

import orjson
from lib_layered_config import Config

CoercedValue = str | int | float | bool | None | list[object] | dict[str, object]
"""Union of types that :func:`coerce_value` can produce."""


@dataclass(frozen=True, slots=True)
class ConfigOverride:
    """A single parsed configuration override."""

    section: str
    key_path: tuple[str, ...]
    value: CoercedValue


def _split_assignment(raw: str) -> tuple[str, str]:
    if "=" not in raw:
        raise ValueError(f"Invalid assignment {raw!r}: must contain '='")
    key, value = raw.split("=", maxsplit=1)
    return key.strip(), value


def parse_override(raw: str) -> ConfigOverride:
    """Split a ``SECTION.KEY[.SUBKEY...]=VALUE`` string into a ConfigOverride.

    Raises:
        ValueError: If the string lacks ``=``, has no dot in the key, or has
            empty section/key components.

    Examples:
        >>> override = parse_override("sparkpost.sandbox=true")
        >>> override.section, override.key_path, override.value
        ('sparkpost', ('sandbox',), True)

        >>> parse_override("lib_log_rich.payload_limits.max_chars=8192").key_path
        ('payload_limits', 'max_chars')
    """
    path_part, value_str = _split_assignment(raw)

    if "." not in path_part:
        raise ValueError(f"Invalid override {raw!r}: key must contain at least one dot (SECTION.KEY)")

    parts = path_part.split(".")
    section = parts[0]
    key_parts = tuple(parts[1:])

    if not section:
        raise ValueError(f"Invalid override {raw!r}: section name is empty")
    if not all(key_parts):
        raise ValueError(f"Invalid override {raw!r}: key path contains empty component")

    return ConfigOverride(section=section, key_path=key_parts, value=coerce_value(value_str))


def coerce_value(raw: str) -> CoercedValue:
    """Coerce a raw string value using JSON parsing with string fallback.

    Examples:
        >>> coerce_value("true")
        True
        >>> coerce_value("42")
        42
        >>> coerce_value('{"plan": "gold"}')
        {'plan': 'gold'}
        >>> coerce_value("welcome-series")
        'welcome-series'
        >>> coerce_value("")
        ''
    """
    if raw == "":
        return ""
    try:
        return orjson.loads(raw)
    except (orjson.JSONDecodeError, ValueError):
        return raw


def parse_option_assignments(raw_options: tuple[str, ...]) -> dict[str, Any]:
    """Turn ``KEY=VALUE`` strings into a provider options mapping.

    Later assignments of the same key win.

    Raises:
        ValueError: If an entry lacks ``=`` or has an empty key.

    Examples:
        >>> parse_option_assignments(("campaign_id=spring", "sandbox=true"))
        {'campaign_id': 'spring', 'sandbox': True}
        >>> parse_option_assignments(())
        {}
    """
    options: dict[str, Any] = {}
    for raw in raw_options:
        key, value = _split_assignment(raw)
        if not key:
            raise ValueError(f"Invalid option {raw!r}: key is empty")
        options[key] = coerce_value(value)
    return options


def _nest_override(target: dict[str, dict[str, object]], override: ConfigOverride) -> None:
    """Build a nested override dict from a parsed ConfigOverride.

    Examples:
        >>> d: dict[str, dict[str, object]] = {}
        >>> _nest_override(d, ConfigOverride(section="s", key_path=("a",), value=2))
        >>> d["s"]["a"]
        2
    """
    node: dict[str, object] = target.setdefault(override.section, {})
    for part in override.key_path[:-1]:
        existing = node.setdefault(part, {})
        if not isinstance(existing, dict):
            msg = f"Expected dict at key {part!r}, got {type(existing).__name__}"
            raise TypeError(msg)
        node = cast("dict[str, object]", existing)
    node[override.key_path[-1]] = override.value


def apply_overrides(config: Config, raw_overrides: tuple[str, ...]) -> Config:
    """Deep-merge CLI ``--set`` overrides into a Config instance.

    Returns:
        New Config instance with overrides applied, or the original if
        ``raw_overrides`` is empty.

    Raises:
        ValueError: If any override string is malformed.

    Examples:
        >>> cfg = Config({"sparkpost": {"sandbox": False}}, {})
        >>> apply_overrides(cfg, ("sparkpost.sandbox=true",))["sparkpost"]["sandbox"]
        True
        >>> apply_overrides(cfg, ()) is cfg
        True
    """
    if not raw_overrides:
        return config

    overrides: dict[str, dict[str, object]] = {}
    for raw in raw_overrides:
        _nest_override(overrides, parse_override(raw))

    return config.with_overrides(overrides)


__all__ = [
    "CoercedValue",
    "ConfigOverride",
    "apply_overrides",
    "coerce_value",
    "parse_option_assignments",
    "parse_override",
]
