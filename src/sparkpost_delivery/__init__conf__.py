"""Static package metadata surfaced to CLI commands and documentation.

Values are kept in sync with ``pyproject.toml`` by the metadata tests; edit
both together when bumping the version.
"""

from __future__ import annotations

#: Distribution name declared in ``pyproject.toml``.
name = "sparkpost_delivery"
#: Human-readable summary shown in CLI help output.
title = "SparkPost transmissions delivery method for composed e-mail messages"
#: Current release version.
version = "1.0.0"
#: Repository homepage presented to users.
homepage = "https://github.com/sparkpost-delivery/sparkpost_delivery"
#: Author attribution surfaced in CLI output.
author = "sparkpost_delivery maintainers"
#: Console-script name published by the package.
shell_command = "sparkpost-delivery"

#: Vendor, application and slug identifiers used by lib_layered_config to
#: locate configuration files on every platform.
LAYEREDCONF_VENDOR: str = "sparkpost-delivery"
LAYEREDCONF_APP: str = "SparkPost Delivery"
LAYEREDCONF_SLUG: str = "sparkpost-delivery"


def print_info() -> None:
    """Print the summarised metadata block used by the CLI ``info`` command.

    Example:
        >>> print_info()  # doctest: +ELLIPSIS
        Info for sparkpost_delivery:
        ...
    """
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    print("\n".join(lines))
