"""Console script entry point for ``sparkpost-delivery``.

Wires the production services (layered config loader, httpx transport,
lib_log_rich logging) and hands them to the CLI. Lives outside
``adapters`` so the composition root is the only place that knows about
concrete adapters.
"""

from __future__ import annotations

from .adapters.cli.main import main as cli_main
from .composition import build_production


def main() -> int:
    """Run the CLI against real configuration and the real transmissions API.

    Returns:
        Exit code from CLI execution (see ``ExitCode``).
    """
    return cli_main(services_factory=build_production)


__all__ = ["main"]
