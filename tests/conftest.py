"""Shared pytest fixtures for CLI, delivery and module-entry tests.

Centralizes test infrastructure:
- All shared fixtures live here
- Tests import fixtures implicitly via pytest's conftest discovery
- Fixtures use descriptive names that read as plain English
"""

from __future__ import annotations

import contextlib
import os
import re
import tempfile
from collections.abc import Callable, Iterator
from dataclasses import dataclass, fields
from pathlib import Path
from typing import TYPE_CHECKING, Any

import lib_cli_exit_tools
import pytest
from click.testing import CliRunner
from lib_layered_config import Config
from lib_layered_config.domain.config import SourceInfo

if TYPE_CHECKING:
    from sparkpost_delivery.adapters.memory.transmission import TransmissionSpy
    from sparkpost_delivery.composition import AppServices

_COVERAGE_BASENAME = ".coverage.sparkpost_delivery"


def _purge_stale_coverage_files(cov_path: Path) -> None:
    """Delete leftover SQLite database and journal files from crashed runs."""
    for suffix in ("", "-journal", "-wal", "-shm"):
        with contextlib.suppress(FileNotFoundError):
            Path(str(cov_path) + suffix).unlink()


def pytest_configure(config: pytest.Config) -> None:
    """Redirect the coverage database to a local temp directory.

    Runs before ``pytest-cov`` creates its ``Coverage()`` object, so the
    ``COVERAGE_FILE`` value applies however pytest is invoked.
    """
    if "COVERAGE_FILE" not in os.environ:
        cov_path = Path(tempfile.gettempdir()) / _COVERAGE_BASENAME
        _purge_stale_coverage_files(cov_path)
        os.environ["COVERAGE_FILE"] = str(cov_path)


def _load_dotenv() -> None:
    """Load .env file when it exists for integration test configuration."""
    from dotenv import load_dotenv

    env_file = Path(__file__).parent.parent / ".env"
    if env_file.exists():
        load_dotenv(env_file)


_load_dotenv()

ANSI_ESCAPE_PATTERN = re.compile(r"\x1B\[[0-?]*[ -/]*[@-~]")
CONFIG_FIELDS: tuple[str, ...] = tuple(field.name for field in fields(type(lib_cli_exit_tools.config)))

ACCEPTED_DOCUMENT: dict[str, Any] = {
    "results": {"total_accepted_recipients": 1, "total_rejected_recipients": 0, "id": "11668787484950529"}
}


def _remove_ansi_codes(text: str) -> str:
    """Return *text* stripped of ANSI escape sequences."""
    return ANSI_ESCAPE_PATTERN.sub("", text)


def _snapshot_cli_config() -> dict[str, object]:
    """Capture every attribute from ``lib_cli_exit_tools.config``."""
    return {name: getattr(lib_cli_exit_tools.config, name) for name in CONFIG_FIELDS}


def _restore_cli_config(snapshot: dict[str, object]) -> None:
    """Reapply a configuration snapshot captured by ``_snapshot_cli_config``."""
    for name, value in snapshot.items():
        setattr(lib_cli_exit_tools.config, name, value)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a fresh CliRunner per test.

    Use ``result.stdout`` for clean output (e.g., JSON parsing) so log
    messages on stderr do not contaminate it.
    """
    return CliRunner()


@pytest.fixture
def production_factory() -> Callable[[], AppServices]:
    """Provide the production services factory for tests that need no injection."""
    from sparkpost_delivery.composition import build_production

    return build_production


@pytest.fixture
def testing_factory() -> Callable[[], AppServices]:
    """Provide the in-memory services factory (no filesystem, no network)."""
    from sparkpost_delivery.composition import build_testing

    return build_testing


@pytest.fixture
def strip_ansi() -> Callable[[str], str]:
    """Return a helper that strips ANSI escape sequences from a string."""

    def _strip(value: str) -> str:
        return _remove_ansi_codes(value)

    return _strip


@pytest.fixture
def managed_traceback_state() -> Iterator[None]:
    """Reset traceback flags to a known baseline and restore after the test."""
    lib_cli_exit_tools.reset_config()
    lib_cli_exit_tools.config.traceback = False
    lib_cli_exit_tools.config.traceback_force_color = False
    snapshot = _snapshot_cli_config()
    try:
        yield
    finally:
        _restore_cli_config(snapshot)


@pytest.fixture
def clear_config_cache() -> Iterator[None]:
    """Clear the get_config cache before each test.

    Only clears before, not after, so a test that monkeypatches get_config
    does not break the teardown.
    """
    from sparkpost_delivery.adapters.config import loader as config_mod

    config_mod.get_config.cache_clear()
    yield


@pytest.fixture
def config_factory() -> Callable[[dict[str, Any]], Config]:
    """Create real Config instances from test data dicts without filesystem I/O.

    Example:
        def test_section(config_factory: Callable[[dict[str, Any]], Config]) -> None:
            config = config_factory({"sparkpost": {"api_key": "k"}})
            assert config.get("sparkpost.api_key") == "k"
    """

    def _factory(data: dict[str, Any]) -> Config:
        return Config(data, {})

    return _factory


@pytest.fixture
def source_info_factory() -> Callable[[str, str, str | None], SourceInfo]:
    """Create SourceInfo dicts for provenance-tracking tests.

    Example:
        def test_provenance(source_info_factory: Callable[..., SourceInfo]) -> None:
            info = source_info_factory("sparkpost.api_host", "user", "/home/user/.config/...")
            assert info["layer"] == "user"
    """

    def _factory(key: str, layer: str, path: str | None = None) -> SourceInfo:
        return {"layer": layer, "path": path, "key": key}

    return _factory


@pytest.fixture
def transmission_spy() -> TransmissionSpy:
    """Provide a fresh spy answering every post with an accepted response."""
    from sparkpost_delivery.adapters.memory import TransmissionSpy as TransmissionSpyImpl

    spy = TransmissionSpyImpl()
    spy.respond_with(ACCEPTED_DOCUMENT)
    return spy


@pytest.fixture
def inject_config(
    clear_config_cache: None,
) -> Callable[[Config], Callable[[], AppServices]]:
    """Return a factory that provides production services with an injected Config.

    Only the I/O boundary (``get_config``) is replaced; display and loaders
    stay real. Logging uses the in-memory initializer so CliRunner tests do
    not start the lib_log_rich runtime.
    """
    from sparkpost_delivery.adapters.memory import init_logging_in_memory
    from sparkpost_delivery.composition import AppServices, build_production

    def _inject(config: Config) -> Callable[[], AppServices]:
        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        prod = build_production()
        test_services = AppServices(
            get_config=_fake_get_config,
            get_default_config_path=prod.get_default_config_path,
            display_config=prod.display_config,
            load_sparkpost_config_from_dict=prod.load_sparkpost_config_from_dict,
            post_transmission=prod.post_transmission,
            init_logging=init_logging_in_memory,
        )
        return lambda: test_services

    return _inject


@pytest.fixture
def inject_config_with_profile_capture(
    clear_config_cache: None,
) -> Callable[[Config, list[str | None]], Callable[[], AppServices]]:
    """Return a factory whose get_config records every profile it is asked for."""
    from sparkpost_delivery.adapters.memory import init_logging_in_memory
    from sparkpost_delivery.composition import AppServices, build_production

    def _inject(config: Config, captured_profiles: list[str | None]) -> Callable[[], AppServices]:
        def _capturing_get_config(*, profile: str | None = None, **_kwargs: Any) -> Config:
            captured_profiles.append(profile)
            return config

        prod = build_production()
        test_services = AppServices(
            get_config=_capturing_get_config,
            get_default_config_path=prod.get_default_config_path,
            display_config=prod.display_config,
            load_sparkpost_config_from_dict=prod.load_sparkpost_config_from_dict,
            post_transmission=prod.post_transmission,
            init_logging=init_logging_in_memory,
        )
        return lambda: test_services

    return _inject


@dataclass
class SparkPostCliContext:
    """Container for send-email CLI test setup.

    Attributes:
        factory: Callable that returns wired AppServices for CLI invocation.
        spy: TransmissionSpy capturing every posted payload.
    """

    factory: Callable[[], Any]
    spy: TransmissionSpy


@pytest.fixture
def sparkpost_cli_context(
    clear_config_cache: None,
) -> Callable[[dict[str, Any]], SparkPostCliContext]:
    """Create send-email CLI test context with configured factory and spy.

    Returns a function taking the ``[sparkpost]`` section contents and
    returning a context with the wired factory and a spy that answers with
    an accepted transmission.

    Example:
        def test_send(cli_runner, sparkpost_cli_context) -> None:
            ctx = sparkpost_cli_context({"api_key": "k"})
            result = cli_runner.invoke(cli, ["send-email", "--to", "a@example.com", "--text", "hi"], obj=ctx.factory)
            assert ctx.spy.last_payload["recipients"] == ["a@example.com"]
    """
    from sparkpost_delivery.adapters.memory import (
        display_config_in_memory,
        get_default_config_path_in_memory,
        init_logging_in_memory,
        load_sparkpost_config_from_dict_in_memory,
    )
    from sparkpost_delivery.adapters.memory.transmission import TransmissionSpy as TransmissionSpyImpl
    from sparkpost_delivery.composition import AppServices

    def _create(sparkpost_data: dict[str, Any]) -> SparkPostCliContext:
        spy = TransmissionSpyImpl()
        spy.respond_with(ACCEPTED_DOCUMENT)
        config = Config({"sparkpost": sparkpost_data}, {})

        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        test_services = AppServices(
            get_config=_fake_get_config,
            get_default_config_path=get_default_config_path_in_memory,
            display_config=display_config_in_memory,
            load_sparkpost_config_from_dict=load_sparkpost_config_from_dict_in_memory,
            post_transmission=spy.post_transmission,
            init_logging=init_logging_in_memory,
        )
        return SparkPostCliContext(factory=lambda: test_services, spy=spy)

    return _create


@pytest.fixture
def config_cli_context(
    clear_config_cache: None,
) -> Callable[[dict[str, Any]], Callable[[], AppServices]]:
    """Create a services factory whose configuration is the given dict.

    Simpler than ``inject_config`` when you don't need a pre-built Config object.

    Example:
        def test_config_display(cli_runner, config_cli_context) -> None:
            factory = config_cli_context({"sparkpost": {"api_host": "https://api.eu.sparkpost.com/api/v1"}})
            result = cli_runner.invoke(cli, ["config"], obj=factory)
            assert "api.eu.sparkpost.com" in result.output
    """
    from sparkpost_delivery.adapters.memory import init_logging_in_memory
    from sparkpost_delivery.composition import AppServices, build_production

    def _create(config_data: dict[str, Any]) -> Callable[[], AppServices]:
        config = Config(config_data, {})
        prod = build_production()

        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        test_services = AppServices(
            get_config=_fake_get_config,
            get_default_config_path=prod.get_default_config_path,
            display_config=prod.display_config,
            load_sparkpost_config_from_dict=prod.load_sparkpost_config_from_dict,
            post_transmission=prod.post_transmission,
            init_logging=init_logging_in_memory,
        )
        return lambda: test_services

    return _create
