"""CLI --set override integration tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest
from click.testing import CliRunner, Result

from sparkpost_delivery.adapters import cli as cli_mod


@pytest.mark.os_agnostic
def test_when_set_override_is_passed_config_reflects_change(
    cli_runner: CliRunner,
    config_cli_context: Callable[[dict[str, Any]], Callable[[], Any]],
) -> None:
    """Verify --set override is visible in config command output."""
    factory = config_cli_context({"sparkpost": {"api_host": "https://api.sparkpost.com/api/v1"}})

    result: Result = cli_runner.invoke(
        cli_mod.cli,
        ["--set", "sparkpost.api_host=https://api.eu.sparkpost.com/api/v1", "config", "--section", "sparkpost"],
        obj=factory,
    )

    assert result.exit_code == 0
    assert "api.eu.sparkpost.com" in result.output


@pytest.mark.os_agnostic
def test_when_multiple_set_overrides_are_passed_all_apply(
    cli_runner: CliRunner,
    config_cli_context: Callable[[dict[str, Any]], Callable[[], Any]],
) -> None:
    factory = config_cli_context({"sparkpost": {"campaign_id": "spring"}})

    result: Result = cli_runner.invoke(
        cli_mod.cli,
        [
            "--set",
            "sparkpost.campaign_id=autumn",
            "--set",
            "sparkpost.ip_pool=transactional",
            "config",
            "--format",
            "json",
            "--section",
            "sparkpost",
        ],
        obj=factory,
    )

    assert result.exit_code == 0
    assert "autumn" in result.stdout
    assert "transactional" in result.stdout


@pytest.mark.os_agnostic
def test_when_set_override_is_boolean_it_is_coerced(
    cli_runner: CliRunner,
    config_cli_context: Callable[[dict[str, Any]], Callable[[], Any]],
) -> None:
    """``sparkpost.sandbox=true`` arrives as a JSON boolean, not a string."""
    factory = config_cli_context({"sparkpost": {"sandbox": False}})

    result: Result = cli_runner.invoke(
        cli_mod.cli,
        ["--set", "sparkpost.sandbox=true", "config", "--format", "json", "--section", "sparkpost"],
        obj=factory,
    )

    assert result.exit_code == 0
    assert "true" in result.stdout
    assert '"true"' not in result.stdout


@pytest.mark.os_agnostic
def test_when_set_override_has_nested_key_it_works(
    cli_runner: CliRunner,
    config_cli_context: Callable[[dict[str, Any]], Callable[[], Any]],
) -> None:
    factory = config_cli_context({"lib_log_rich": {"payload_limits": {"message_max_chars": 4096}}})

    result: Result = cli_runner.invoke(
        cli_mod.cli,
        ["--set", "lib_log_rich.payload_limits.message_max_chars=8192", "config", "--format", "json"],
        obj=factory,
    )

    assert result.exit_code == 0
    assert "8192" in result.stdout


@pytest.mark.os_agnostic
def test_when_set_override_creates_a_missing_section_it_is_displayed(
    cli_runner: CliRunner,
    config_cli_context: Callable[[dict[str, Any]], Callable[[], Any]],
) -> None:
    factory = config_cli_context({"lib_log_rich": {"console_level": "INFO"}})

    result: Result = cli_runner.invoke(
        cli_mod.cli,
        ["--set", "sparkpost.subaccount=123", "config", "--section", "sparkpost"],
        obj=factory,
    )

    assert result.exit_code == 0
    assert "subaccount" in result.output


@pytest.mark.os_agnostic
def test_when_set_override_is_invalid_it_shows_usage_error(
    cli_runner: CliRunner,
    production_factory: Callable[[], Any],
) -> None:
    result: Result = cli_runner.invoke(
        cli_mod.cli,
        ["--set", "invalid_no_equals", "config"],
        obj=production_factory,
    )

    assert result.exit_code != 0
    assert "must contain '='" in result.output or "must contain '='" in (result.stderr or "")


@pytest.mark.os_agnostic
def test_when_set_override_has_no_dot_it_shows_usage_error(
    cli_runner: CliRunner,
    production_factory: Callable[[], Any],
) -> None:
    result: Result = cli_runner.invoke(
        cli_mod.cli,
        ["--set", "api_key=value", "config"],
        obj=production_factory,
    )

    assert result.exit_code != 0


@pytest.mark.os_agnostic
def test_when_set_override_is_empty_string_it_shows_error(
    cli_runner: CliRunner,
    production_factory: Callable[[], Any],
) -> None:
    result: Result = cli_runner.invoke(
        cli_mod.cli,
        ["--set", "", "config"],
        obj=production_factory,
    )

    assert result.exit_code != 0


@pytest.mark.os_agnostic
def test_when_no_set_overrides_config_is_unchanged(
    cli_runner: CliRunner,
    config_cli_context: Callable[[dict[str, Any]], Callable[[], Any]],
) -> None:
    factory = config_cli_context({"sparkpost": {"ip_pool": "marketing"}})

    result: Result = cli_runner.invoke(
        cli_mod.cli,
        ["config", "--section", "sparkpost"],
        obj=factory,
    )

    assert result.exit_code == 0
    assert "marketing" in result.output
