"""Domain enum tests: member values, string equality, and exhaustive member counts."""

from __future__ import annotations

import pytest

from sparkpost_delivery.domain.enums import ErrorKind, OutputFormat

# ======================== OutputFormat ========================


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    ("member", "expected_value"),
    [
        (OutputFormat.HUMAN, "human"),
        (OutputFormat.JSON, "json"),
    ],
)
def test_output_format_member_values(member: OutputFormat, expected_value: str) -> None:
    """Each OutputFormat member must have the expected string value."""
    assert member.value == expected_value


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    ("member", "expected_str"),
    [
        (OutputFormat.HUMAN, "human"),
        (OutputFormat.JSON, "json"),
    ],
)
def test_output_format_string_equality(member: OutputFormat, expected_str: str) -> None:
    """OutputFormat members must compare equal to their plain string equivalents."""
    assert member == expected_str


@pytest.mark.os_agnostic
def test_output_format_member_count() -> None:
    assert len(OutputFormat) == 2


# ======================== ErrorKind ========================


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    ("member", "expected_value"),
    [
        (ErrorKind.PROVIDER, "provider"),
        (ErrorKind.TRANSPORT, "transport"),
        (ErrorKind.RESPONSE_FORMAT, "response_format"),
    ],
)
def test_error_kind_member_values(member: ErrorKind, expected_value: str) -> None:
    """Each ErrorKind member must have the expected string value."""
    assert member.value == expected_value


@pytest.mark.os_agnostic
def test_error_kind_round_trips_from_its_value() -> None:
    assert ErrorKind("transport") is ErrorKind.TRANSPORT


@pytest.mark.os_agnostic
def test_error_kind_member_count() -> None:
    """ErrorKind must have exactly 3 members."""
    assert len(ErrorKind) == 3
