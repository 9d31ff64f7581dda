"""Provider options: aliases, unknown keys, coercion and precedence."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from sparkpost_delivery.domain.options import DeliveryOptions, resolve_options


@pytest.mark.os_agnostic
def test_every_option_defaults_to_unset() -> None:
    assert DeliveryOptions().model_dump(exclude_none=True) == {}


@pytest.mark.os_agnostic
def test_tracking_aliases_map_to_wire_names() -> None:
    options = DeliveryOptions.model_validate({"track_opens": False, "track_clicks": True})

    assert options.open_tracking is False
    assert options.click_tracking is True


@pytest.mark.os_agnostic
def test_unknown_keys_are_ignored() -> None:
    options = DeliveryOptions.model_validate({"sandbox": True, "future_flag": "x"})

    assert options.model_dump(exclude_none=True) == {"sandbox": True}


@pytest.mark.os_agnostic
def test_numeric_identifiers_become_strings() -> None:
    options = DeliveryOptions.model_validate({"subaccount": 123, "campaign_id": 7, "template_id": 42})

    assert options.subaccount == "123"
    assert options.campaign_id == "7"
    assert options.template_id == "42"


@pytest.mark.os_agnostic
def test_numeric_values_for_every_string_option_become_strings() -> None:
    resolved = resolve_options(
        DeliveryOptions(),
        {"ab_test_id": 42, "return_path": 7, "description": 2024, "start_time": 2024.5, "ip_pool": 3},
    )

    assert resolved.ab_test_id == "42"
    assert resolved.return_path == "7"
    assert resolved.description == "2024"
    assert resolved.start_time == "2024.5"
    assert resolved.ip_pool == "3"


@pytest.mark.os_agnostic
def test_booleans_are_not_turned_into_string_options() -> None:
    with pytest.raises(ValidationError):
        DeliveryOptions.model_validate({"description": True})


@pytest.mark.os_agnostic
def test_wrongly_typed_option_is_rejected() -> None:
    with pytest.raises(ValidationError):
        DeliveryOptions.model_validate({"metadata": "not-a-mapping"})


@pytest.mark.os_agnostic
def test_options_are_frozen() -> None:
    options = DeliveryOptions(sandbox=True)

    with pytest.raises(ValidationError):
        options.sandbox = False  # type: ignore[misc]


@pytest.mark.os_agnostic
def test_message_level_option_overrides_default() -> None:
    resolved = resolve_options(DeliveryOptions(campaign_id="default", sandbox=True), {"campaign_id": "message"})

    assert resolved.campaign_id == "message"
    assert resolved.sandbox is True


@pytest.mark.os_agnostic
def test_message_level_false_overrides_default_true() -> None:
    resolved = resolve_options(DeliveryOptions(open_tracking=True), {"open_tracking": False})

    assert resolved.open_tracking is False


@pytest.mark.os_agnostic
def test_message_level_none_keeps_the_default() -> None:
    resolved = resolve_options(DeliveryOptions(ip_pool="shared"), {"ip_pool": None})

    assert resolved.ip_pool == "shared"


@pytest.mark.os_agnostic
def test_hyphenated_keys_are_accepted() -> None:
    resolved = resolve_options(DeliveryOptions(), {"campaign-id": "spring", "ip-pool": "transactional"})

    assert resolved.campaign_id == "spring"
    assert resolved.ip_pool == "transactional"


@pytest.mark.os_agnostic
def test_missing_provider_data_returns_the_defaults() -> None:
    defaults = DeliveryOptions(transactional=True)

    assert resolve_options(defaults, None) == defaults


@pytest.mark.os_agnostic
def test_resolving_twice_is_stable() -> None:
    defaults = DeliveryOptions(sandbox=True, campaign_id="c1")
    once = resolve_options(defaults, {"ip_pool": "p1"})

    assert resolve_options(once, {}) == once
