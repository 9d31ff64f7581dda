"""Provider options recognized by the payload builder and their resolution.

Options come from two places: process-wide defaults (the ``[sparkpost]``
configuration section) and the ``provider_data`` mapping of a single
message. :func:`resolve_options` merges them with message-level values
taking precedence. Unset options stay ``None`` and are never written to
the wire payload.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class DeliveryOptions(BaseModel):
    """Typed provider options bag.

    Unknown keys are accepted and dropped so that callers written against a
    newer or older option set keep working.

    Example:
        >>> opts = DeliveryOptions.model_validate({"track_opens": True, "future_flag": 1})
        >>> opts.open_tracking
        True
        >>> "future_flag" in opts.model_dump()
        False
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    # options block
    open_tracking: bool | None = Field(default=None, validation_alias=AliasChoices("open_tracking", "track_opens"))
    click_tracking: bool | None = Field(default=None, validation_alias=AliasChoices("click_tracking", "track_clicks"))
    transactional: bool | None = None
    sandbox: bool | None = None
    inline_css: bool | None = None
    ip_pool: str | None = None
    skip_suppression: bool | None = None
    start_time: str | None = None

    # top-level scalars
    campaign_id: str | None = None
    return_path: str | None = None
    description: str | None = None
    metadata: dict[str, Any] | None = None
    global_substitution_data: dict[str, Any] | None = None
    subaccount: str | None = None

    # recipients
    substitution_data: dict[str, dict[str, Any]] | None = None
    recipient_metadata: dict[str, dict[str, Any]] | None = None
    recipient_list_id: str | None = None

    # content
    template_id: str | None = None
    use_draft_template: bool | None = None
    ab_test_id: str | None = None
    html_content_only: bool | None = None

    @field_validator(
        "ip_pool",
        "start_time",
        "campaign_id",
        "return_path",
        "description",
        "subaccount",
        "recipient_list_id",
        "template_id",
        "ab_test_id",
        mode="before",
    )
    @classmethod
    def _coerce_scalar_to_str(cls, v: Any) -> Any:
        """Accept numeric values from TOML, environment variables or ``--option``.

        Examples:
            >>> DeliveryOptions(subaccount=123).subaccount
            '123'
            >>> DeliveryOptions(description=2024).description
            '2024'
        """
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


def _normalize_keys(raw: Mapping[str, Any]) -> dict[str, Any]:
    """Accept ``campaign-id`` style keys as well as ``campaign_id``.

    Examples:
        >>> _normalize_keys({"campaign-id": "c1", "sandbox": True})
        {'campaign_id': 'c1', 'sandbox': True}
    """
    return {str(key).replace("-", "_"): value for key, value in raw.items()}


def resolve_options(defaults: DeliveryOptions, provider_data: Mapping[str, Any] | None) -> DeliveryOptions:
    """Merge configured defaults with message-level options.

    Every key set on the message overrides the default for the same key.
    Keys set in neither source remain ``None``.

    Args:
        defaults: Options derived from process-wide configuration.
        provider_data: The message's ``provider_data`` mapping, or None.

    Returns:
        A new, frozen DeliveryOptions.

    Raises:
        pydantic.ValidationError: When a recognized option has the wrong type.

    Example:
        >>> resolved = resolve_options(DeliveryOptions(sandbox=False, ip_pool="p1"), {"sandbox": True})
        >>> resolved.sandbox, resolved.ip_pool
        (True, 'p1')
        >>> resolved.campaign_id is None
        True
    """
    message_level = DeliveryOptions.model_validate(_normalize_keys(provider_data or {}))
    merged = {
        **defaults.model_dump(exclude_none=True),
        **message_level.model_dump(exclude_none=True),
    }
    return DeliveryOptions.model_validate(merged)


__all__ = [
    "DeliveryOptions",
    "resolve_options",
]
