"""SparkPost configuration model and loader.

Provides the SparkPostConfig Pydantic model for validated, immutable API
settings and the loader function to create it from configuration
dictionaries. Every option default left unset stays ``None`` so that it
never reaches the wire payload.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

import httpx
from pydantic import BaseModel, ConfigDict, field_validator

from sparkpost_delivery.domain.options import DeliveryOptions

DEFAULT_API_HOST = "https://api.sparkpost.com/api/v1"
TRANSMISSIONS_PATH = "/transmissions"


class SparkPostConfig(BaseModel):
    """Validated, immutable SparkPost delivery configuration.

    Example:
        >>> config = SparkPostConfig(api_key="secret", sandbox=True)
        >>> config.api_host
        'https://api.sparkpost.com/api/v1'
        >>> config.transmissions_url
        'https://api.sparkpost.com/api/v1/transmissions'
    """

    model_config = ConfigDict(frozen=True)

    api_key: str | None = None
    api_host: str = DEFAULT_API_HOST
    sandbox: bool | None = None
    track_opens: bool | None = None
    track_clicks: bool | None = None
    campaign_id: str | None = None
    return_path: str | None = None
    transactional: bool | None = None
    ip_pool: str | None = None
    inline_css: bool | None = None
    html_content_only: bool | None = None
    subaccount: str | None = None

    @field_validator("api_key", "campaign_id", "return_path", "ip_pool", "subaccount", mode="before")
    @classmethod
    def _coerce_empty_string_to_none(cls, v: Any) -> Any:
        """Treat empty strings from config files as "not configured".

        Numeric identifiers (e.g. ``subaccount = 123`` in TOML) become strings.

        Examples:
            >>> SparkPostConfig._coerce_empty_string_to_none("  ")
            >>> SparkPostConfig._coerce_empty_string_to_none(123)
            '123'
        """
        if isinstance(v, str) and not v.strip():
            return None
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("api_host", mode="before")
    @classmethod
    def _normalize_api_host(cls, v: Any) -> Any:
        """Fall back to the default host for empty values and drop trailing slashes.

        Raises:
            ValueError: When the host is not a well-formed http(s) URL.

        Examples:
            >>> SparkPostConfig._normalize_api_host("https://api.eu.sparkpost.com/api/v1/")
            'https://api.eu.sparkpost.com/api/v1'
            >>> SparkPostConfig._normalize_api_host("")
            'https://api.sparkpost.com/api/v1'
        """
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_API_HOST
        if isinstance(v, str):
            host = v.strip().rstrip("/")
            if not host.startswith(("https://", "http://")):
                raise ValueError(f"api_host must be an http(s) URL, got {v!r}")
            try:
                parsed = httpx.URL(host)
            except httpx.InvalidURL as exc:
                raise ValueError(f"api_host is not a valid URL: {exc}") from exc
            if not parsed.host:
                raise ValueError(f"api_host has no host name, got {v!r}")
            return host
        return v

    def __repr__(self) -> str:
        """Return string representation with api_key redacted.

        Example:
            >>> config = SparkPostConfig(api_key="secret123")
            >>> "secret123" in repr(config)
            False
            >>> "[REDACTED]" in repr(config)
            True
        """
        fields: list[str] = []
        for name, value in self:
            if name == "api_key" and value is not None:
                fields.append(f"{name}='[REDACTED]'")
            else:
                fields.append(f"{name}={value!r}")
        return f"SparkPostConfig({', '.join(fields)})"

    __str__ = __repr__

    @property
    def transmissions_url(self) -> str:
        """Full URL of the transmissions endpoint."""
        return f"{self.api_host}{TRANSMISSIONS_PATH}"

    def default_options(self) -> DeliveryOptions:
        """Translate configured defaults into provider options.

        Settings left unset stay unset, so the payload builder omits them.

        Example:
            >>> opts = SparkPostConfig(track_opens=True, campaign_id="welcome").default_options()
            >>> opts.open_tracking, opts.campaign_id, opts.sandbox
            (True, 'welcome', None)
        """
        return DeliveryOptions(
            sandbox=self.sandbox,
            open_tracking=self.track_opens,
            click_tracking=self.track_clicks,
            campaign_id=self.campaign_id,
            return_path=self.return_path,
            transactional=self.transactional,
            ip_pool=self.ip_pool,
            inline_css=self.inline_css,
            html_content_only=self.html_content_only,
            subaccount=self.subaccount,
        )


def apply_validated_overrides(base_config: SparkPostConfig, overrides: Mapping[str, Any]) -> SparkPostConfig:
    """Apply setting overrides with full Pydantic validation.

    Uses model_validate() with a merged dict instead of model_copy(update=...)
    to ensure Pydantic validators run on all overridden values. ``None``
    values mean "not overridden".

    Args:
        base_config: Base SparkPostConfig to merge overrides into.
        overrides: Field values to override.

    Returns:
        New SparkPostConfig with overrides applied and validated, or the
        base config when nothing is overridden.

    Raises:
        ValidationError: When overrides contain invalid values.

    Example:
        >>> base = SparkPostConfig(api_key="k", sandbox=False)
        >>> apply_validated_overrides(base, {"sandbox": True, "ip_pool": None}).sandbox
        True
    """
    effective = {key: value for key, value in overrides.items() if value is not None}
    if not effective:
        return base_config
    merged = {**base_config.model_dump(), **effective}
    return SparkPostConfig.model_validate(merged)


def load_sparkpost_config_from_dict(config_dict: Mapping[str, Any]) -> SparkPostConfig:
    """Load SparkPostConfig from a configuration dictionary.

    Bridges lib_layered_config's dictionary output with the typed
    SparkPostConfig Pydantic model. Single-parse validation at the boundary.

    Args:
        config_dict: Configuration dictionary typically from lib_layered_config.
            Expected to have a 'sparkpost' section.

    Returns:
        Configured SparkPost settings with defaults for missing values.

    Example:
        >>> config = load_sparkpost_config_from_dict({"sparkpost": {"api_key": "k", "sandbox": True}})
        >>> config.sandbox
        True
        >>> load_sparkpost_config_from_dict({}).api_key is None
        True
    """
    section: Any = config_dict.get("sparkpost", {})

    # Handle non-dict section (e.g. "sparkpost": "invalid")
    if not isinstance(section, Mapping):
        return SparkPostConfig.model_validate(section)

    raw: dict[str, Any] = dict(cast(Mapping[str, Any], section))
    return SparkPostConfig.model_validate(raw)


__all__ = [
    "DEFAULT_API_HOST",
    "SparkPostConfig",
    "TRANSMISSIONS_PATH",
    "apply_validated_overrides",
    "load_sparkpost_config_from_dict",
]
