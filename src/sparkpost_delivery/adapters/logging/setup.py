"""Centralized logging initialization for all entry points.

The console script, ``python -m`` execution and the CLI tests all
initialize lib_log_rich through :func:`init_logging`, which is a no-op
after the first call. Library code (the delivery method, the transport)
only uses stdlib ``logging``; the bridge installed here routes those
records into lib_log_rich.

Contents:
    * :func:`init_logging` – idempotent logging initialization with layered config.
    * :func:`_build_runtime_config` – constructs RuntimeConfig from the ``[lib_log_rich]`` section.
"""

from __future__ import annotations

from typing import cast

import lib_log_rich.config
import lib_log_rich.runtime
from lib_layered_config import Config
from pydantic import BaseModel, ConfigDict

from sparkpost_delivery import __init__conf__


class LoggingConfigModel(BaseModel):
    """Pydantic model for [lib_log_rich] config section validation.

    Extra fields are allowed to pass through to lib_log_rich.RuntimeConfig.

    Example:
        >>> model = LoggingConfigModel(service="mailer", environment="staging")
        >>> model.service, model.environment
        ('mailer', 'staging')
        >>> LoggingConfigModel().environment
        'prod'
    """

    service: str | None = None
    environment: str = "prod"

    model_config = ConfigDict(extra="allow")


def _build_runtime_config(config: Config) -> lib_log_rich.runtime.RuntimeConfig:
    """Build RuntimeConfig from the ``[lib_log_rich]`` section of a Config.

    The service name defaults to the package name when not configured;
    unspecified values use lib_log_rich's built-in defaults.
    """
    log_raw: object = config.get("lib_log_rich", default={})
    parsed = LoggingConfigModel.model_validate(cast("dict[str, object]", log_raw) if log_raw else {})

    service = parsed.service or __init__conf__.name
    extra_config = parsed.model_dump(exclude={"service", "environment"}, exclude_none=True)

    return lib_log_rich.runtime.RuntimeConfig(
        service=service,
        environment=parsed.environment,
        **extra_config,
    )


def init_logging(config: Config) -> None:
    """Initialize lib_log_rich runtime with the provided configuration.

    Loads .env files (to make LOG_* variables available), initializes the
    runtime from the ``[lib_log_rich]`` section and bridges standard Python
    logging. Subsequent calls return immediately.

    Args:
        config: Already-loaded layered configuration object.

    Example:
        >>> from lib_layered_config import Config
        >>> init_logging(Config({"lib_log_rich": {"environment": "test"}}, {}))  # doctest: +SKIP
    """
    if lib_log_rich.runtime.is_initialised():
        return
    lib_log_rich.config.enable_dotenv()
    runtime_config = _build_runtime_config(config)
    lib_log_rich.runtime.init(runtime_config)
    lib_log_rich.runtime.attach_std_logging()


__all__ = [
    "LoggingConfigModel",
    "init_logging",
]
