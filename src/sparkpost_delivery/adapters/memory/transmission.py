"""In-memory transmission adapters for testing.

Provides a transmission poster that satisfies the same Protocol as the
production httpx adapter but performs no network I/O.

Contents:
    * :class:`TransmissionSpy` - Captures posted payloads and replays canned responses.
    * :func:`load_sparkpost_config_from_dict_in_memory` - In-memory config loader.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import orjson

from ..sparkpost.config import SparkPostConfig
from ..sparkpost.transport import RawResponse

ACCEPTED_BODY: bytes = orjson.dumps(
    {"results": {"total_accepted_recipients": 1, "total_rejected_recipients": 0, "id": "spy-transmission"}}
)


def _empty_payload_list() -> list[dict[str, Any]]:
    """Create an empty typed list for captured payloads."""
    return []


@dataclass
class TransmissionSpy:
    """Captures transmission posts for test assertions.

    Each test should create its own TransmissionSpy to avoid cross-test
    pollution. ``post_transmission`` matches the PostTransmission protocol.

    Attributes:
        posted: Captured ``{"payload": ..., "config": ...}`` records.
        status_code: HTTP status returned for every post.
        body: Response body returned for every post.
        raise_exception: When set, posts raise this exception after recording.

    Example:
        >>> spy = TransmissionSpy()
        >>> raw = spy.post_transmission({"recipients": []}, config=SparkPostConfig(api_key="k"))
        >>> raw.status_code
        200
        >>> len(spy.posted)
        1
    """

    posted: list[dict[str, Any]] = field(default_factory=_empty_payload_list)
    status_code: int = 200
    body: bytes = ACCEPTED_BODY
    raise_exception: Exception | None = None

    def clear(self) -> None:
        """Reset captured data for next test."""
        self.posted.clear()
        self.raise_exception = None

    def respond_with(self, document: Mapping[str, Any] | bytes, *, status_code: int = 200) -> None:
        """Set the canned response; mappings are serialized to JSON."""
        self.body = document if isinstance(document, bytes) else orjson.dumps(document)
        self.status_code = status_code

    def post_transmission(self, payload: Mapping[str, Any], *, config: SparkPostConfig) -> RawResponse:
        """Record the call and return the canned response.

        Raises:
            Exception: If raise_exception is set, raises that exception.
        """
        self.posted.append({"payload": dict(payload), "config": config})
        if self.raise_exception is not None:
            raise self.raise_exception
        return RawResponse(status_code=self.status_code, body=self.body)

    @property
    def last_payload(self) -> dict[str, Any]:
        """Payload of the most recent post."""
        return self.posted[-1]["payload"]


def load_sparkpost_config_from_dict_in_memory(
    config_dict: Mapping[str, Any],
) -> SparkPostConfig:
    """Parse SparkPost config from dict using the real Pydantic model."""
    raw = config_dict.get("sparkpost", {})
    return SparkPostConfig.model_validate(raw if raw else {})


__all__ = [
    "ACCEPTED_BODY",
    "TransmissionSpy",
    "load_sparkpost_config_from_dict_in_memory",
]
