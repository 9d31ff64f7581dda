"""POSIX-conventional exit codes for CLI error paths.

Provides a single :class:`ExitCode` enum so every ``SystemExit`` raised by a
CLI command carries a meaningful, grep-friendly integer instead of a bare ``1``.

Contents:
    * :class:`ExitCode` — IntEnum of all exit codes used by this application.
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """POSIX-conventional exit codes for CLI error paths.

    Values follow sysexits.h and errno conventions where applicable:

    * 0–1: generic success / failure
    * 2: ENOENT (missing attachment file)
    * 22: EINVAL
    * 69: EX_UNAVAILABLE, the API rejected the transmission
    * 75: EX_TEMPFAIL, the API could not be reached
    * 76: EX_PROTOCOL, the API answered with something unreadable
    * 78: EX_CONFIG (sysexits.h)

    Example:
        >>> ExitCode.SUCCESS
        <ExitCode.SUCCESS: 0>
        >>> int(ExitCode.PROVIDER_REJECTED)
        69
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    FILE_NOT_FOUND = 2
    INVALID_ARGUMENT = 22
    PROVIDER_REJECTED = 69
    TRANSPORT_FAILURE = 75
    RESPONSE_FORMAT = 76
    CONFIG_ERROR = 78


__all__ = ["ExitCode"]
