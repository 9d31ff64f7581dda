"""Logging adapter - lib_log_rich setup.

Provides idempotent lib_log_rich initialization shared by every entry point.

Contents:
    * :func:`.setup.init_logging` - Idempotent logging initialization
"""

from __future__ import annotations

from .setup import init_logging

__all__ = ["init_logging"]
