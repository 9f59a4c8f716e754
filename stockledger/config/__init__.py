"""Configuration module."""

from stockledger.config.logging import (
    bind_tenant,
    clear_log_context,
    configure_logging,
    get_logger,
)
from stockledger.config.settings import Settings, get_settings, reset_settings

__all__ = [
    "Settings",
    "get_settings",
    "reset_settings",
    "configure_logging",
    "get_logger",
    "bind_tenant",
    "clear_log_context",
]
