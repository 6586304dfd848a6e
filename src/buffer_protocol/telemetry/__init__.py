"""
Telemetry module for buffer-protocol.

Provides structured logging for view exchanges.
"""

from buffer_protocol.telemetry.logger import (
    BufferLogger,
    JsonFormatter,
    LogContext,
    LogLevel,
    TextFormatter,
    clear_log_context,
    get_log_context,
    get_logger,
    set_log_context,
)

__all__ = [
    "BufferLogger",
    "JsonFormatter",
    "LogContext",
    "LogLevel",
    "TextFormatter",
    "clear_log_context",
    "get_log_context",
    "get_logger",
    "set_log_context",
]
