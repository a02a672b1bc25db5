"""CLI helpers exposed for other modules."""

from .ui import LogLevel, LogSink, log

__all__ = ["LogLevel", "LogSink", "log"]
