"""Diagnostic sinks for the COLLADA converter.

Every conversion writes its diagnostics to a single sink object that has a
``write(message, level)`` method.  The converter never raises for bad
skinning data; it reports through the sink and carries on, so the sink is
where callers find out what was dropped.

Two sinks are provided:
    ColladaLogConsole: forwards to the standard ``logging`` module.
    ColladaLogMemory:  keeps the entries for later inspection.
"""

import enum
import logging


class LogLevel(enum.IntEnum):
    """Diagnostic severity.  Values are ``logging`` levels."""

    Trace = 5
    Debug = logging.DEBUG
    Info = logging.INFO
    Warning = logging.WARNING
    Error = logging.ERROR


class ColladaLogConsole:
    """Sink that forwards every entry to a ``logging`` logger."""

    def __init__(self, logger_name="collada_converter"):
        self._logger = logging.getLogger(logger_name)

    def write(self, message, level=LogLevel.Info):
        self._logger.log(int(level), message)


class ColladaLogMemory:
    """Sink that stores entries as (message, level) tuples."""

    def __init__(self):
        self.entries = []

    def write(self, message, level=LogLevel.Info):
        self.entries.append((message, LogLevel(level)))

    def count(self, level=None):
        """Number of stored entries, optionally only those of one level."""
        if level is None:
            return len(self.entries)
        return sum(1 for _msg, lvl in self.entries if lvl == level)

    def messages(self, level=None):
        return [msg for msg, lvl in self.entries if level is None or lvl == level]

    def clear(self):
        self.entries.clear()
