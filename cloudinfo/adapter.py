"""Structured logging facade used throughout the cloud info service."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Protocol


class Level(enum.Enum):
    """Severity of a log event."""

    TRACE = "trace"
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


@dataclass(frozen=True)
class LogEvent:
    """A single recorded log event."""

    level: Level
    line: str
    fields: dict[str, Any] = field(default_factory=dict)


class LogSink(Protocol):
    """Anything that accepts leveled log events."""

    def log(self, level: Level, msg: str, fields: Optional[Mapping[str, Any]]) -> None:
        ...


class ContextExtractor(Protocol):
    """Extracts log fields from a context object."""

    def extract(self, ctx: Any) -> Mapping[str, Any]:
        ...


class ErrorHandler(Protocol):
    """Handles an error."""

    def handle(self, err: BaseException) -> None:
        ...


class RecordingLogger:
    """A sink that keeps every event in memory, for tests and diagnostics."""

    def __init__(self) -> None:
        self.events: list[LogEvent] = []

    def log(self, level: Level, msg: str, fields: Optional[Mapping[str, Any]]) -> None:
        self.events.append(LogEvent(level, msg, dict(fields or {})))

    def last_event(self) -> Optional[LogEvent]:
        """Return the most recent event, or None if nothing was logged."""
        return self.events[-1] if self.events else None


class NoopLogger:
    """A sink that discards every event."""

    def log(self, level: Level, msg: str, fields: Optional[Mapping[str, Any]]) -> None:
        return None


class _FieldsSink:
    """Wraps a sink and adds a fixed set of fields to every event."""

    def __init__(self, inner: LogSink, fields: Mapping[str, Any]) -> None:
        self._inner = inner
        self._fields = dict(fields)

    def log(self, level: Level, msg: str, fields: Optional[Mapping[str, Any]]) -> None:
        merged = {**self._fields, **(fields or {})}
        self._inner.log(level, msg, merged)


class Logger:
    """Leveled logger over a sink, optionally able to read fields from a context."""

    def __init__(self, logger: LogSink, ctx_extractor: Optional[ContextExtractor] = None) -> None:
        self._logger = logger
        self._ctx_extractor = ctx_extractor

    def _emit(self, level: Level, msg: str, field_maps: tuple) -> None:
        merged: dict[str, Any] = {}
        for fields in field_maps:
            if fields:
                merged.update(fields)
        self._logger.log(level, msg, merged)

    def trace(self, msg: str, *args: Optional[Mapping[str, Any]]) -> None:
        self._emit(Level.TRACE, msg, args)

    def debug(self, msg: str, *args: Optional[Mapping[str, Any]]) -> None:
        self._emit(Level.DEBUG, msg, args)

    def info(self, msg: str, *args: Optional[Mapping[str, Any]]) -> None:
        self._emit(Level.INFO, msg, args)

    def warn(self, msg: str, *args: Optional[Mapping[str, Any]]) -> None:
        self._emit(Level.WARN, msg, args)

    def error(self, msg: str, *args: Optional[Mapping[str, Any]]) -> None:
        self._emit(Level.ERROR, msg, args)

    def with_fields(self, fields: Mapping[str, Any]) -> "Logger":
        """Return a logger that annotates every event with the given fields."""
        return Logger(_FieldsSink(self._logger, fields), self._ctx_extractor)

    def with_context(self, ctx: Any) -> "Logger":
        """Return a logger annotated with fields extracted from the context."""
        if self._ctx_extractor is None:
            return self
        return self.with_fields(self._ctx_extractor.extract(ctx))


def new_logger(logger: LogSink) -> Logger:
    """Return a logger writing to the given sink."""
    return Logger(logger)


def new_context_aware_logger(logger: LogSink, ctx_extractor: ContextExtractor) -> Logger:
    """Return a logger that can extract fields from a context."""
    return Logger(logger, ctx_extractor)


def new_noop_logger() -> Logger:
    """Return a logger that discards all events."""
    return Logger(NoopLogger())