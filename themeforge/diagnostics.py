"""Structured diagnostics and log configuration."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Mapping

ROOT_LOGGER_NAME = "themeforge"

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_MAX_LOG_BYTES = 512_000
_LOG_BACKUPS = 3


class Diagnostics:
    """Emit ``(component, operation, message, context)`` events to stdlib logging.

    Instances are passed to themes, registries and resolvers at construction,
    so each collaborator can be given its own sink in tests.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger(ROOT_LOGGER_NAME)

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def debug(
        self,
        component: str,
        operation: str,
        message: str,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        self.log(logging.DEBUG, component, operation, message, context)

    def info(
        self,
        component: str,
        operation: str,
        message: str,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        self.log(logging.INFO, component, operation, message, context)

    def warning(
        self,
        component: str,
        operation: str,
        message: str,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        self.log(logging.WARNING, component, operation, message, context)

    def error(
        self,
        component: str,
        operation: str,
        message: str,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        self.log(logging.ERROR, component, operation, message, context)

    def log(
        self,
        level: int,
        component: str,
        operation: str,
        message: str,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        logger = self._logger.getChild(component)
        if not logger.isEnabledFor(level):
            return
        ctx = dict(context or {})
        logger.log(
            level,
            "%s: %s %s",
            operation,
            message,
            _format_context(ctx),
            extra={"component": component, "operation": operation, "context": ctx},
        )


@dataclass(frozen=True, slots=True)
class DiagnosticEvent:
    """One captured diagnostic event."""

    level: int
    component: str
    operation: str
    message: str
    context: dict[str, Any] = field(default_factory=dict)


class RecordingDiagnostics(Diagnostics):
    """Diagnostics sink that keeps events in memory as well as logging them."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        super().__init__(logger)
        self._events: list[DiagnosticEvent] = []

    @property
    def events(self) -> list[DiagnosticEvent]:
        return list(self._events)

    def operations(self, component: str | None = None) -> list[str]:
        return [
            event.operation
            for event in self._events
            if component is None or event.component == component
        ]

    def clear(self) -> None:
        self._events.clear()

    def log(
        self,
        level: int,
        component: str,
        operation: str,
        message: str,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        self._events.append(
            DiagnosticEvent(
                level=level,
                component=component,
                operation=operation,
                message=message,
                context=dict(context or {}),
            )
        )
        super().log(level, component, operation, message, context)


def configure_logging(log_dir: Path, level: str | int = "INFO") -> logging.Logger:
    """Attach a rotating file handler to the ``themeforge`` logger once."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level if isinstance(level, int) else level.upper())
    if logger.handlers:
        return logger

    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / "themeforge.log",
        maxBytes=_MAX_LOG_BYTES,
        backupCount=_LOG_BACKUPS,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def _format_context(context: Mapping[str, Any]) -> str:
    if not context:
        return ""
    return "[" + " ".join(f"{key}={value!r}" for key, value in context.items()) + "]"
