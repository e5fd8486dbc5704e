"""Leveled progress messages emitted by the installer engine.

The engine only decides what to say and at which level; a sink decides
whether to show it and how. Two sinks ship with the package:

- LoggingMessageSink routes messages to the stdlib logging tree
- EchoMessageSink (see plugin_installer.commands.utils) prints for the CLI
"""

import logging
from abc import ABC, abstractmethod
from typing import Iterable, Protocol

DEBUG = "debug"
INFO = "info"
WARNING = "warning"

MESSAGE_LEVELS = (DEBUG, INFO, WARNING)
DEFAULT_OUTPUT_LEVELS = frozenset({INFO, WARNING})

PLUGIN_PREFIX = "---- "

_LOGGING_LEVELS = {
    DEBUG: logging.DEBUG,
    INFO: logging.INFO,
    WARNING: logging.WARNING,
}


class MessageSink(Protocol):
    def message(self, msg: str, level: str = INFO) -> None: ...

    def message_from_plugin(
        self, component_id: str, msg: str, level: str = INFO
    ) -> None: ...


def validate_level(level: str) -> str:
    if level not in MESSAGE_LEVELS:
        raise ValueError(
            f"Unknown message level: '{level}'. "
            f"Allowed levels: {', '.join(MESSAGE_LEVELS)}"
        )
    return level


def plugin_message(component_id: str, msg: str) -> str:
    """Prefix a message written by a component's own installer."""
    return f"{PLUGIN_PREFIX}{component_id}: {msg}"


class FilteringSink(ABC):
    """Base for sinks that only emit a configured set of levels."""

    def __init__(self, levels: Iterable[str] | None = None):
        if levels is None:
            levels = DEFAULT_OUTPUT_LEVELS
        self.levels = frozenset(validate_level(level) for level in levels)

    def message(self, msg: str, level: str = INFO) -> None:
        if validate_level(level) in self.levels:
            self.emit(msg, level)

    def message_from_plugin(
        self, component_id: str, msg: str, level: str = INFO
    ) -> None:
        self.message(plugin_message(component_id, msg), level)

    @abstractmethod
    def emit(self, msg: str, level: str) -> None:
        pass


class LoggingMessageSink(FilteringSink):
    def __init__(
        self,
        levels: Iterable[str] | None = None,
        logger: logging.Logger | None = None,
    ):
        super().__init__(levels)
        self.logger = logger or logging.getLogger(__name__)

    def emit(self, msg: str, level: str) -> None:
        self.logger.log(_LOGGING_LEVELS[level], msg)


__all__ = [
    "DEBUG",
    "INFO",
    "WARNING",
    "MESSAGE_LEVELS",
    "DEFAULT_OUTPUT_LEVELS",
    "MessageSink",
    "FilteringSink",
    "LoggingMessageSink",
    "plugin_message",
    "validate_level",
]
