"""
EnvKit Logger
Leveled console logging for envkit. Messages that carry env values go through
variable() / variables(), which mask secrets before anything is printed.
"""
import os
import sys
from typing import Any, Literal, Mapping, Optional

from .constants import ENV_ENVKIT_LOG_LEVEL, ENV_ENVKIT_LOG_PREFIX
from .sensitive import mask_mapping, mask_value

LogLevel = Literal['silent', 'error', 'warn', 'info', 'debug', 'trace']

class EnvKitLogger:
    def error(self, message: str, *args: Any) -> None: ...
    def warn(self, message: str, *args: Any) -> None: ...
    def info(self, message: str, *args: Any) -> None: ...
    def debug(self, message: str, *args: Any) -> None: ...
    def trace(self, message: str, *args: Any) -> None: ...
    def is_enabled(self, level: LogLevel) -> bool: ...
    def variable(
        self, level: LogLevel, action: str, key: str, value: Any, previous: Optional[Any] = None
    ) -> None: ...
    def variables(self, level: LogLevel, label: str, values: Mapping[str, Any]) -> None: ...

LOG_LEVELS = {
    'silent': 0,
    'error': 1,
    'warn': 2,
    'info': 3,
    'debug': 4,
    'trace': 5
}

# Library default: quiet unless something goes wrong
_current_level: LogLevel = 'warn'

env_level = os.getenv(ENV_ENVKIT_LOG_LEVEL, '').lower()
if env_level in LOG_LEVELS:
    _current_level = env_level # type: ignore

PREFIX = os.getenv(ENV_ENVKIT_LOG_PREFIX, '[envkit]')

def get_log_level() -> LogLevel:
    return _current_level

def set_log_level(level: LogLevel) -> None:
    global _current_level
    if level in LOG_LEVELS:
        _current_level = level

class ConsoleLogger(EnvKitLogger):
    """Prints to stderr (error, warn) and stdout (info, debug, trace)."""

    def is_enabled(self, level: LogLevel) -> bool:
        return level != 'silent' and LOG_LEVELS[level] <= LOG_LEVELS[_current_level]

    def _format(self, message: str) -> str:
        return f"{PREFIX} {message}"

    def _emit(self, level: LogLevel, message: str, *args: Any) -> None:
        if not self.is_enabled(level):
            return
        stream = sys.stderr if level in ('error', 'warn') else sys.stdout
        print(self._format(message), *args, file=stream)

    def error(self, message: str, *args: Any) -> None:
        self._emit('error', message, *args)

    def warn(self, message: str, *args: Any) -> None:
        self._emit('warn', message, *args)

    def info(self, message: str, *args: Any) -> None:
        self._emit('info', message, *args)

    def debug(self, message: str, *args: Any) -> None:
        self._emit('debug', message, *args)

    def trace(self, message: str, *args: Any) -> None:
        self._emit('trace', message, *args)

    def variable(
        self, level: LogLevel, action: str, key: str, value: Any, previous: Optional[Any] = None
    ) -> None:
        """Log one env assignment, e.g. `ENV SET: API_KEY = [REDACTED]`."""
        if not self.is_enabled(level):
            return
        message = f"ENV {action}: {key} = {mask_value(key, value)}"
        if previous is not None:
            message += f" (was: {mask_value(key, previous)})"
        self._emit(level, message)

    def variables(self, level: LogLevel, label: str, values: Mapping[str, Any]) -> None:
        if not self.is_enabled(level):
            return
        self._emit(level, f"{label}: {mask_mapping(values)}")

_logger_instance = ConsoleLogger()

def get_logger() -> EnvKitLogger:
    return _logger_instance
