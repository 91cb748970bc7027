"""Dataclass schema objects used by runtime configuration loading."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_CONFIG_FILE = "config.toml"
DEFAULT_STORAGE_FILE = "pomodoro_focus.json"


class AppConfigurationError(Exception):
    """Raised when application configuration fails."""


@dataclass(frozen=True)
class TimerSettings:
    """Session lengths in seconds and long-break cadence from `[timer]`."""
    focus_seconds: int = 25 * 60
    short_break_seconds: int = 5 * 60
    long_break_seconds: int = 15 * 60
    pomodoros_per_cycle: int = 4


@dataclass(frozen=True)
class StorageSettings:
    """Location of the key-value store file from `[storage]`."""
    path: str = DEFAULT_STORAGE_FILE


@dataclass(frozen=True)
class NotificationSettings:
    """Desktop notification settings from `[notifications]`."""
    enabled: bool = True
    app_name: str = "Pomodoro Focus"
    timeout_seconds: int = 10


@dataclass(frozen=True)
class UIServerSettings:
    """Local websocket UI bridge settings from `[ui_server]`."""
    enabled: bool = False
    host: str = "127.0.0.1"
    port: int = 8765


@dataclass(frozen=True)
class LoggingSettings:
    """Root logging level from `[logging]`."""
    level: str = "INFO"


@dataclass(frozen=True)
class AppConfig:
    """Top-level immutable runtime configuration."""
    timer: TimerSettings
    storage: StorageSettings
    notifications: NotificationSettings
    ui_server: UIServerSettings
    logging: LoggingSettings
    source_file: str
