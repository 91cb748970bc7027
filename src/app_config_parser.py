"""Typed parser for config.toml sections into immutable app settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from app_config_schema import (
    DEFAULT_STORAGE_FILE,
    AppConfig,
    AppConfigurationError,
    LoggingSettings,
    NotificationSettings,
    StorageSettings,
    TimerSettings,
    UIServerSettings,
)

_ALLOWED_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def parse_app_config(
    raw: Mapping[str, Any],
    *,
    base_dir: Path,
    source_file: str,
) -> AppConfig:
    """Parse raw TOML mappings into strongly typed application settings."""
    return AppConfig(
        timer=_parse_timer_settings(_section(raw, "timer")),
        storage=_parse_storage_settings(_section(raw, "storage"), base_dir=base_dir),
        notifications=_parse_notification_settings(_section(raw, "notifications")),
        ui_server=_parse_ui_server_settings(_section(raw, "ui_server")),
        logging=_parse_logging_settings(_section(raw, "logging")),
        source_file=source_file,
    )


def _parse_timer_settings(section: Mapping[str, Any]) -> TimerSettings:
    focus_minutes = _as_positive_float(section.get("focus_minutes", 25), "timer.focus_minutes")
    short_minutes = _as_positive_float(
        section.get("short_break_minutes", 5),
        "timer.short_break_minutes",
    )
    long_minutes = _as_positive_float(
        section.get("long_break_minutes", 15),
        "timer.long_break_minutes",
    )
    per_cycle = _as_int(section.get("pomodoros_per_cycle", 4), "timer.pomodoros_per_cycle")
    if per_cycle < 1:
        raise AppConfigurationError("timer.pomodoros_per_cycle must be >= 1.")

    return TimerSettings(
        focus_seconds=_minutes_to_seconds(focus_minutes, "timer.focus_minutes"),
        short_break_seconds=_minutes_to_seconds(short_minutes, "timer.short_break_minutes"),
        long_break_seconds=_minutes_to_seconds(long_minutes, "timer.long_break_minutes"),
        pomodoros_per_cycle=per_cycle,
    )


def _parse_storage_settings(section: Mapping[str, Any], *, base_dir: Path) -> StorageSettings:
    raw_path = _as_str(section.get("path", DEFAULT_STORAGE_FILE), "storage.path")
    if not raw_path:
        raise AppConfigurationError("storage.path cannot be empty.")
    return StorageSettings(path=_resolve_path(base_dir, raw_path))


def _parse_notification_settings(section: Mapping[str, Any]) -> NotificationSettings:
    app_name = _as_str(
        section.get("app_name", "Pomodoro Focus"),
        "notifications.app_name",
    )
    timeout_seconds = _as_int(
        section.get("timeout_seconds", 10),
        "notifications.timeout_seconds",
    )
    if timeout_seconds < 0:
        raise AppConfigurationError("notifications.timeout_seconds must be >= 0.")
    return NotificationSettings(
        enabled=_as_bool(section.get("enabled", True), "notifications.enabled"),
        app_name=app_name or "Pomodoro Focus",
        timeout_seconds=timeout_seconds,
    )


def _parse_ui_server_settings(section: Mapping[str, Any]) -> UIServerSettings:
    return UIServerSettings(
        enabled=_as_bool(section.get("enabled", False), "ui_server.enabled"),
        host=_as_str(section.get("host", "127.0.0.1"), "ui_server.host"),
        port=_as_int(section.get("port", 8765), "ui_server.port"),
    )


def _parse_logging_settings(section: Mapping[str, Any]) -> LoggingSettings:
    level = _as_str(section.get("level", "INFO"), "logging.level").upper()
    if level not in _ALLOWED_LOG_LEVELS:
        allowed = ", ".join(sorted(_ALLOWED_LOG_LEVELS))
        raise AppConfigurationError(f"logging.level must be one of: {allowed}")
    return LoggingSettings(level=level)


def _section(root: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    raw = root.get(name, {})
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise AppConfigurationError(f"[{name}] must be a table.")
    return raw


def _as_str(value: Any, field: str) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    raise AppConfigurationError(f"{field} must be a string.")


def _as_bool(value: Any, field: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off"):
            return False
    raise AppConfigurationError(f"{field} must be a boolean.")


def _as_int(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be an integer.")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be an integer.") from error
    raise AppConfigurationError(f"{field} must be an integer.")


def _as_float(value: Any, field: str) -> float:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be a number.")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be a number.") from error
    raise AppConfigurationError(f"{field} must be a number.")


def _as_positive_float(value: Any, field: str) -> float:
    number = _as_float(value, field)
    if number <= 0:
        raise AppConfigurationError(f"{field} must be greater than zero.")
    return number


def _minutes_to_seconds(minutes: float, field: str) -> int:
    seconds = int(round(minutes * 60))
    if seconds <= 0:
        raise AppConfigurationError(f"{field} must be at least one second.")
    return seconds


def _resolve_path(base_dir: Path, raw: str) -> str:
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = (base_dir / path).resolve()
    return str(path)
