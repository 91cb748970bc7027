"""Protocols describing the collaborators the session engine drives."""

from __future__ import annotations

from typing import Any, Protocol


class TickSchedulerLike(Protocol):
    """Repeating one-second tick source started and stopped by the engine."""
    def start(self) -> None:
        ...

    def cancel(self) -> None:
        ...


class NotificationSchedulerLike(Protocol):
    """One-shot local notification service."""
    def schedule(self, fire_after_seconds: float, title: str, body: str) -> Any:
        ...

    def cancel_all(self) -> None:
        ...


class DailyCountSinkLike(Protocol):
    """Persistence capability needed when a focus session completes."""
    def save_daily_count(self, count: int) -> None:
        ...
