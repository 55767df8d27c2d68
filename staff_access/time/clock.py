"""
Staff Access Time — Assignment Timestamp Source
===============================================
Every workflow role assignment is stamped with ``assignedAt`` when it
is granted. The stamp comes from a Clock handed to the
WorkflowAssignmentStore, or from the process default when none is given.

Stamps are UTC and truncated to milliseconds, the precision of the
persisted ISO-8601 ``assignedAt`` strings, so a saved document loads
back equal to the store that wrote it.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Protocol


class Clock(Protocol):
    def now_utc(self) -> datetime:
        ...  # pragma: no cover


def _to_stamp(moment: datetime) -> datetime:
    moment = moment.astimezone(timezone.utc)
    return moment.replace(microsecond=moment.microsecond - moment.microsecond % 1000)


class SystemClock:
    """Wall-clock stamps for live edit sessions."""

    def now_utc(self) -> datetime:
        return _to_stamp(datetime.now(timezone.utc))


class FixedClock:
    """
    Stamps a fixed grant time; ``advance`` moves it forward between
    grants in multi-step scenarios.
    """

    def __init__(self, moment: datetime) -> None:
        if moment.tzinfo is None:
            raise ValueError("FixedClock needs a timezone-aware grant time.")
        self._moment = _to_stamp(moment)

    def now_utc(self) -> datetime:
        return self._moment

    def advance(self, seconds: float) -> None:
        self._moment = _to_stamp(self._moment + timedelta(seconds=seconds))


_default_clock: Clock = SystemClock()


def get_default_clock() -> Clock:
    """Clock used by stores built without one."""
    return _default_clock


def set_default_clock(clock: Clock) -> Clock:
    """Install ``clock`` as the default and return the one it replaces."""
    global _default_clock
    previous, _default_clock = _default_clock, clock
    return previous
