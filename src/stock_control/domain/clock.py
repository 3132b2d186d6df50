"""Clock: injectable source of transaction timestamps.

The service never calls ``datetime.now()`` directly; it asks its clock.
Tests inject a deterministic clock so history ordering can be asserted.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone


class Clock(ABC):

    @abstractmethod
    def now(self) -> datetime:
        """Return the current instant as a timezone-aware UTC datetime."""


class SystemClock(Clock):

    def now(self) -> datetime:
        return datetime.now(timezone.utc)
