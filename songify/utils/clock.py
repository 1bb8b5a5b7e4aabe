"""Injectable UTC clock.

Every time-dependent component (salt rotation, token expiry) takes a
``Clock`` instead of calling ``datetime.now`` directly, so tests can pin
the current instant to a specific UTC day or to either side of a token's
expiry.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta, timezone

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(tz=timezone.utc)  # noqa: UP017


def as_utc(moment: datetime) -> datetime:
    """Convert *moment* to UTC, treating naive datetimes as already UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)  # noqa: UP017
    return moment.astimezone(timezone.utc)  # noqa: UP017


class FixedClock:
    """A manually advanced clock for tests and offline tooling."""

    def __init__(self, moment: datetime) -> None:
        self._moment = as_utc(moment)

    def __call__(self) -> datetime:
        return self._moment

    def set(self, moment: datetime) -> None:
        self._moment = as_utc(moment)

    def advance(self, **delta: float) -> None:
        self._moment = self._moment + timedelta(**delta)
