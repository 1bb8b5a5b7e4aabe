"""Day-of-month salt provider.

The friend-key hash is salted with the current UTC day of the month
(``"1"`` through ``"31"``, no leading zero), so the hash a guest submits
rotates every 24 hours without any server-side revocation state.  The salt
is public and low-entropy; it rotates credentials, it does not hide them.

Near UTC midnight the client and server may pick different days.  That
request fails as an ordinary credential mismatch and succeeds on retry.
"""

from __future__ import annotations

from datetime import datetime

from songify.utils.clock import Clock, as_utc, utc_now


class DailySaltProvider:
    """Derives the salt from an injectable UTC clock."""

    def __init__(self, clock: Clock = utc_now) -> None:
        self._clock = clock

    def current_salt(self) -> str:
        """Return the salt for the clock's current UTC day."""
        return self.salt_for(self._clock())

    @staticmethod
    def salt_for(moment: datetime) -> str:
        """Return the salt for *moment*; naive datetimes are taken as UTC."""
        return str(as_utc(moment).day)
