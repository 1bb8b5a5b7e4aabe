"""Access-key normalization.

The browser hashes the friend key after lower-casing and trimming it, so
the server must produce exactly the same bytes before deriving its own
hash.  Only those two transformations are applied: internal whitespace
and punctuation are part of the key.
"""


def normalize_key(raw: str) -> str:
    """Lower-case *raw* and strip leading/trailing whitespace.

    Total over every string and idempotent.  ``"  MyKey42 "`` becomes
    ``"mykey42"``; the empty string stays empty.
    """
    return raw.strip().lower()
