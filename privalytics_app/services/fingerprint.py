"""
Daily session fingerprints.

A visitor is approximated by hash(address, UTC date). The same address on
the same day always maps to the same 16-hex-character value; a new day
yields a new value, which caps counting at "daily unique visitors".
Nothing reversible about the address is stored.
"""

import hashlib
from datetime import datetime, timezone

SESSION_HASH_LENGTH = 16
UNKNOWN_ADDRESS = "unknown"


def today_utc() -> str:
    """Current UTC calendar date as YYYY-MM-DD"""
    return datetime.now(timezone.utc).strftime("%Y-%m-%d")


def generate_session_hash(address: str, date: str) -> str:
    data = f"{address or UNKNOWN_ADDRESS}:{date}"
    return hashlib.sha256(data.encode("utf-8")).hexdigest()[:SESSION_HASH_LENGTH]
