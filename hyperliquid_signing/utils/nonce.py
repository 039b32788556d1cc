"""
Nonce source.

Nonces are wall-clock millisecond timestamps. Nothing here enforces a
strictly increasing sequence: two calls inside the same millisecond return
the same value, and whether the venue rejects the second one is a property
of its replay protection, not of this package.
"""

import time


def get_timestamp_ms() -> int:
    """Current UTC time in milliseconds."""
    return int(time.time() * 1000)
