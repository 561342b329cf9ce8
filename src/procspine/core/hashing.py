"""
Deterministic hashing for peer routing.

Manifesto:
    Every backend peer must route the same process to the same target, so the
    routing hash has to be identical across interpreters. Python's built-in
    ``hash()`` of ``str`` is salted per process (PYTHONHASHSEED) and cannot
    be used for that. compute_remote_hash() derives the value from SHA-256
    instead:

    - **Deterministic:** Same inputs always produce the same hash, on any peer
    - **Order-dependent:** (a, b) and (b, a) hash differently
    - **Fixed width:** Folded into a signed 32-bit int, the width peers route on

Examples:
    >>> compute_remote_hash("instA", "nginx") == compute_remote_hash("instA", "nginx")
    True
    >>> -2**31 <= compute_remote_hash("instA", "nginx") < 2**31
    True

Tags:
    hashing, routing, remote, procspine
"""

import hashlib
from typing import Any

from procspine.core.constants import ID_CONNECTOR


def compute_digest(*values: Any) -> bytes:
    """SHA-256 over the string forms of ``values`` joined by ID_CONNECTOR."""
    content = ID_CONNECTOR.join(str(v) for v in values)
    return hashlib.sha256(content.encode("utf-8")).digest()


def compute_remote_hash(*values: Any) -> int:
    """
    Compute a stable signed 32-bit routing hash from values.

    Args:
        *values: Values to hash (converted to strings)

    Returns:
        Signed int in ``[-2**31, 2**31)``
    """
    return int.from_bytes(compute_digest(*values)[:4], "big", signed=True)
