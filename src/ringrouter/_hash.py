"""_hash.py: positions on the 64-bit hash ring."""
import hashlib
from typing import Any

_BITS: int = 64
SPACE: int = 2 ** _BITS


def hash_key(key: str | bytes) -> int:
    """Maps a key onto the ring.

    Args:
        key: request key or replica key. Strings are UTF-8 encoded first, so
            a str and its encoded bytes land on the same position.

    Returns:
        int: unsigned 64-bit position, the leading 8 bytes of the SHA-1 digest.
    """
    if isinstance(key, str):
        key = key.encode()
    digest = hashlib.sha1(key).digest()
    return int.from_bytes(digest[:_BITS // 8], "big")


def replica_key(replica: int, server_id: Any) -> str:
    """Key hashed to place virtual replica `replica` of a server.

    Uses the id's repr, so ids like `1` and `"1"` land on different positions.
    """
    return f"{server_id!r}#{replica}"
