"""_router.py: assigns requests to the nearest available server."""
from loguru import logger

from ._hash import hash_key
from ._ring import Ring
from .errors import NoServerAvailable
from .server import Server


class RequestRouter:
    """Routes request keys over a Ring.

    Routing is read-only: it hashes the key, walks the ring clockwise from
    that position and checks each server's availability live. The result is
    deterministic for a fixed ring and a fixed availability snapshot.
    """
    ring: Ring

    def __init__(self, ring: Ring) -> None:
        self.ring = ring

    def assign(self, key: str | bytes) -> Server:
        """Returns the first available server at or after the key's position.

        Args:
            key: non-empty request key.

        Returns:
            Server: the server the request should go to.

        Raises:
            NoServerAvailable: every server on the ring is unavailable.
            TypeError: key is not str or bytes.
            ValueError: key is empty.
        """
        position = self._position(key)
        checked: set[Server] = set()
        for entry in self.ring.successor_from(position):
            server = entry.server
            if server in checked:
                continue
            if server.is_available():
                return server
            checked.add(server)

        logger.warning(f"no available server for {key!r}")
        raise NoServerAvailable(key, position)

    def preference_list(self, key: str | bytes,
                        n: int | None = None) -> list[Server]:
        """Distinct available servers in the order a request would fail over.

        The first element is what `assign` returns for the same snapshot.

        Args:
            key: non-empty request key.
            n: stop after this many servers (all of them if None).

        Returns:
            list[Server]: possibly empty.
        """
        position = self._position(key)
        seen: set[Server] = set()
        servers: list[Server] = []
        for entry in self.ring.successor_from(position):
            if n is not None and len(servers) >= n:
                break
            server = entry.server
            if server in seen:
                continue
            seen.add(server)
            if server.is_available():
                servers.append(server)
        return servers

    def owner(self, key: str | bytes) -> Server:
        """The server whose replica follows the key, ignoring availability."""
        position = self._position(key)
        return next(self.ring.successor_from(position)).server

    def _position(self, key: str | bytes) -> int:
        if not isinstance(key, (str, bytes)):
            raise TypeError(f"request key must be str or bytes, got {type(key)}")
        if not key:
            raise ValueError("request key must be non-empty")
        return hash_key(key)
