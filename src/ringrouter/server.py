# server.py

import threading
from typing import Any, Callable

from loguru import logger

AvailabilityCallback = Callable[[Any, bool], None]


class Server:
    """
    Represents a routable endpoint on the ring.

    The id is fixed for the life of the process. Availability is the only
    mutable state and is read and written under a per-server lock, so a
    routing call sees either the old or the new value of a flip.

    Attributes:
        id (Any): opaque, hashable identifier of the server.

    Servers compare and hash by id, so the same object can be referenced from
    many ring entries and looked up by id.
    """
    __slots__ = ('_id', '_available', '_lock', '_listeners')


    def __init__(self, id: Any) -> None:
        self._id = id
        self._available: bool = True
        self._lock = threading.Lock()
        self._listeners: list[AvailabilityCallback] = []



    @property
    def id(self) -> Any:
        """Identifier of the server (read-only)."""
        return self._id



    def is_available(self) -> bool:
        """Returns the current availability of the server."""
        with self._lock:
            return self._available



    def set_availability(self, available: bool) -> bool:
        """
        Updates the availability flag.

        Listeners registered with `subscribe` are called after the lock is
        released, and only when the value actually changed.

        Args:
            available (bool): the new state.

        Returns:
            bool: True if the flag changed.
        """
        with self._lock:
            changed = self._available != available
            self._available = available
            listeners = list(self._listeners) if changed else []

        if changed:
            logger.info(f"server {self.id} is now "
                        f"{'available' if available else 'unavailable'}")
        for listener in listeners:
            try:
                listener(self.id, available)
            except Exception:
                logger.exception(f"availability listener failed for {self.id}")
        return changed



    def subscribe(self, callback: AvailabilityCallback) -> None:
        """
        Registers a callback for availability changes.

        Args:
            callback: called as `callback(server_id, available)`.
        """
        with self._lock:
            self._listeners.append(callback)



    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Server):
            return False
        return self.id == other.id



    def __hash__(self) -> int:
        return hash(self.id)



    def __repr__(self) -> str:
        state = "up" if self.is_available() else "down"
        return f"Server({self.id!r}, {state})"
