"""_ring.py: the ordered ring of virtual replicas."""
import bisect
from collections.abc import Iterable, Iterator
from typing import Any, NamedTuple

from loguru import logger

from ._hash import SPACE, hash_key, replica_key
from ._validate import check_replicas, check_roster
from .server import Server

DEFAULT_REPLICAS: int = 3


class RingEntry(NamedTuple):
    """One virtual replica: a position on the ring and the server it maps to."""
    position: int
    server: Server


class Ring:
    """Consistent hash ring built once from a fixed roster of servers.

    Each server is placed `replicas` times. Entries are kept sorted by
    position, so finding the successor of a position is a binary search.
    Membership never changes after construction; only the availability of
    the referenced servers does.
    """
    replicas: int
    collisions: int
    _positions: list[int]
    _entries: list[RingEntry]
    _servers: list[Server]

    def __init__(self,
                 servers: Iterable[Server],
                 replicas: int = DEFAULT_REPLICAS,
    ) -> None:
        """Places every replica of every server on the ring.

        Args:
            servers: the full roster. Must be non-empty with unique ids
                whose reprs differ.
            replicas: virtual replicas per server.

        Raises:
            ConfigurationError: empty roster, duplicate or indistinguishable
                ids, or replicas < 1.
        """
        roster = list(servers)
        check_roster([s.id for s in roster])
        check_replicas(replicas)

        self.replicas = replicas
        self.collisions = 0
        self._servers = roster

        slots: dict[int, Server] = {}
        for server in roster:
            for i in range(replicas):
                position = hash_key(replica_key(i, server.id))
                previous = slots.get(position)
                if previous is not None:
                    # last write wins
                    self.collisions += 1
                    logger.debug(f"ring collision at {position}: "
                                 f"{previous.id} replaced by {server.id}")
                slots[position] = server

        self._positions = sorted(slots)
        self._entries = [RingEntry(p, slots[p]) for p in self._positions]
        logger.debug(f"ring built: {len(roster)} servers, "
                     f"{replicas} replicas, {len(self._entries)} entries")

    @property
    def servers(self) -> list[Server]:
        """Servers on the ring, in roster order."""
        return list(self._servers)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[RingEntry]:
        return iter(self._entries)

    def successor_from(self, position: int) -> Iterator[RingEntry]:
        """Walks the ring clockwise from a position.

        Starts at the first entry whose position is >= `position`, goes up
        to the largest position, then wraps around to the smallest. Every
        entry is produced exactly once.

        Args:
            position: starting point in the hash space.

        Yields:
            RingEntry: entries in ring order.
        """
        count = len(self._entries)
        start = bisect.bisect_left(self._positions, position)
        for step in range(count):
            yield self._entries[(start + step) % count]

    def positions_of(self, server_id: Any) -> list[int]:
        """Ring positions currently owned by a server, ascending."""
        return [e.position for e in self._entries if e.server.id == server_id]

    def ownership(self) -> dict[Any, float]:
        """Fraction of the hash space each server owns.

        An entry owns the arc after the previous entry up to and including
        its own position; the first entry also owns the wrap-around arc.

        Returns:
            dict: server id -> share of the ring; shares sum to 1.0.
        """
        shares: dict[Any, float] = {s.id: 0.0 for s in self._servers}
        previous = self._positions[-1] - SPACE
        for entry in self._entries:
            shares[entry.server.id] += (entry.position - previous) / SPACE
            previous = entry.position
        return shares
