"""ringrouter.py: ringrouter api."""
from types import TracebackType
from typing import Any

from ._ring import Ring
from ._router import RequestRouter
from ._simulator import FailureSimulator
from .config import RingConfig
from .server import AvailabilityCallback, Server


class RingRouter:
    """Interface for routing requests over a consistent hash ring."""
    config: RingConfig
    _servers: dict[Any, Server]
    _ring: Ring
    _router: RequestRouter
    _simulator: FailureSimulator

    def __init__(self, config: RingConfig) -> None:
        """Builds the servers, the ring and the failure simulator.

        Nothing runs in the background until `start()` is called.

        Args:
            config: roster and parameters, validated by RingConfig.
        """
        self.config = config
        self._servers = {sid: Server(sid) for sid in config.server_ids}
        self._ring = Ring(self._servers.values(), replicas=config.replicas)
        self._router = RequestRouter(self._ring)
        self._simulator = FailureSimulator(
            self._servers.values(),
            down_duration=config.down_duration,
            failure_interval=config.failure_interval,
            jitter=config.jitter,
            seed=config.seed,
        )

    @property
    def servers(self) -> list[Server]:
        """Every server in the roster."""
        return list(self._servers.values())

    @property
    def ring(self) -> Ring:
        """The ring built from the roster. Its entries never change."""
        return self._ring

    @property
    def simulator(self) -> FailureSimulator:
        """The failure simulator driven by `start()` and `stop()`."""
        return self._simulator

    def server(self, server_id: Any) -> Server:
        """Looks up a server by id.

        Raises:
            KeyError: no server with that id.
        """
        return self._servers[server_id]

    def start(self) -> None:
        """Starts simulating failures in the background."""
        self._simulator.start()

    def stop(self) -> None:
        """Stops the failure simulator and restores the servers it took down.

        Should be called before program exit; the simulator threads are
        daemons, so skipping it does not hang the interpreter.
        """
        self._simulator.stop()

    def assign(self, key: str | bytes) -> Server:
        """Routes a request to the nearest available server.

        Args:
            key: non-empty request key.

        Raises:
            NoServerAvailable: every server is currently unavailable.
        """
        return self._router.assign(key)

    def preference_list(self, key: str | bytes,
                        n: int | None = None) -> list[Server]:
        """Available servers in failover order for a key."""
        return self._router.preference_list(key, n)

    def subscribe(self, callback: AvailabilityCallback) -> None:
        """Calls `callback(server_id, available)` on every availability change."""
        for server in self._servers.values():
            server.subscribe(callback)

    def ownership(self) -> dict[Any, float]:
        """Share of the hash space owned by each server id."""
        return self._ring.ownership()

    def __enter__(self) -> "RingRouter":
        self.start()
        return self

    def __exit__(self,
                 exc_type: type[BaseException] | None,
                 exc: BaseException | None,
                 tb: TracebackType | None,
    ) -> None:
        self.stop()
