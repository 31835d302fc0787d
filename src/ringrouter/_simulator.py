"""_simulator.py: background availability flapping."""
import random
import threading
from collections.abc import Iterable
from typing import Any

from loguru import logger

from ._validate import check_duration, check_jitter, check_roster
from .server import Server


class FailureSimulator:
    """Takes random servers down for a while, over and over.

    Every `failure_interval` seconds (plus up to `jitter` more) one server is
    picked at random and marked unavailable for `down_duration` seconds. Each
    outage runs on its own daemon thread, so outages overlap. When two
    outages hit the same server it stays down until the last one ends.

    Each run owns a stop event. `stop()` cancels the outages started under
    the current event and installs a fresh one, so outages triggered later
    still last `down_duration`.

    The simulator only ever flips availability flags; it never touches the
    ring and never raises into routing code.
    """
    down_duration: float
    failure_interval: float
    jitter: float
    _servers: list[Server]
    _rng: random.Random
    _stop_event: threading.Event
    _loop_thread: threading.Thread | None
    _outage_threads: dict[threading.Thread, threading.Event]
    _outages: dict[Any, int]

    def __init__(self,
                 servers: Iterable[Server],
                 down_duration: float,
                 failure_interval: float,
                 jitter: float = 0.0,
                 seed: int | None = None,
    ) -> None:
        """Initializes a stopped simulator.

        Args:
            servers: roster to pick victims from.
            down_duration: seconds a server stays unavailable per outage.
            failure_interval: seconds between outages.
            jitter: extra random delay, uniform in [0, jitter], per interval.
            seed: seeds the victim and jitter choices.

        Raises:
            ConfigurationError: empty roster or invalid durations.
        """
        self._servers = list(servers)
        check_roster([s.id for s in self._servers])
        check_duration("down_duration", down_duration)
        check_duration("failure_interval", failure_interval)
        check_jitter(jitter)

        self.down_duration = down_duration
        self.failure_interval = failure_interval
        self.jitter = jitter
        self._rng = random.Random(seed)
        self._stop_event = threading.Event()
        self._lock = threading.RLock()
        self._loop_thread = None
        self._outage_threads = {}
        self._outages = {}

    @property
    def running(self) -> bool:
        """True while the failure loop thread is alive."""
        return self._loop_thread is not None and self._loop_thread.is_alive()

    def start(self) -> None:
        """Starts the failure loop on a daemon thread."""
        if self.running:
            return
        self._loop_thread = threading.Thread(
            target=self._run_loop,
            args=(self._stop_event,),
            daemon=True
        )
        self._loop_thread.start()
        logger.info(f"failure simulator started: "
                    f"{len(self._servers)} servers, "
                    f"interval {self.failure_interval}s, "
                    f"down {self.down_duration}s")

    def stop(self) -> None:
        """Stops the loop and ends every outage in flight.

        Servers taken down by the simulator are available again once this
        returns. Outages triggered afterwards run for their full duration.
        """
        with self._lock:
            stop_event = self._stop_event
            self._stop_event = threading.Event()
        stop_event.set()
        if self._loop_thread is not None:
            self._loop_thread.join()
            self._loop_thread = None
        with self._lock:
            pending = [thread for thread, event in self._outage_threads.items()
                       if event is stop_event]
        for thread in pending:
            thread.join()
        logger.info("failure simulator stopped")

    def trigger(self) -> Server:
        """Runs one failure cycle now.

        Returns:
            Server: the server that was taken down.
        """
        with self._lock:
            return self._trigger(self._stop_event)

    def _trigger(self, stop_event: threading.Event) -> Server:
        with self._lock:
            server = self._rng.choice(self._servers)
            self._begin_outage(server)
            thread = threading.Thread(
                target=self._hold,
                args=(server, self.down_duration, stop_event),
                daemon=True
            )
            self._outage_threads[thread] = stop_event
        thread.start()
        return server

    def active_outages(self) -> dict[Any, int]:
        """Server id -> number of outages currently holding it down."""
        with self._lock:
            return dict(self._outages)

    def _next_delay(self) -> float:
        if not self.jitter:
            return self.failure_interval
        with self._lock:
            return self.failure_interval + self._rng.uniform(0, self.jitter)

    def _run_loop(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(self._next_delay()):
            try:
                self._trigger(stop_event)
            except Exception:
                logger.exception("failure simulator cycle failed")

    def _hold(self, server: Server, duration: float,
              stop_event: threading.Event) -> None:
        try:
            stop_event.wait(duration)
        finally:
            with self._lock:
                self._end_outage(server)
                del self._outage_threads[threading.current_thread()]

    def _begin_outage(self, server: Server) -> None:
        count = self._outages.get(server.id, 0) + 1
        self._outages[server.id] = count
        logger.info(f"outage started on {server.id} ({count} active)")
        server.set_availability(False)

    def _end_outage(self, server: Server) -> None:
        count = self._outages[server.id] - 1
        if count:
            self._outages[server.id] = count
            return
        del self._outages[server.id]
        logger.info(f"outage ended on {server.id}")
        server.set_availability(True)

