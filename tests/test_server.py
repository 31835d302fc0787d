"""test_server.py: tests for the Server class."""
import threading
from unittest.mock import Mock

import pytest
from loguru import logger

from ringrouter import Server

logger.enable("ringrouter")


@pytest.fixture
def server() -> Server:
    """Provides a fresh, available server."""
    return Server("A")


def test_new_server_is_available(server: Server) -> None:
    assert server.id == "A"
    assert server.is_available() is True


def test_set_availability(server: Server) -> None:
    """Verifies flips are visible and report whether anything changed.

    Args:
        server: A fixture providing a basic Server instance.
    """
    assert server.set_availability(False) is True
    assert server.is_available() is False

    # same value again is not a change
    assert server.set_availability(False) is False
    assert server.is_available() is False

    assert server.set_availability(True) is True
    assert server.is_available() is True


def test_listener_called_on_change_only(server: Server) -> None:
    """Verifies subscribers see each real transition exactly once.

    Args:
        server: A fixture providing a basic Server instance.
    """
    listener = Mock()
    server.subscribe(listener)

    server.set_availability(True)  # already available
    listener.assert_not_called()

    server.set_availability(False)
    listener.assert_called_once_with("A", False)

    server.set_availability(True)
    assert listener.call_count == 2
    listener.assert_called_with("A", True)


def test_failing_listener_does_not_break_flip(server: Server) -> None:
    """Verifies a raising listener neither propagates nor blocks others.

    Args:
        server: A fixture providing a basic Server instance.
    """
    bad = Mock(side_effect=RuntimeError("listener bug"))
    good = Mock()
    server.subscribe(bad)
    server.subscribe(good)

    assert server.set_availability(False) is True

    assert server.is_available() is False
    bad.assert_called_once_with("A", False)
    good.assert_called_once_with("A", False)


def test_equality_and_hash_by_id() -> None:
    a1 = Server("A")
    a2 = Server("A")
    a2.set_availability(False)

    assert a1 == a2
    assert hash(a1) == hash(a2)
    assert a1 != Server("B")
    assert a1 != "A"
    assert len({a1, a2, Server("B")}) == 2


def test_repr_shows_state(server: Server) -> None:
    assert repr(server) == "Server('A', up)"
    server.set_availability(False)
    assert repr(server) == "Server('A', down)"


def test_concurrent_flips_and_reads(server: Server) -> None:
    """Hammers one server from writer and reader threads.

    Readers must only ever see a bool, and the final state must be the last
    value written.

    Args:
        server: A fixture providing a basic Server instance.
    """
    seen: set = set()
    stop = threading.Event()

    def writer() -> None:
        for i in range(2000):
            server.set_availability(i % 2 == 0)

    def reader() -> None:
        while not stop.is_set():
            seen.add(server.is_available())

    readers = [threading.Thread(target=reader) for _ in range(4)]
    for t in readers:
        t.start()
    writers = [threading.Thread(target=writer) for _ in range(2)]
    for t in writers:
        t.start()
    for t in writers:
        t.join()
    stop.set()
    for t in readers:
        t.join()

    assert seen <= {True, False}
    # both writers end on i == 1999, i.e. unavailable
    assert server.is_available() is False


def test_id_is_read_only(server: Server) -> None:
    """Verifies the id cannot be reassigned once the server is shared.

    Args:
        server: A fixture providing a basic Server instance.
    """
    with pytest.raises(AttributeError):
        server.id = "B"  # type: ignore[misc]
    assert server.id == "A"
    assert server == Server("A")
