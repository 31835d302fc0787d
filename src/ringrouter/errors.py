"""errors.py: exceptions raised by ringrouter."""


class RingRouterError(Exception):
    """Base class for ringrouter errors."""


class ConfigurationError(RingRouterError, ValueError):
    """Raised at construction when the roster or parameters are unusable.

    The ring cannot be built from the given input; this is fatal to startup.
    """


class NoServerAvailable(RingRouterError):
    """Raised when a routing call walks the whole ring without finding an
    available server.

    Recoverable: the ring and simulator keep running, and a later call may
    succeed once a server comes back.

    Attributes:
        key: the request key that could not be routed.
        position: the key's position on the ring.
    """

    def __init__(self, key: str | bytes, position: int) -> None:
        self.key = key
        self.position = position
        super().__init__(f"no server available for {key!r} (position {position})")
