"""config.py: construction-time settings for a RingRouter."""
import os
from dataclasses import dataclass
from typing import Any

from ._ring import DEFAULT_REPLICAS
from ._validate import (
    check_duration,
    check_jitter,
    check_replicas,
    check_roster,
)
from .errors import ConfigurationError


@dataclass(frozen=True)
class RingConfig:
    """Everything needed to build a ring and its failure simulator.

    Validated on creation; an invalid config raises ConfigurationError.

    Attributes:
        server_ids: roster of server identities. Non-empty and unique,
            with distinct reprs.
        replicas: virtual replicas per server.
        down_duration: seconds a failed server stays unavailable.
        failure_interval: seconds between simulated failures.
        jitter: extra random delay, uniform in [0, jitter], per interval.
        seed: seeds the simulator's random choices.
    """
    server_ids: tuple[Any, ...]
    replicas: int = DEFAULT_REPLICAS
    down_duration: float = 2.0
    failure_interval: float = 1.0
    jitter: float = 0.0
    seed: int | None = None

    def __post_init__(self) -> None:
        # accept any iterable roster, store it as a tuple
        object.__setattr__(self, "server_ids", tuple(self.server_ids))
        self.validate()

    def validate(self) -> None:
        """Checks the roster and parameters.

        Raises:
            ConfigurationError: describing the first problem found.
        """
        check_roster(self.server_ids)
        check_replicas(self.replicas)
        check_duration("down_duration", self.down_duration)
        check_duration("failure_interval", self.failure_interval)
        check_jitter(self.jitter)

    @classmethod
    def from_env(cls, prefix: str = "RINGROUTER_") -> "RingConfig":
        """Builds a config from environment variables.

        Reads `<prefix>SERVERS` (comma separated, required) and optionally
        `REPLICAS`, `DOWN_DURATION`, `FAILURE_INTERVAL`, `JITTER` and `SEED`.

        Raises:
            ConfigurationError: a variable is missing or malformed.
        """
        servers = os.environ.get(f"{prefix}SERVERS", "")
        server_ids = tuple(s.strip() for s in servers.split(",") if s.strip())

        kwargs: dict[str, Any] = {}
        for field, cast in (("replicas", int),
                            ("down_duration", float),
                            ("failure_interval", float),
                            ("jitter", float),
                            ("seed", int)):
            raw = os.environ.get(f"{prefix}{field.upper()}")
            if raw is None:
                continue
            try:
                kwargs[field] = cast(raw)
            except ValueError as e:
                raise ConfigurationError(
                    f"invalid {prefix}{field.upper()}: {raw!r}") from e

        return cls(server_ids, **kwargs)
