"""_validate.py: construction-time checks shared by ring, simulator and config."""
from collections.abc import Sequence
from typing import Any

from .errors import ConfigurationError


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def check_roster(server_ids: Sequence[Any]) -> None:
    """Rejects an empty roster or ids that would share ring positions.

    Replica positions are derived from `repr(server_id)`, so two ids are only
    distinguishable on the ring if their reprs differ.

    Raises:
        ConfigurationError: empty roster, duplicate ids, or ids with the
            same repr.
    """
    if not server_ids:
        raise ConfigurationError("server roster is empty")
    if len(set(server_ids)) != len(server_ids):
        raise ConfigurationError(
            f"duplicate server ids in roster: {list(server_ids)}")
    if len({repr(sid) for sid in server_ids}) != len(server_ids):
        raise ConfigurationError(
            f"server ids must have distinct reprs: {list(server_ids)}")


def check_replicas(replicas: Any) -> None:
    if isinstance(replicas, bool) or not isinstance(replicas, int) \
            or replicas < 1:
        raise ConfigurationError(
            f"replicas must be a positive integer, got {replicas!r}")


def check_duration(name: str, value: Any) -> None:
    if not is_number(value) or value <= 0:
        raise ConfigurationError(
            f"{name} must be a positive number, got {value!r}")


def check_jitter(jitter: Any) -> None:
    if not is_number(jitter) or jitter < 0:
        raise ConfigurationError(
            f"jitter must be a non-negative number, got {jitter!r}")
