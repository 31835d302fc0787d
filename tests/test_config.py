"""test_config.py: tests for RingConfig."""
from typing import Any

import pytest

from ringrouter import ConfigurationError, RingConfig


def test_defaults() -> None:
    config = RingConfig(["A", "B"])
    assert config.server_ids == ("A", "B")
    assert config.replicas == 3
    assert config.down_duration == 2.0
    assert config.failure_interval == 1.0
    assert config.jitter == 0.0
    assert config.seed is None


def test_config_is_frozen() -> None:
    config = RingConfig(["A"])
    with pytest.raises(AttributeError):
        config.replicas = 5  # type: ignore[misc]


@pytest.mark.parametrize("kwargs", [
    {"server_ids": []},
    {"server_ids": ["A", "A"]},
    {"server_ids": ["A"], "replicas": 0},
    {"server_ids": ["A"], "replicas": 2.5},
    {"server_ids": ["A"], "down_duration": 0},
    {"server_ids": ["A"], "failure_interval": -1},
    {"server_ids": ["A"], "jitter": -0.1},
])
def test_invalid_config(kwargs: dict[str, Any]) -> None:
    """Verifies each bad parameter is rejected when the config is built.

    Args:
        kwargs: RingConfig arguments with one bad value.
    """
    with pytest.raises(ConfigurationError):
        RingConfig(**kwargs)


def test_configuration_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        RingConfig([])


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Verifies every variable is read and cast.

    Args:
        monkeypatch: pytest's environment patching fixture.
    """
    monkeypatch.setenv("RINGROUTER_SERVERS", "a, b ,c,")
    monkeypatch.setenv("RINGROUTER_REPLICAS", "10")
    monkeypatch.setenv("RINGROUTER_DOWN_DURATION", "0.5")
    monkeypatch.setenv("RINGROUTER_FAILURE_INTERVAL", "3")
    monkeypatch.setenv("RINGROUTER_JITTER", "0.25")
    monkeypatch.setenv("RINGROUTER_SEED", "99")

    config = RingConfig.from_env()

    assert config == RingConfig(("a", "b", "c"), replicas=10,
                                down_duration=0.5, failure_interval=3.0,
                                jitter=0.25, seed=99)


def test_from_env_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LB_SERVERS", "x")
    config = RingConfig.from_env(prefix="LB_")
    assert config == RingConfig(["x"])


def test_from_env_missing_servers(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("RINGROUTER_SERVERS", raising=False)
    with pytest.raises(ConfigurationError, match="roster is empty"):
        RingConfig.from_env()


def test_from_env_malformed(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RINGROUTER_SERVERS", "a")
    monkeypatch.setenv("RINGROUTER_REPLICAS", "three")
    with pytest.raises(ConfigurationError, match="RINGROUTER_REPLICAS"):
        RingConfig.from_env()


def test_ids_with_same_repr_rejected() -> None:
    """Verifies ids that would share ring positions are refused."""

    class Twin:
        def __repr__(self) -> str:
            return "twin"

    with pytest.raises(ConfigurationError, match="distinct reprs"):
        RingConfig([Twin(), Twin()])


def test_ids_with_same_text_accepted() -> None:
    config = RingConfig([1, "1"])
    assert config.server_ids == (1, "1")
