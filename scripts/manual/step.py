"""step.py: helper for manual scripts."""

from ringrouter import RingRouter


def step(router: RingRouter) -> None:
    """Runs one failure cycle and shows the cluster state."""
    down = router.simulator.trigger()
    print(f"took down {down.id}")
    print(router.servers)
    print(f"outages: {router.simulator.active_outages()}")
