"""simulate.py: routes requests over a flapping cluster and reports."""
import sys
import time
from collections import Counter

from loguru import logger

from ringrouter import NoServerAvailable, RingConfig, RingRouter

logger.enable("ringrouter")


def main() -> None:
    """Routes requests for a while with the failure simulator running."""
    if len(sys.argv) < 2:
        print("usage: [uv run] python simulate.py server_id [server_id ...]")
        exit(1)

    config = RingConfig(sys.argv[1:],
                        down_duration=1.5,
                        failure_interval=0.5,
                        jitter=0.5)
    router = RingRouter(config)
    for server_id, share in router.ownership().items():
        print(f"{server_id}: owns {share:.2%} of the ring")

    counts: Counter = Counter()
    with router:
        deadline = time.monotonic() + 10
        i = 0
        while time.monotonic() < deadline:
            try:
                counts[router.assign(f"req-{i}").id] += 1
            except NoServerAvailable:
                counts["<unavailable>"] += 1
            i += 1
            time.sleep(0.01)

    total = sum(counts.values())
    print(f"\nrouted {total} requests:")
    for server_id, count in counts.most_common():
        print(f"  {server_id}: {count} ({count / total:.2%})")


if __name__ == '__main__':
    main()
