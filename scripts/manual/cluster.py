"""cluster.py: builds a router and drops into a repl for debugging."""
import sys

import IPython
from loguru import logger
from step import step  #type: ignore

from ringrouter import RingConfig, RingRouter

logger.enable("ringrouter")


def main() -> None:
    """Builds a router over the given servers without background failures."""
    if len(sys.argv) < 2:
        print("usage: [uv run] python cluster.py server_id [server_id ...]")
        exit(1)

    router = RingRouter(RingConfig(sys.argv[1:], down_duration=30.0))
    print(f"ring has {len(router.ring)} entries", file=sys.stderr)
    repl_locals = {
        'router': router,
        'step': step,
    }
    print("starting repl. access `router`, fail a server with `step(router)`")
    IPython.embed(user_ns=repl_locals)
    router.stop()


if __name__ == '__main__':
    main()
