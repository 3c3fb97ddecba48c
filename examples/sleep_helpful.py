"""Standalone version of ``helpful-demo sleep`` using the ``@main`` entry point.

    $ python examples/sleep_helpful.py some/non-existent/config.json
    [Errno 2] No such file or directory: 'some/non-existent/config.json'

    Call history (recent first):
       0: config::load
            with path="some/non-existent/config.json"
              at .../helpful/cli.py:41
       1: cli::run
            with self=Cli { config: "some/non-existent/config.json" }
              at .../helpful/cli.py:58

Set HELPFUL_BACKTRACE=1 to append the raw backtrace.
"""
import asyncio
import sys
from pathlib import Path

import helpful
from helpful.cli import Cli
from helpful.utils.logging import init


@helpful.main
def run() -> None:
    init()
    asyncio.run(Cli(config=Path(sys.argv[1])).run())


if __name__ == "__main__":
    run()
