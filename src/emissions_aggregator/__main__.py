# emissions_aggregator/__main__.py

import logging
import time

from emissions_aggregator import configure_logging
from emissions_aggregator.cli import run_batch

logger = logging.getLogger("emissions_aggregator.main")


def main() -> None:
    configure_logging()

    start = time.monotonic()

    # process every registered adapter
    run_batch(None)

    duration = time.monotonic() - start

    logger.info("Completed in %.2f seconds", duration)


if __name__ == "__main__":
    main()
