"""Command line entry point and logging setup."""

from __future__ import annotations

import logging
import sys

from pydantic import ValidationError

from results_cleaner.config import Settings, get_settings
from results_cleaner.errors import ResultsCleanerError
from results_cleaner.transform.service import SUCCESS_MESSAGE, clean_results

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Send log records to stderr so stdout only carries the confirmation."""
    logging.basicConfig(
        level=settings.log_level,
        format=settings.log_format,
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def main() -> int:
    """Clean ``input.json`` into ``output.json`` and return the exit status."""
    try:
        settings = get_settings()
    except ValidationError as exc:
        logging.basicConfig(stream=sys.stderr)
        logger.error(f"Invalid configuration: {exc}")
        return 1
    configure_logging(settings)

    try:
        clean_results(settings=settings)
    except ResultsCleanerError as exc:
        logger.error(str(exc))
        return 1

    print(SUCCESS_MESSAGE)
    return 0


if __name__ == "__main__":
    sys.exit(main())
