import logging
import sys

from ignitia.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Configure the root logger for the running process."""
    resolved = (level or settings.LOG_LEVEL).upper()
    # No-op for handlers when the server or test runner already configured the root logger.
    logging.basicConfig(level=resolved, format=LOG_FORMAT, stream=sys.stdout)
    logging.getLogger().setLevel(resolved)
    # The SDK's HTTP client is chatty at INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)
