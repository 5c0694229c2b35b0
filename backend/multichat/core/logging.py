import logging

from multichat.core.config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str | None = None) -> None:
    root_logger = logging.getLogger()
    resolved = (level or settings.LOG_LEVEL or "INFO").upper()
    if root_logger.handlers:
        root_logger.setLevel(resolved)
        return
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    # SDK transports are chatty at INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)
