import logging
import sys

LOG_FORMAT = "[%(name)s] %(levelname)s %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Attach a stdout handler to the "storefront" logger tree.

    Safe to call more than once (app startup + test sessions); the handler is
    only added the first time.
    """
    log = logging.getLogger("storefront")
    log.setLevel(level.upper())
    if not log.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(logging.Formatter(LOG_FORMAT))
        log.addHandler(h)
    return log


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"storefront.{name}")
