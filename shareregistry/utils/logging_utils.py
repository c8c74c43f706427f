import logging
import sys

_LOGGING_CONFIGURED = False

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: int | str = logging.INFO) -> None:
    """
    Configure the root logger once.

    Safe to call multiple times; later calls only adjust the level.
    """
    global _LOGGING_CONFIGURED

    root = logging.getLogger()
    root.setLevel(level)
    if _LOGGING_CONFIGURED:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)

    _LOGGING_CONFIGURED = True
