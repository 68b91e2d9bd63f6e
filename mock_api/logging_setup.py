import logging
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: Optional[str] = None, access_log: bool = False) -> int:
    """
    Console logging for the mock server process.

    The app logs every request itself (``mock_api`` logger), so Werkzeug's
    own access log is held at WARNING unless ``access_log`` is set or the
    level is DEBUG. Returns the numeric level applied to the root logger.
    """
    level_name = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    level_value = getattr(logging, level_name, None)
    if not isinstance(level_value, int):
        level_value = logging.INFO

    logging.basicConfig(level=level_value, format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    if access_log or level_value <= logging.DEBUG:
        logging.getLogger("werkzeug").setLevel(level_value)
    else:
        logging.getLogger("werkzeug").setLevel(logging.WARNING)
    return level_value
