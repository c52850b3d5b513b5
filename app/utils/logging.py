# app/utils/logging.py
import logging
import sys

from app.utils.settings import LOG_LEVEL

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_root = logging.getLogger("app")
if not _root.handlers:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_FORMAT))
    _root.addHandler(handler)
    _root.setLevel(LOG_LEVEL.upper())
    _root.propagate = False


def get_logger(name: str) -> logging.Logger:
    # wszystkie loggery pod "app" dziela jeden handler
    if not name.startswith("app"):
        name = f"app.{name}"
    return logging.getLogger(name)
