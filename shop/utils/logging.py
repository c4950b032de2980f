# shop/utils/logging.py
import logging
import sys

from shop.utils.settings import LOG_LEVEL

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _root_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_FORMAT))
    return handler


def get_logger(name: str) -> logging.Logger:
    root = logging.getLogger("shop")
    if not root.handlers:
        root.addHandler(_root_handler())
        root.setLevel(LOG_LEVEL.upper())
        root.propagate = False

    # wszystko pod "shop" dzieli jeden handler
    if not name.startswith("shop"):
        name = f"shop.{name}"
    return logging.getLogger(name)
