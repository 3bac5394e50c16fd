"""Debug logging that costs nothing when DEBUG is off.

Messages and %-args may be zero-argument callables; they are only called
once the level check has passed:

    logger = get_lazy_logger(__name__)
    logger.debug(lambda: f"page rows: {[str(r.id) for r in rows]}")
"""

from __future__ import annotations

import logging
from typing import Any


class LazyLoggerAdapter(logging.LoggerAdapter):
    """``LoggerAdapter`` that resolves callable messages after the level check."""

    def log(self, level: int, msg: Any, *args: Any, **kwargs: Any) -> None:
        if not self.isEnabledFor(level):
            return
        if callable(msg):
            msg = msg()
        args = tuple(arg() if callable(arg) else arg for arg in args)
        super().log(level, msg, *args, **kwargs)

    def debug(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(logging.INFO, msg, *args, **kwargs)


def get_lazy_logger(name: str) -> LazyLoggerAdapter:
    return LazyLoggerAdapter(logging.getLogger(name), {})
