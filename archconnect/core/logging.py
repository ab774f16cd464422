"""Logging configuration.

Services log short event names (``follow_toggled``, ``post_created``) and
attach the details with ``extra={...}``.  ``EventFormatter`` renders those
extra fields after the message as ``key=value`` pairs so they reach stdout.
"""

import logging
import sys

from archconnect.core.config import settings

# Attributes every LogRecord carries; anything else came from ``extra``.
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}

_NOISY_LOGGERS = ("httpx", "httpcore", "hpack", "uvicorn.access")


class EventFormatter(logging.Formatter):
    """``asctime | level | logger | event key=value ...``"""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRS}
        if not fields:
            return line
        pairs = " ".join(f"{key}={value}" for key, value in sorted(fields.items()))
        head, sep, tail = line.partition("\n")
        return f"{head} {pairs}{sep}{tail}"


def setup_logging() -> None:
    """Install a single stdout handler on the root logger.

    The level comes from ``settings.LOG_LEVEL``; unknown names fall back to
    INFO.  Calling it again replaces the handler.
    """
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(
        EventFormatter(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )
    )

    root = logging.getLogger()
    root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
