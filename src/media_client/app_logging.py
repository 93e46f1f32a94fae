"""Logging configuration helpers."""

import logging

_FORMAT = "%(levelname)s: %(name)s: %(message)s"


def configure_logging(level: str | int = "INFO") -> None:
    """Route client logs to one stream handler at the given level.

    Unknown level names fall back to INFO. httpx request lines are shown
    only when running at DEBUG.
    """
    resolved = _resolve_level(level)
    logger = logging.getLogger("media_client")
    logger.setLevel(resolved)
    logging.getLogger("httpx").setLevel(
        logging.DEBUG if resolved <= logging.DEBUG else logging.WARNING
    )
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False


def _resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    return logging.getLevelNamesMapping().get(level.strip().upper(), logging.INFO)
