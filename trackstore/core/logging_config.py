import logging
import sys

# Third-party loggers that are chatty at DEBUG level during uploads.
_QUIET_LOGGERS = ("multipart", "python_multipart")


def _coerce_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    if level.strip().isdigit():
        return int(level)
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: int | str = logging.INFO) -> None:
    """
    Configure root logging for the application.

    - `level` accepts logging constants or names such as "debug" (LOG_LEVEL)
    - Logs go to stdout with time, level and logger name
    - Calling it again only adjusts the level
    """
    level = _coerce_level(level)
    root = logging.getLogger()

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.INFO))

    if root.handlers:
        root.setLevel(level)
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s - %(message)s",
            datefmt="%H:%M:%S",
        )
    )

    root.addHandler(handler)
    root.setLevel(level)
