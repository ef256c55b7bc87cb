import logging
import sys

from todo_api.config import settings


def setup_logging(level: str | None = None, error_log_path: str | None = None) -> None:
    """
    Configure the ``todo_api`` logger tree:
    - console handler at LOG_LEVEL
    - error file handler (ERROR and up) when ERROR_LOG_PATH is set

    Safe to call more than once; handlers are replaced, not stacked.
    """
    level = (level or settings.LOG_LEVEL).upper()
    error_log_path = error_log_path if error_log_path is not None else settings.ERROR_LOG_PATH

    logger = logging.getLogger("todo_api")
    logger.setLevel(level)
    logger.propagate = False

    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s [%(process)d] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(level)
    ch.setFormatter(fmt)
    logger.addHandler(ch)

    if error_log_path:
        fh = logging.FileHandler(error_log_path, encoding="utf-8", delay=True)
        fh.setLevel(logging.ERROR)
        fh.setFormatter(fmt)
        logger.addHandler(fh)
