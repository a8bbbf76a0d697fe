import logging
import os
from pathlib import Path


def _env_level(default: int) -> int:
    name = os.environ.get("LANCEA_LOG_LEVEL")
    if not name:
        return default
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else default


def get_logger(name: str, level=logging.INFO) -> logging.Logger:
    """Get a named logger with the engine's standard formatting.

    Example:
        logger = get_logger(__name__)
        logger.info("provider registry ready")

    ``LANCEA_LOG_LEVEL`` overrides ``level`` when set. Records go to stderr and
    to ``$LANCEA_LOG_DIR/<name>.log`` (default ``log/``).

    Returns:
        logging.Logger: Configured logger instance.
    """
    level = _env_level(level)
    logger = logging.getLogger(name)
    logs_dir = Path(os.environ.get("LANCEA_LOG_DIR", "log"))
    try:
        logs_dir.mkdir(parents=True, exist_ok=True)
    except OSError:
        # no writable log directory, stream only
        logs_dir = None

    # avoid adding duplicate handlers if called repeatedly (common in tests)
    if logger.handlers:
        logger.setLevel(level)
        return logger

    filehandler = None
    if logs_dir is not None:
        filehandler = logging.FileHandler(str(logs_dir / f"{name}.log"), encoding="utf-8")
    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        "%(asctime)s     || %(name)s \n%(levelname)s   || %(message)s \n",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    if filehandler is not None:
        filehandler.setFormatter(formatter)
        logger.addHandler(filehandler)

    logger.setLevel(level)
    # stop passing records to the root logger (avoid duplicated messages)
    logger.propagate = False

    logger.debug("logger '%s' initialized with level %s", name, logging.getLevelName(level))
    return logger
