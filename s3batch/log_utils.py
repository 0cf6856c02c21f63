import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Union

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _level(value: Union[str, int]) -> int:
    if isinstance(value, int):
        return value
    resolved = logging.getLevelName(str(value).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logger(
    path: Path,
    name: str = "s3batch",
    level: Union[str, int] = "INFO",
    max_bytes: int = 2_000_000,
    backups: int = 3,
) -> logging.Logger:
    """Rotating file logger for the package; S3BATCH_LOG_STDOUT=1 also logs to stderr.

    Module loggers (s3batch.commands, s3batch.retry) propagate here, so the
    resolver's DEBUG lines show up with level "debug" in the config.
    """
    logger = logging.getLogger(name)
    logger.setLevel(_level(level))
    if logger.handlers:
        return logger
    path.parent.mkdir(parents=True, exist_ok=True)
    fmt = logging.Formatter(LOG_FORMAT)
    fh = RotatingFileHandler(path, encoding="utf-8", maxBytes=max_bytes, backupCount=backups)
    fh.setFormatter(fmt)
    logger.addHandler(fh)
    if os.environ.get("S3BATCH_LOG_STDOUT") == "1":
        sh = logging.StreamHandler()
        sh.setFormatter(fmt)
        logger.addHandler(sh)
    return logger
