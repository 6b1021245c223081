"""Логгер проекта creepy.

stdout занят результатом обхода (JSON или пути к отчётам), поэтому логи
пишутся в stderr и, по желанию, в файл с ротацией. CLI переконфигурирует
логгер из ``--log-level`` / ``--log-file`` / ``--log-format``.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Union

DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME = "creepy"


def configure(
    level: Union[int, str] = "INFO",
    log_file: Union[str, Path, None] = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Заменяет обработчики логгера creepy: stderr и файл, если он указан."""
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)
    for old in lg.handlers:
        old.close()
    lg.handlers.clear()
    formatter = logging.Formatter(log_format)

    stream = logging.StreamHandler(sys.stderr)
    stream.setFormatter(formatter)
    lg.addHandler(stream)

    if log_file is not None:
        # 5 MiB x 3
        rotating = RotatingFileHandler(str(log_file), maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8")
        rotating.setFormatter(formatter)
        lg.addHandler(rotating)

    lg.propagate = False
    return lg


logger: logging.Logger = configure()

__all__ = ["logger", "configure", "DEFAULT_FORMAT", "LOGGER_NAME"]
