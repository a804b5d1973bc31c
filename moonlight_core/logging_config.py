# moonlight_core/logging_config.py
"""
Logging for the app process. Engine modules use ``logging.getLogger(__name__)``,
so one handler set on the ``moonlight_core`` logger covers all of them.
"""
from __future__ import annotations
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

ROOT_LOGGER = "moonlight_core"
FILE_FORMAT = "%(asctime)s %(levelname)-7s %(name)s:%(lineno)d  %(message)s"
CONSOLE_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def _reset_handlers(logger: logging.Logger):
    # close before dropping, or every rerun leaks an open log file
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

def _file_handler(log_dir: Path) -> logging.Handler:
    log_dir.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    h = logging.FileHandler(log_dir / f"moonlight_{stamp}.log", encoding="utf-8")
    h.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return h

def _console_handler() -> logging.Handler:
    h = logging.StreamHandler(sys.stderr)
    h.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    return h

def setup_logging(
    log_dir: Optional[Union[str, Path]] = None,
    level: Union[int, str] = logging.INFO,
    log_to_file: bool = True,
    log_to_console: bool = True,
) -> logging.Logger:
    """
    Attach handlers to the ``moonlight_core`` logger, replacing any from a
    previous call. ``level`` may be a number or a name such as "DEBUG".
    Log files go to ``log_dir`` (default ./logs), one per call.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    _reset_handlers(logger)
    logger.setLevel(logging.getLevelName(level.upper()) if isinstance(level, str) else level)

    handlers: List[logging.Handler] = []
    if log_to_file:
        handlers.append(_file_handler(Path(log_dir or "logs")))
    if log_to_console:
        handlers.append(_console_handler())
    for h in handlers:
        logger.addHandler(h)
    return logger
