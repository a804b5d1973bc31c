from __future__ import annotations
import logging

from moonlight_core.logging_config import setup_logging


def test_file_logging_and_handler_replacement(tmp_path):
    logger = setup_logging(tmp_path, level="DEBUG", log_to_console=False)
    assert logger.level == logging.DEBUG
    (first,) = logger.handlers
    logging.getLogger("moonlight_core.game").info("started")
    first.flush()
    (log_file,) = tmp_path.glob("moonlight_*.log")
    assert "started" in log_file.read_text(encoding="utf-8")

    logger = setup_logging(tmp_path, log_to_file=False, log_to_console=True)
    assert first not in logger.handlers
    assert first.stream is None  # closed, not just dropped
    assert len(logger.handlers) == 1
    assert logger.level == logging.INFO

    setup_logging(log_to_file=False, log_to_console=False)
    assert logger.handlers == []
