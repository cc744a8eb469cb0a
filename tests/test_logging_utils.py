from __future__ import annotations

import logging

from logging.handlers import RotatingFileHandler
from pathlib import Path

from bizflows.logging import redact, setup_file_logger


def test_redact_scrubs_key_names_and_values(monkeypatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test-123")
    text = "OPENAI_API_KEY=sk-test-123 rejected"
    assert redact(text) == "<REDACTED_KEY>=<REDACTED_KEY> rejected"
    assert redact("") == ""


def test_setup_file_logger_is_idempotent(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "bizflows.log"
    name = "bizflows.test_logging"
    logger = setup_file_logger(log_file, name=name)
    setup_file_logger(log_file, name=name)
    handlers = [
        handler
        for handler in logger.handlers
        if isinstance(handler, RotatingFileHandler)
    ]
    assert len(handlers) == 1

    logger.info("hello file")
    handlers[0].flush()
    assert "hello file" in log_file.read_text()

    for handler in handlers:
        logger.removeHandler(handler)
        handler.close()
    assert logger.level == logging.INFO
