"""Tests for logging setup."""

import logging
import logging.handlers

import pytest

from notechat.config.settings import settings
from notechat.utils import logging as logging_utils


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if isinstance(handler, logging.handlers.RotatingFileHandler):
            handler.close()
            root.removeHandler(handler)
    root.setLevel(level)
    logging.captureWarnings(False)


def test_setup_logging_writes_rotating_file(tmp_path, restore_root_logger) -> None:
    log_path = logging_utils.setup_logging(
        logging.DEBUG, log_dir=tmp_path, console=False, force=True
    )

    logging.getLogger("notechat.test").info("hello log")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert log_path == tmp_path / "notechat.log"
    assert logging_utils.get_log_path() == log_path
    assert any(
        isinstance(handler, logging.handlers.RotatingFileHandler)
        for handler in logging.getLogger().handlers
    )
    assert "hello log" in log_path.read_text(encoding="utf-8")
    assert logging.getLogger("httpx").level == logging.WARNING


def test_log_dir_from_environment(tmp_path, monkeypatch, restore_root_logger) -> None:
    monkeypatch.setenv("NOTECHAT_LOG_DIR", str(tmp_path / "logs"))

    log_path = logging_utils.setup_logging(console=False, force=True)

    assert log_path == tmp_path / "logs" / "notechat.log"
    assert log_path.parent.is_dir()


def test_default_log_dir_is_the_configured_logs_dir(
    tmp_path, monkeypatch, restore_root_logger
) -> None:
    monkeypatch.delenv("NOTECHAT_LOG_DIR", raising=False)
    monkeypatch.setattr(settings, "logs_dir", tmp_path / "configured")

    log_path = logging_utils.setup_logging(console=False, force=True)

    assert log_path == tmp_path / "configured" / "notechat.log"
    assert logging.getLogger("openai").level == logging.WARNING
