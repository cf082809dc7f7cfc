# tests/test_logging_conf.py
"""
Logging Configuration Tests

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- xchange.shared.logging_conf (setup_logging)
"""
import logging
from logging.handlers import RotatingFileHandler

import pytest  # Testing framework for writing and running tests

from xchange.shared.logging_conf import setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    for name in ("urllib3", "httpx", "telegram"):
        logging.getLogger(name).setLevel(logging.NOTSET)


def test_stdout_only():
    assert setup_logging(level="debug") is None
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert logging.getLogger("urllib3").level == logging.WARNING


def test_log_dir_creates_rotating_file(tmp_path):
    path = setup_logging(log_dir=tmp_path / "logs", max_bytes=1024, backup_count=2)
    assert path == tmp_path / "logs" / "xchange.log"
    assert path.exists()
    file_handlers = [h for h in logging.getLogger().handlers if isinstance(h, RotatingFileHandler)]
    assert len(file_handlers) == 1
    assert file_handlers[0].maxBytes == 1024
    assert file_handlers[0].backupCount == 2


def test_log_file(tmp_path):
    path = setup_logging(log_file=tmp_path / "app.log", log_to_stdout=False)
    logging.getLogger("xchange.test").warning("rate fetch failed")
    for handler in logging.getLogger().handlers:
        handler.flush()
    assert "rate fetch failed" in path.read_text(encoding="utf-8")


def test_falls_back_to_stderr():
    setup_logging(log_to_stdout=False)
    assert len(logging.getLogger().handlers) == 1
