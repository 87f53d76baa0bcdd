# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from freemind_sonos.logging_setup import _ConsoleNoiseFilter, setup_logging


@pytest.fixture()
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def test_console_filter_keeps_app_logs_and_drops_library_noise() -> None:
    f = _ConsoleNoiseFilter()
    assert f.filter(_record("freemind_sonos.core.pipeline", logging.DEBUG))
    assert not f.filter(_record("httpx", logging.INFO))
    assert f.filter(_record("soco.core", logging.ERROR))
    assert not f.filter(_record("py.warnings", logging.WARNING))


def test_setup_logging_writes_file(tmp_path: Path, restore_root_logger) -> None:
    log_file = setup_logging(log_dir=tmp_path / "logs", console_level=logging.WARNING)

    logging.getLogger("freemind_sonos.test").debug("hello file")
    for h in logging.getLogger().handlers:
        h.flush()

    assert log_file == tmp_path / "logs" / "freemind_sonos.log"
    assert "hello file" in log_file.read_text("utf-8")
    assert len(logging.getLogger().handlers) == 2
