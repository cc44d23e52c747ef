"""Test bootstrap.

Ensures `src` is importable, keeps config.json and logs inside temporary
folders and resets the in-memory form sessions between tests.
"""

from __future__ import annotations

import contextlib
import sys
import tempfile
from pathlib import Path

import pytest

# Add SRC to path
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if SRC.exists() and str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


def _close_handlers(logger_mod):
    for handler in list(logger_mod.app_logger.handlers):
        logger_mod.app_logger.removeHandler(handler)
        with contextlib.suppress(Exception):
            handler.close()


def pytest_configure():
    """Point config.json and session logging at a temporary folder before collection."""
    session_dir = Path(tempfile.mkdtemp(prefix="sync-form-pytest-"))

    from sync_form_core import config_manager

    config_manager.default_config_path = lambda: session_dir / "config.json"
    config_manager.get_config_manager.cache_clear()
    cm = config_manager.get_config_manager()
    cm.set_logs_dir(str(session_dir / "logs"))

    from sync_form_core import logger as logger_mod

    logger_mod.LOG_BASE_DIR = cm.get_logs_dir()
    _close_handlers(logger_mod)


@pytest.fixture(autouse=True)
def _isolate_logging_and_sessions(monkeypatch, tmp_path):
    """Autouse fixture: per-test log folder and an empty session store."""
    from sync_form_core import logger as logger_mod
    from sync_form_ui.form_sessions import form_sessions

    test_logs_dir = tmp_path / "logs"
    test_logs_dir.mkdir(parents=True, exist_ok=True)
    _close_handlers(logger_mod)
    monkeypatch.setattr(logger_mod, "LOG_BASE_DIR", test_logs_dir)
    logger_mod.setup_logging()

    form_sessions.clear()
    yield
    form_sessions.clear()
    _close_handlers(logger_mod)
