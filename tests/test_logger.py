from sync_form_core import logger as logger_mod


def test_get_logger_nests_module_names_under_app_logger():
    """Package modules must log through the 'sync_form' namespace."""
    assert logger_mod.get_logger("sync_form_core.filter_list").name == "sync_form.sync_form_core.filter_list"
    assert logger_mod.get_logger("sync_form.handlers").name == "sync_form.handlers"
    assert logger_mod.get_logger("sync_form").name == "sync_form"


def test_setup_logging_writes_to_configured_dir():
    logger_mod.get_logger("tests").info("hello from tests")
    for handler in logger_mod.app_logger.handlers:
        handler.flush()

    log_file = logger_mod.LOG_BASE_DIR / "app.log"
    assert log_file.exists()
    assert "hello from tests" in log_file.read_text(encoding="utf-8")


def test_setup_logging_does_not_duplicate_handlers():
    before = len(logger_mod.app_logger.handlers)
    logger_mod.setup_logging()
    logger_mod.setup_logging()
    assert len(logger_mod.app_logger.handlers) == before

