import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path


def _get_configured_log_level() -> str:
    try:
        from .config_manager import get_config_manager

        level = get_config_manager().get_setting("logging.level", "INFO")
        return str(level or "INFO").upper()
    except (ImportError, OSError, ValueError, RuntimeError):
        return "INFO"


def _get_logs_dir() -> Path:
    try:
        from .config_manager import get_config_manager

        return get_config_manager().get_logs_dir()
    except (ImportError, OSError, ValueError, RuntimeError):
        return Path("logs")


# Base log directory
LOG_BASE_DIR = _get_logs_dir()
try:
    LOG_BASE_DIR.mkdir(parents=True, exist_ok=True)
except OSError:
    # Fall back to CWD logs if configured path isn't writable
    LOG_BASE_DIR = Path("logs")
    LOG_BASE_DIR.mkdir(parents=True, exist_ok=True)

CONSOLE_FORMAT = logging.Formatter("%(levelname)s | %(name)s | %(message)s")

FILE_FORMAT = logging.Formatter(
    "%(asctime)s [%(levelname)s] [%(name)s.%(funcName)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

APP_LOGGER_NAME = "sync_form"

# The primary application logger
app_logger = logging.getLogger(APP_LOGGER_NAME)
app_logger.propagate = True


def setup_logging():
    """Sets up the 'sync_form' logger with daily rotation."""
    log_level = _get_configured_log_level()
    effective_level = getattr(logging, log_level, logging.INFO)

    LOG_BASE_DIR.mkdir(parents=True, exist_ok=True)

    if app_logger.hasHandlers() and app_logger.handlers:
        if app_logger.level != effective_level:
            app_logger.setLevel(effective_level)
            for h in app_logger.handlers:
                h.setLevel(effective_level)
        return

    app_logger.setLevel(effective_level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(CONSOLE_FORMAT)
    console_handler.setLevel(effective_level)
    app_logger.addHandler(console_handler)

    log_file = LOG_BASE_DIR / "app.log"
    try:
        file_handler = TimedRotatingFileHandler(log_file, when="midnight", interval=1, backupCount=30, encoding="utf-8")
        file_handler.setFormatter(FILE_FORMAT)
        file_handler.setLevel(effective_level)
        app_logger.addHandler(file_handler)
    except OSError as e:
        sys.stderr.write(f"FAILED TO SETUP FILE LOGGING: {e}\n")
        # Console handler is still attached
        app_logger.error(f"Failed to setup file logging: {e}", exc_info=True)

    app_logger.info("Logging system initialized (Level: %s) -> %s", log_level, log_file)



def get_logger(name: str):
    """Get a configured logger within the 'sync_form' namespace."""
    setup_logging()
    # Package names share the prefix, so match the dotted namespace only
    if name != APP_LOGGER_NAME and not name.startswith(f"{APP_LOGGER_NAME}."):
        name = f"{APP_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
