import logging
import sys
from pathlib import Path

from loguru import logger

from app.core.config import Settings

# Standard-library loggers routed into Loguru
INTERCEPTED_LOGGERS = (
    "uvicorn",
    "uvicorn.error",
    "uvicorn.access",
    "fastapi",
)


class InterceptHandler(logging.Handler):
    """
    Redirect standard logging records (uvicorn, fastapi) to Loguru.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Walk back to the frame that issued the logging call
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def _add_console_sink(settings: Settings) -> None:
    logger.add(
        sys.stderr,
        format="{message}" if settings.log_serialize else settings.log_format,
        level=settings.effective_console_log_level,
        colorize=not settings.log_serialize,
        serialize=settings.log_serialize,
        backtrace=settings.log_backtrace,
        diagnose=settings.log_diagnose,
    )


def _add_file_sink(settings: Settings) -> None:
    log_path = Path(settings.log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger.add(
        str(log_path),
        format=settings.log_format,
        level=settings.effective_file_log_level,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
        compression=settings.log_compression or None,
        serialize=settings.log_serialize,
        backtrace=settings.log_backtrace,
        diagnose=settings.log_diagnose,
    )


def setup_logging(settings: Settings) -> None:
    """
    Configure Loguru logging based on application settings.

    Replaces the default Loguru handler with a console sink, adds a rotating
    file sink when ``log_file`` is set, and intercepts the standard logging
    module so server logs share the same format.

    Args:
        settings: Application settings containing logging configuration
    """
    logger.remove()

    _add_console_sink(settings)
    if settings.log_file:
        _add_file_sink(settings)

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for logger_name in INTERCEPTED_LOGGERS:
        std_logger = logging.getLogger(logger_name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False

    logger.info(
        f"Logging configured: console={settings.effective_console_log_level}, "
        f"file={settings.effective_file_log_level if settings.log_file else 'disabled'}, "
        f"serialize={settings.log_serialize}"
    )
