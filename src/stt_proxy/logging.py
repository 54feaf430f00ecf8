import logging
import sys

from pythonjsonlogger import jsonlogger

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s %(trace_id)s %(span_id)s"
UVICORN_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error")


def setup_logging(level: str = "INFO", service: str | None = None, env: str | None = None):
    """
    Routes all application and Uvicorn logs through one JSON stdout handler.

    Every record carries ``timestamp``, ``level``, ``logger`` and ``message``,
    plus the ddtrace ``trace_id``/``span_id`` when tracing is active and the
    static ``service``/``env`` tags when given. Calling it again replaces the
    previous handlers instead of stacking them.

    Args:
        level: Log level name, case-insensitive ("info", "DEBUG", ...).
        service: Service name attached to every record.
        env: Deployment environment attached to every record.

    Returns:
        logging.Logger: The configured root logger instance.

    Raises:
        ValueError: If ``level`` is not a known logging level name.
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        raise ValueError(f"Unknown log level: {level}")

    static_fields = {
        key: value for key, value in (("service", service), ("env", env)) if value
    }
    formatter = jsonlogger.JsonFormatter(
        LOG_FORMAT,
        rename_fields={"asctime": "timestamp", "levelname": "level", "name": "logger"},
        static_fields=static_fields,
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = [handler]

    for name in UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.setLevel(log_level)
        uvicorn_logger.handlers = [handler]
        uvicorn_logger.propagate = False

    return root_logger
