import logging
import logging.config
import os
import sys
from contextvars import ContextVar
from typing import Optional


# Request id of the HTTP request currently being served (set by the API middleware)
_request_id_ctx_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(request_id)s] [%(name)s] [%(filename)s:%(lineno)d] %(message)s"


def get_request_id() -> Optional[str]:
    """Return the request id bound to the current context."""
    return _request_id_ctx_var.get()


def bind_request_id(request_id: Optional[str]):
    """Bind a request id to the current context. Returns the reset token."""
    return _request_id_ctx_var.set(request_id)


def reset_request_id(token) -> None:
    _request_id_ctx_var.reset(token)


class RequestIdFilter(logging.Filter):
    """Inject the current request id into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id() or "-"
        return True


def build_logging_config(log_dir: Optional[str] = None) -> dict:
    """
    Build the dictConfig payload.
    File handlers are only attached when a log directory is given.
    """
    handlers = {
        "console": {
            "level": "INFO",
            "class": "logging.StreamHandler",
            "formatter": "standard",
            "filters": ["request_id"],
            "stream": sys.stdout,
        },
    }

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        handlers["file_app"] = {
            "level": "DEBUG",
            "class": "logging.handlers.TimedRotatingFileHandler",
            "filename": os.path.join(log_dir, "tiv.log"),
            "when": "midnight",
            "interval": 1,
            "backupCount": 30,
            "encoding": "utf-8",
            "formatter": "standard",
            "filters": ["request_id"],
        }
        handlers["file_error"] = {
            "level": "ERROR",
            "class": "logging.handlers.TimedRotatingFileHandler",
            "filename": os.path.join(log_dir, "tiv.error.log"),
            "when": "midnight",
            "interval": 1,
            "backupCount": 30,
            "encoding": "utf-8",
            "formatter": "standard",
            "filters": ["request_id"],
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "request_id": {"()": RequestIdFilter},
        },
        "formatters": {
            "standard": {
                "format": LOG_FORMAT,
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": handlers,
        "loggers": {
            "TIV": {
                "handlers": list(handlers.keys()),
                "level": "DEBUG",
                "propagate": False,
            },
        },
    }


def setup_logging(log_dir: Optional[str] = None) -> None:
    """Apply the logging configuration."""
    logging.config.dictConfig(build_logging_config(log_dir))


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the TIV hierarchy, configuring logging on first use."""
    if not logging.getLogger("TIV").handlers:
        setup_logging()

    return logging.getLogger(name)
