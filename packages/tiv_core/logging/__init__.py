from .config import (
    get_logger,
    setup_logging,
    get_request_id,
    bind_request_id,
    reset_request_id,
    RequestIdFilter,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "get_request_id",
    "bind_request_id",
    "reset_request_id",
    "RequestIdFilter",
]
