"""API middleware for printzone."""

from printzone.api.middleware.logging import LoggingMiddleware

__all__ = [
    "LoggingMiddleware",
]
