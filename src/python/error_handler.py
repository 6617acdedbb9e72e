"""
SlowFast Error Handler Module

This module provides a centralized error reporting pattern: errors raised by
collaborators outside the curve core (media backend, startup) are logged here
instead of surfacing as dialogs.
"""

import logging

logger = logging.getLogger("slowfast.error_handler")


class ErrorHandler:
    """Centralized error handling for SlowFast."""

    @staticmethod
    def log_exception(e: Exception, context: str = "") -> str:
        """Log an exception with stack trace."""
        error_type = type(e).__name__
        error_msg = str(e)

        if context:
            logger.error("%s: %s: %s", context, error_type, error_msg, exc_info=e)
        else:
            logger.error("%s: %s", error_type, error_msg, exc_info=e)

        return f"{error_type}: {error_msg}"

    @staticmethod
    def show_error(message: str, title: str = "Error") -> None:
        """Log an error message."""
        logger.error("[%s] %s", title, message)

    @staticmethod
    def show_warning(message: str, title: str = "Warning") -> None:
        """Log a warning message."""
        logger.warning("[%s] %s", title, message)

    @staticmethod
    def show_info(message: str, title: str = "Info") -> None:
        """Log an info message."""
        logger.info("[%s] %s", title, message)
