"""
Logging configuration for monday-mcp.

Simple setup that adapters and tools can import.
query/ should NOT log (it's pure functions).
"""

import logging
import sys

# Create logger for the package
logger = logging.getLogger("monday")


def configure_logging(level: str = "INFO") -> None:
    """
    Configure logging for monday-mcp.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
    """
    logger.setLevel(getattr(logging, level.upper()))

    # Only add handler if not already configured
    if not logger.handlers:
        # stdout belongs to the MCP stdio transport
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(logging.DEBUG)

        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)


# NOTE: Call configure_logging() explicitly in server.py, cli.py or test setup.
# We don't auto-configure to avoid side effects on import.


def log_api_call(operation: str, **params: object) -> None:
    """Log a GraphQL operation with key variables."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items() if v is not None)
    logger.debug(f"API: {operation}({param_str})")


def log_api_result(operation: str, result_count: int | None = None) -> None:
    """Log API result summary."""
    if result_count is not None:
        logger.debug(f"API: {operation} returned {result_count} results")
    else:
        logger.debug(f"API: {operation} completed")


def log_retry(attempt: int, max_attempts: int, delay_ms: int, reason: str) -> None:
    """Log a retry attempt."""
    logger.warning(
        f"Retry {attempt}/{max_attempts} in {delay_ms}ms: {reason}"
    )
