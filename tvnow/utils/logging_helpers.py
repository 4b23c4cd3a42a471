"""
Logging helpers for consistent log formatting across the guide pipeline.
"""
import logging
from datetime import datetime


def log_batch_start(logger: logging.Logger, count: int) -> None:
    """
    Log the start of a concurrent fetch batch.

    Args:
        logger: Logger instance
        count: Number of requests in the batch
    """
    logger.info(f"Fetching {count} schedule page(s) concurrently")


def log_batch_end(logger: logging.Logger, count: int) -> None:
    """Log a fully successful fetch batch."""
    logger.info(f"Fetched all {count} schedule page(s)")


def log_guide_start(logger: logging.Logger, variant: str, mode: str) -> None:
    """Log guide request start."""
    logger.info(f"Guide request for {variant} ({mode}) started at {datetime.now().isoformat()}")


def log_guide_end(logger: logging.Logger, documents: int, channels: int) -> None:
    """
    Log a completed guide request.

    Args:
        logger: Logger instance
        documents: Number of parsed schedule pages
        channels: Total channels across those pages
    """
    logger.info(f"Guide ready - Pages: {documents}, Channels: {channels}")
