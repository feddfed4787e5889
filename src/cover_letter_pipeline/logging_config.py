"""Logging configuration for the cover letter pipeline."""

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for one of the pipeline modules.

    Handlers and levels are left to the hosting application.

    Args:
        name: Short module name (e.g. "cache")

    Returns:
        Logger named ``cover_letter_pipeline.<name>``
    """
    return logging.getLogger(f"cover_letter_pipeline.{name}")
