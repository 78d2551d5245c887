"""Logging configuration."""

import logging
import sys

from portfolio_calc.config.settings import get_settings


def setup_logging() -> None:
    """Configure engine logging."""
    settings = get_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
