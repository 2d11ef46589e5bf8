"""
Logging configuration for Netpulse

Provides centralized logging setup for the monitoring engine.
"""

import logging
import sys


def setup_logging(level: str = "INFO", debug: bool = False) -> logging.Logger:
    """
    Setup logging configuration for Netpulse.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        debug: Enable debug output

    Returns:
        Configured logger instance
    """
    numeric_level = logging.DEBUG if debug else getattr(logging, str(level).upper(), logging.INFO)

    logging.basicConfig(
        level=numeric_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )

    logger = logging.getLogger('netpulse')
    logger.setLevel(numeric_level)

    return logger


def get_logger(name: str = 'netpulse') -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
