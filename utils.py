"""
Utility functions for logging and environment handling.
"""
import os
import logging


def setup_logging(log_level: str = "INFO") -> None:
    """Configure logging with timestamp and level."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def get_env_bool(key: str, default: bool = False) -> bool:
    """Get boolean from environment variable."""
    value = os.getenv(key)
    if value is None:
        return default

    value = value.strip().upper()
    if value in ("1", "TRUE", "YES", "ON"):
        return True
    elif value in ("0", "FALSE", "NO", "OFF", ""):
        return False
    return default
