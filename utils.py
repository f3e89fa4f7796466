"""
Utility functions for logging and environment parsing.
"""
import os
import logging
from typing import Optional


def setup_logging(log_level: str = "INFO") -> None:
    """Configure logging with timestamp and level."""
    level = getattr(logging, (log_level or "INFO").upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
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


def get_env_int(key: str, default: int, minimum: Optional[int] = None) -> int:
    """
    Get integer from environment variable.

    Args:
        key: Variable name
        default: Value used when unset or unparseable
        minimum: Optional floor applied to the result
    """
    value = os.getenv(key)
    result = default
    if value is not None and value.strip():
        try:
            result = int(value.strip())
        except ValueError:
            logging.warning(f"Ignoring non-integer {key}={value!r}, using {default}")
    if minimum is not None:
        result = max(minimum, result)
    return result
