"""
Utils package for common utilities and helper functions.

This module contains logging configuration and settings loading utilities.
"""

from .logging_config import setup_logging, get_logger, is_debug_enabled
from .load_settings import load_settings

__all__ = [
    # Logging utilities
    "setup_logging",
    "get_logger",
    "is_debug_enabled",
    # Configuration utilities
    "load_settings",
]
