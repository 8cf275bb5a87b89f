"""
formctrl structured logging.

This module provides structured logging capabilities with:
- structlog configuration shared with standard library records
- Masking of password, document and card values
"""

from .factory import configure_logging, get_logger
from .sanitizers import ControlValueProcessor, mask_sensitive_data, sanitize_for_log

__all__ = [
    "configure_logging",
    "get_logger",
    "ControlValueProcessor",
    "mask_sensitive_data",
    "sanitize_for_log",
]
