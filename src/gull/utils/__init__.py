"""
Utility functions and helpers for geomagnetic snapshots.
"""

from .logging import GullLogger, setup_logging
from .time import decimal_year, date_to_decimal_year, is_leap_year
from .validation import (
    validate_number,
    validate_range,
    validate_type
)

__all__ = [
    'GullLogger',
    'setup_logging',
    'decimal_year',
    'date_to_decimal_year',
    'is_leap_year',
    'validate_number',
    'validate_range',
    'validate_type'
]
