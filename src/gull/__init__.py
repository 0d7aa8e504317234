"""
GULL: Geomagnetic UtiLities Library.

Snapshots of spherical harmonic geomagnetic models (IGRF, WMM) at a given
date, and computation of the geomagnetic field at an Earth location.
"""

from .exceptions import (
    AllocationError,
    DomainError,
    ErrorContext,
    FormatError,
    GullError,
    MissingDataError,
    Operation,
    PathError,
    ReturnCode,
    error_function,
    error_print,
    error_string
)
from .models import (
    FieldVector,
    MagneticFieldModel,
    MagneticFieldState,
    Snapshot,
    Workspace,
    compute_field,
    load_snapshot
)
from .utils import decimal_year

__version__ = "0.1.0"

__all__ = [
    'AllocationError',
    'DomainError',
    'ErrorContext',
    'FormatError',
    'GullError',
    'MissingDataError',
    'Operation',
    'PathError',
    'ReturnCode',
    'error_function',
    'error_print',
    'error_string',
    'FieldVector',
    'MagneticFieldModel',
    'MagneticFieldState',
    'Snapshot',
    'Workspace',
    'compute_field',
    'load_snapshot',
    'decimal_year'
]
