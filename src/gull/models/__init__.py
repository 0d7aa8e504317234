"""
Geomagnetic model snapshots and field computation.
"""

from .coefficients import CoefficientStore, coefficient_count, coefficient_index
from .snapshot import DataSet, Snapshot, load_snapshot
from .workspace import Workspace
from .magnetic_field import (
    FieldVector,
    MagneticFieldModel,
    MagneticFieldState,
    compute_field
)

__all__ = [
    'CoefficientStore',
    'coefficient_count',
    'coefficient_index',
    'DataSet',
    'Snapshot',
    'load_snapshot',
    'Workspace',
    'FieldVector',
    'MagneticFieldModel',
    'MagneticFieldState',
    'compute_field'
]
