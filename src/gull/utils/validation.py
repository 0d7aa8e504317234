import math
from typing import Any, Optional, Type, Union

def validate_type(value: Any, expected_type: Union[Type, tuple]) -> bool:
    """Validate value is of expected type."""
    return isinstance(value, expected_type)

def validate_number(value: Any) -> bool:
    """Validate value is a real number. Booleans are not numbers here."""
    return validate_type(value, (int, float)) and not isinstance(value, bool)

def validate_range(value: float, min_val: Optional[float] = None,
                   max_val: Optional[float] = None) -> bool:
    """
    Validate numeric value is finite and within range, bounds included.

    NaN and infinite values are always rejected, since they compare false
    against any bound.
    """
    if not math.isfinite(value):
        return False
    if min_val is not None and value < min_val:
        return False
    if max_val is not None and value > max_val:
        return False
    return True
