"""
Core math modules тоталайзера

Математические примитивы и численные алгоритмы с гарантией точности.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    # Epsilon constants
    EQUALITY_TOLERANCE,
    TRUNCATE_FACTORS,
    # NaN/Inf и знак
    is_sign_negative,
    is_valid_float,
    # Epsilon comparisons
    is_equal,
    is_equal_arb,
    # Utilities
    truncate_to,
    # Validation
    is_valid_threshold,
    validate_threshold,
)

# Decompose
from src.core.math.decompose import (
    DOUBLE_INT_LIMIT,
    FLOAT_INT_LIMIT,
    Decomposition,
    DecompositionError,
    split_double,
    split_float,
)

# BigFloat arithmetic
from src.core.math.bigfloat import (
    add,
    add_scalar,
    affine_transform,
    are_equal,
    clear,
    is_positive,
    scale,
    subtract,
    to_float,
)

# Damping filters
from src.core.math.damping import (
    DampingSample,
    MovingDamping,
    WindowDamping,
)

__all__ = [
    # Numerical Safeguards: Epsilon constants
    "EQUALITY_TOLERANCE",
    "TRUNCATE_FACTORS",
    # Numerical Safeguards: NaN/Inf и знак
    "is_sign_negative",
    "is_valid_float",
    # Numerical Safeguards: Epsilon comparisons
    "is_equal",
    "is_equal_arb",
    # Numerical Safeguards: Utilities
    "truncate_to",
    # Numerical Safeguards: Validation
    "is_valid_threshold",
    "validate_threshold",
    # Decompose: Constants
    "DOUBLE_INT_LIMIT",
    "FLOAT_INT_LIMIT",
    # Decompose: Types
    "Decomposition",
    "DecompositionError",
    # Decompose: Functions
    "split_double",
    "split_float",
    # BigFloat: Functions
    "add",
    "add_scalar",
    "affine_transform",
    "are_equal",
    "clear",
    "is_positive",
    "scale",
    "subtract",
    "to_float",
    # Damping: Types
    "DampingSample",
    "MovingDamping",
    "WindowDamping",
]
