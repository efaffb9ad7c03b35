"""
Domain models and value objects.

Contains the BigFloat accumulator model and the operation result types.
"""

from src.core.domain.accumulator import (
    DEFAULT_SATURATION_REMAINDER,
    UINT32_MAX,
    BigFloat,
)
from src.core.domain.return_codes import (
    AverageFlowResult,
    CombineResult,
    ReturnCode,
    TotalizationResult,
)

__all__ = [
    # Accumulator model
    "BigFloat",
    "DEFAULT_SATURATION_REMAINDER",
    "UINT32_MAX",
    # Result types
    "ReturnCode",
    "CombineResult",
    "TotalizationResult",
    "AverageFlowResult",
]
