"""Totalization — доменные операции тоталайзера расходомера.

- Комбинирование тоталов двух направлений потока (A→B, B→A)
- Средний расход между двумя снимками тотала
- Двунаправленный тоталайзер, собирающий обе операции
"""

from .average_flow import average_flow
from .directional import TotalizationMode, combine_directional
from .totalizer import (
    BidirectionalTotalizer,
    TotalizationError,
    TotalizerConfig,
    TotalizerSnapshot,
)

__all__ = [
    "average_flow",
    "combine_directional",
    "TotalizationMode",
    "BidirectionalTotalizer",
    "TotalizationError",
    "TotalizerConfig",
    "TotalizerSnapshot",
]
