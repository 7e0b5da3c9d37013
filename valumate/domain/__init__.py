"""Domain types for the valuation engine."""

from valumate.domain.types import AssumptionSuggestion
from valumate.domain.types import clamp_projection_years
from valumate.domain.types import ValuationInputs
from valumate.domain.types import ValuationResult
from valumate.domain.types import YearProjection

__all__ = [
    'AssumptionSuggestion',
    'clamp_projection_years',
    'ValuationInputs',
    'ValuationResult',
    'YearProjection',
]
