"""
Assumption sources for pre-filling valuation inputs.

To add a new source:
1. Create a class inheriting from AssumptionSource
2. Implement fetch() returning AssumptionSuggestion
3. Raise AssumptionSourceError on any failure

Example:
  class StaticSource(AssumptionSource):
    def fetch(self, ticker: str) -> AssumptionSuggestion:
      return AssumptionSuggestion(inputs=ValuationInputs(symbol=ticker))
"""

from valumate.sources.base import AssumptionSource
from valumate.sources.base import AssumptionSourceError
from valumate.sources.gemini import GeminiAssumptionSource

__all__ = [
    'AssumptionSource',
    'AssumptionSourceError',
    'GeminiAssumptionSource',
]
