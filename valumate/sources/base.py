"""
Assumption source interface.

An assumption source proposes best-effort ValuationInputs for a ticker.
Sources are optional collaborators: every failure surfaces as a single
AssumptionSourceError and the caller falls back to manual entry.
"""

from abc import ABC
from abc import abstractmethod

from valumate.domain.types import AssumptionSuggestion

MANUAL_ENTRY_MESSAGE = ('Could not fetch stock data, '
                        'please enter the values manually.')


class AssumptionSourceError(Exception):
  """Lookup failed; the message is safe to show to the user."""

  def __init__(self, message: str = MANUAL_ENTRY_MESSAGE):
    super().__init__(message)


class AssumptionSource(ABC):
  """
  Base class for assumption sources.

  Subclasses implement fetch() to return suggested inputs for a ticker.
  """

  @abstractmethod
  def fetch(self, ticker: str) -> AssumptionSuggestion:
    """
    Look up valuation assumptions for a ticker.

    Args:
      ticker: Ticker symbol as entered by the user

    Returns:
      AssumptionSuggestion with inputs, reasoning and citation URLs

    Raises:
      AssumptionSourceError: If the lookup fails for any reason
    """
