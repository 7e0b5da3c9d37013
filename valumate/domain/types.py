'''
Domain types for the valuation engine.

These dataclasses are immutable value objects passed between the engine,
the assumption sources and the presentation layer. Field names are
snake_case; the JSON wire form uses the camelCase names listed in
INPUT_WIRE_FIELDS.
'''

from dataclasses import dataclass, field, fields, replace
from typing import Any

import pandas as pd

# Python attribute -> wire (JSON) key.
INPUT_WIRE_FIELDS: dict[str, str] = {
    'symbol': 'symbol',
    'current_price': 'currentPrice',
    'free_cash_flow': 'freeCashFlow',
    'growth_rate_pct': 'growthRate',
    'discount_rate_pct': 'discountRate',
    'terminal_growth_rate_pct': 'terminalGrowthRate',
    'shares_outstanding': 'sharesOutstanding',
    'projection_years': 'projectionYears',
}

MIN_PROJECTION_YEARS = 1
MAX_PROJECTION_YEARS = 10


def clamp_projection_years(
    years: int,
    lo: int = MIN_PROJECTION_YEARS,
    hi: int = MAX_PROJECTION_YEARS,
) -> int:
  '''Clamp a requested forecast horizon into [lo, hi].'''
  return max(lo, min(hi, int(years)))


@dataclass(frozen=True)
class ValuationInputs:
  '''
  Assumption set for a single DCF valuation.

  Percent fields are expressed as percentages (10 means 10%). Absolute
  amounts are raw currency units, not scaled to millions or billions.

  Attributes:
    symbol: Ticker symbol (display only, never used in computation)
    current_price: Market price per share, 0 when unknown
    free_cash_flow: Latest annual free cash flow, may be negative
    growth_rate_pct: FCF growth during the explicit window
    discount_rate_pct: Required return / WACC
    terminal_growth_rate_pct: Perpetual growth after the explicit window
    shares_outstanding: Total shares outstanding, 0 when unknown
    projection_years: Number of explicit forecast years
  '''
  symbol: str = ''
  current_price: float = 0.0
  free_cash_flow: float = 0.0
  growth_rate_pct: float = 10.0
  discount_rate_pct: float = 9.0
  terminal_growth_rate_pct: float = 2.5
  shares_outstanding: float = 0.0
  projection_years: int = 5

  def with_updates(self, **changes: Any) -> 'ValuationInputs':
    '''Return a copy with the given fields replaced.'''
    return replace(self, **changes)

  def to_dict(self) -> dict[str, Any]:
    '''Convert to the camelCase wire form.'''
    return {
        wire: getattr(self, attr) for attr, wire in INPUT_WIRE_FIELDS.items()
    }

  @classmethod
  def from_dict(cls, data: dict[str, Any]) -> 'ValuationInputs':
    '''
    Create from the camelCase wire form.

    Missing keys keep their defaults. Unknown keys are ignored.

    Raises:
      ValueError: If a present numeric field cannot be converted
    '''
    kwargs: dict[str, Any] = {}
    for f in fields(cls):
      wire = INPUT_WIRE_FIELDS[f.name]
      if wire not in data or data[wire] is None:
        continue
      value = data[wire]
      if f.name == 'symbol':
        kwargs[f.name] = str(value)
      elif f.name == 'projection_years':
        kwargs[f.name] = int(value)
      else:
        kwargs[f.name] = float(value)
    return cls(**kwargs)


@dataclass(frozen=True)
class YearProjection:
  '''
  One year of the explicit forecast.

  Attributes:
    year: 1-based period index
    fcf: Projected free cash flow for the year
    discounted_fcf: Present value of that year's FCF
  '''
  year: int
  fcf: float
  discounted_fcf: float

  def to_dict(self) -> dict[str, Any]:
    return {
        'year': self.year,
        'fcf': self.fcf,
        'discountedFcf': self.discounted_fcf,
    }


@dataclass(frozen=True)
class ValuationResult:
  '''
  Complete DCF valuation output.

  Attributes:
    projections: Explicit forecast years, ascending
    terminal_value: Gordon growth value at the end of the explicit window
    present_terminal_value: terminal_value discounted to today
    total_enterprise_value: Sum of discounted FCF plus present terminal value
    intrinsic_value_per_share: Enterprise value per share, 0 without shares
    upside_downside_pct: Percent gap of intrinsic value over market price
    is_undervalued: True iff intrinsic value exceeds market price
  '''
  projections: tuple[YearProjection, ...]
  terminal_value: float
  present_terminal_value: float
  total_enterprise_value: float
  intrinsic_value_per_share: float
  upside_downside_pct: float
  is_undervalued: bool

  @property
  def sum_discounted_fcf(self) -> float:
    '''Present value of the explicit forecast period.'''
    return sum(p.discounted_fcf for p in self.projections)

  def to_dict(self) -> dict[str, Any]:
    '''Convert to the camelCase wire form.'''
    return {
        'projections': [p.to_dict() for p in self.projections],
        'terminalValue': self.terminal_value,
        'presentTerminalValue': self.present_terminal_value,
        'totalEnterpriseValue': self.total_enterprise_value,
        'intrinsicValuePerShare': self.intrinsic_value_per_share,
        'upsideDownside': self.upside_downside_pct,
        'isUndervalued': self.is_undervalued,
    }

  def to_frame(self) -> pd.DataFrame:
    '''Projection table indexed by year.'''
    frame = pd.DataFrame(
        [(p.year, p.fcf, p.discounted_fcf) for p in self.projections],
        columns=['year', 'fcf', 'discounted_fcf'],
    )
    return frame.set_index('year')


@dataclass(frozen=True)
class AssumptionSuggestion:
  '''
  Best-effort inputs proposed by an assumption source.

  Attributes:
    inputs: Suggested inputs with defaults applied to missing fields
    reasoning: Free-text rationale from the source
    sources: Unique citation URLs, first-seen order
  '''
  inputs: ValuationInputs
  reasoning: str = ''
  sources: tuple[str, ...] = field(default_factory=tuple)
