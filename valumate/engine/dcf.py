"""
Pure DCF math engine.

This module contains pure functions for DCF calculations. No I/O, no logging,
just numeric computations on a ValuationInputs record.

The engine never raises for numeric input. Degenerate assumptions degrade
instead of failing:
  - discount rate not above terminal growth: denominator floored at 0.001
  - zero shares outstanding: per-share value is 0
  - zero market price: upside/downside is 0
  - discount factor of zero or beyond float range: values saturate to
    inf, 0 or nan

Key functions:
  compute: Main entry point, returns a ValuationResult
  project_cash_flows: Year-by-year explicit forecast
  compute_terminal_value: Gordon growth terminal value, nominal and discounted
"""

import math

from valumate.domain.types import ValuationInputs
from valumate.domain.types import ValuationResult
from valumate.domain.types import YearProjection

# Policy constant, not derived. Keeps r - g_terminal finite and positive.
TERMINAL_DENOMINATOR_FLOOR = 0.001


def discount_factor(discount_rate: float, year: int) -> float:
  """
  Compound discount factor (1 + r)^year.

  Saturates to +/-inf instead of raising when the power overflows a float.
  """
  base = 1.0 + discount_rate
  try:
    return base**year
  except OverflowError:
    if base < 0 and year % 2:
      return -math.inf
    return math.inf


def discount(amount: float, factor: float) -> float:
  """
  Divide amount by a discount factor with IEEE semantics.

  A zero factor gives +/-inf, or nan when amount is also zero.
  """
  if factor == 0:
    if amount == 0 or math.isnan(amount):
      return math.nan
    return math.copysign(math.inf, amount) * math.copysign(1.0, factor)
  return amount / factor


def project_cash_flows(
    fcf0: float,
    growth_rate: float,
    discount_rate: float,
    n_years: int,
) -> tuple[YearProjection, ...]:
  """
  Project and discount free cash flow over the explicit period.

  Each year compounds on the previous year's FCF.

  Args:
    fcf0: Base free cash flow (year 0)
    growth_rate: Annual growth rate (g), as a fraction
    discount_rate: Required return (r), as a fraction
    n_years: Number of explicit forecast years

  Returns:
    Tuple of YearProjection for years 1..n_years
  """
  projections = []
  fcf = fcf0
  for t in range(1, n_years + 1):
    fcf *= (1.0 + growth_rate)
    discounted = discount(fcf, discount_factor(discount_rate, t))
    projections.append(
        YearProjection(year=t, fcf=fcf, discounted_fcf=discounted))
  return tuple(projections)


def terminal_denominator(discount_rate: float, g_terminal: float) -> float:
  """Gordon growth denominator r - g, floored at TERMINAL_DENOMINATOR_FLOOR."""
  denominator = discount_rate - g_terminal
  if denominator <= TERMINAL_DENOMINATOR_FLOOR:
    denominator = TERMINAL_DENOMINATOR_FLOOR
  return denominator


def compute_terminal_value(
    final_fcf: float,
    g_terminal: float,
    discount_rate: float,
    final_year: int,
) -> tuple[float, float]:
  """
  Compute terminal value using the Gordon Growth Model.

  Args:
    final_fcf: FCF in the final explicit year
    g_terminal: Terminal (perpetual) growth rate
    discount_rate: Required return (r)
    final_year: Number of years to discount back

  Returns:
    Tuple of (terminal_value, present_terminal_value)
  """
  denominator = terminal_denominator(discount_rate, g_terminal)
  tv = (final_fcf * (1.0 + g_terminal)) / denominator
  discounted_tv = discount(tv, discount_factor(discount_rate, final_year))
  return tv, discounted_tv


def per_share_value(enterprise_value: float, shares: float) -> float:
  """Enterprise value per share, 0 when shares are not positive."""
  if shares > 0:
    return enterprise_value / shares
  return 0.0


def upside_downside(iv_per_share: float, price: float) -> float:
  """Percent gap of intrinsic value over price, 0 when price is not positive."""
  if price > 0:
    return (iv_per_share - price) / price * 100.0
  return 0.0


def compute(inputs: ValuationInputs) -> ValuationResult:
  """
  Compute a two-stage DCF valuation.

  Stage 1: Explicit forecast at a constant growth rate
  Stage 2: Terminal value from the final projected year's FCF

  Args:
    inputs: Assumption set (percent fields as percentages)

  Returns:
    ValuationResult with projections, terminal value, enterprise value,
    per-share intrinsic value and the verdict against current price
  """
  r = inputs.discount_rate_pct / 100.0
  g = inputs.growth_rate_pct / 100.0
  tg = inputs.terminal_growth_rate_pct / 100.0
  n_years = inputs.projection_years

  projections = project_cash_flows(inputs.free_cash_flow, g, r, n_years)
  sum_discounted = 0.0
  for p in projections:
    sum_discounted += p.discounted_fcf

  if projections:
    final_fcf = projections[-1].fcf
    final_year = projections[-1].year
  else:
    final_fcf = inputs.free_cash_flow
    final_year = 0

  tv, present_tv = compute_terminal_value(final_fcf, tg, r, final_year)
  enterprise_value = sum_discounted + present_tv

  iv = per_share_value(enterprise_value, inputs.shares_outstanding)
  upside = upside_downside(iv, inputs.current_price)

  return ValuationResult(
      projections=projections,
      terminal_value=tv,
      present_terminal_value=present_tv,
      total_enterprise_value=enterprise_value,
      intrinsic_value_per_share=iv,
      upside_downside_pct=upside,
      is_undervalued=iv > inputs.current_price,
  )
