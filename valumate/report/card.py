'''
Text rendering of a valuation verdict.

The card mirrors what an interactive front end shows: the per-share
intrinsic value, the market price with the signed upside, the verdict,
two headline magnitudes and, when the inputs came from an assumption
source, its reasoning and up to three citations.
'''

from typing import Optional, Sequence

from valumate.domain.types import ValuationInputs
from valumate.domain.types import ValuationResult
from valumate.report.formatting import format_compact
from valumate.report.formatting import format_currency
from valumate.report.formatting import format_percent

MAX_CITATIONS = 3


def has_valuation(inputs: ValuationInputs) -> bool:
  '''Whether inputs are complete enough to show a verdict.'''
  return inputs.current_price > 0 and inputs.free_cash_flow > 0


def verdict_label(result: ValuationResult) -> str:
  return 'Undervalued' if result.is_undervalued else 'Overvalued'


def render_verdict(
    inputs: ValuationInputs,
    result: ValuationResult,
    reasoning: Optional[str] = None,
    sources: Sequence[str] = (),
) -> str:
  '''
  Render a multi-line verdict card.

  Args:
    inputs: Inputs the result was computed from
    result: Valuation result
    reasoning: Optional rationale from an assumption source
    sources: Optional citation URLs (only the first three are shown)

  Returns:
    Card text without a trailing newline
  '''
  direction = 'upside' if result.is_undervalued else 'downside'
  title = f'DCF Valuation - {inputs.symbol}' if inputs.symbol else (
      'DCF Valuation')
  lines: list[str] = [
      title,
      f'  Intrinsic Value / Share: '
      f'{format_currency(result.intrinsic_value_per_share)}',
      f'  Current Price: {format_currency(inputs.current_price)}  '
      f'({format_percent(result.upside_downside_pct)} {direction})',
      f'  Verdict: {verdict_label(result)}',
      f'  Enterprise Value: '
      f'{format_compact(result.total_enterprise_value)}',
      f'  Terminal Value (PV): '
      f'{format_compact(result.present_terminal_value)}',
  ]

  if reasoning:
    lines.append('')
    lines.append('Assumptions:')
    lines.append(f'  {reasoning}')
    if sources:
      lines.append('  Sources:')
      lines.extend(f'    - {s}' for s in list(sources)[:MAX_CITATIONS])

  return '\n'.join(lines)
