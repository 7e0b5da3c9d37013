'''Display formatting for currency amounts and large magnitudes.'''

import math

_COMPACT_UNITS = (
    (1e12, 'T'),
    (1e9, 'B'),
    (1e6, 'M'),
    (1e3, 'K'),
)


def _trim(value: float) -> str:
  '''One fraction digit at most, trailing zeros dropped.'''
  text = f'{value:.1f}'
  if text.endswith('.0'):
    text = text[:-2]
  return text


def format_currency(value: float) -> str:
  '''
  Format as US dollars with two decimals.

  Examples:
    1234.5 -> '$1,234.50'
    -0.5   -> '-$0.50'
  '''
  if not math.isfinite(value):
    return str(value)
  sign = '-' if value < 0 and round(abs(value), 2) > 0 else ''
  return f'{sign}${abs(value):,.2f}'


def format_compact(value: float) -> str:
  '''
  Format with a compact magnitude suffix and at most one fraction digit.

  Examples:
    950        -> '950'
    1500       -> '1.5K'
    2_340_000  -> '2.3M'
    -4e9       -> '-4B'
  '''
  if not math.isfinite(value):
    return str(value)
  sign = '-' if value < 0 else ''
  magnitude = abs(value)

  for i, (scale, suffix) in enumerate(_COMPACT_UNITS):
    if magnitude >= scale:
      scaled = round(magnitude / scale, 1)
      # 999.96K rounds up into the next unit.
      if scaled >= 1000 and i > 0:
        bigger_scale, bigger_suffix = _COMPACT_UNITS[i - 1]
        bigger = _trim(round(magnitude / bigger_scale, 1))
        return f'{sign}{bigger}{bigger_suffix}'
      return f'{sign}{_trim(scaled)}{suffix}'

  rounded = round(magnitude, 1)
  if rounded >= 1000:
    return f'{sign}1K'
  if rounded == 0:
    return '0'
  return f'{sign}{_trim(rounded)}'


def format_percent(value: float, signed: bool = True) -> str:
  '''Two-decimal percentage, with an explicit + for gains when signed.'''
  prefix = '+' if signed and value > 0 else ''
  return f'{prefix}{value:.2f}%'
