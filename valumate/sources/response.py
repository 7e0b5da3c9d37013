'''
Parsing of LLM lookup responses into valuation inputs.

The model is asked for a bare JSON object but may wrap it in markdown or
prose, and any field may be missing or non-numeric. Everything here is
tolerant: unusable fields fall back to the manual-entry defaults.
'''

import json
import math
from numbers import Real
import re
from typing import Any, Optional

from valumate.config import AppConfig
from valumate.domain.types import ValuationInputs

_JSON_OBJECT_RE = re.compile(r'\{[\s\S]*\}')

DEFAULT_REASONING = 'Figures estimated by Gemini 2.5 Flash.'


def extract_json_object(text: Optional[str]) -> str:
  '''Return the outermost {...} span of text, or '{}' when there is none.'''
  match = _JSON_OBJECT_RE.search(text or '')
  return match.group(0) if match else '{}'


def parse_payload(text: Optional[str]) -> dict[str, Any]:
  '''
  Parse the JSON object embedded in a model reply.

  Raises:
    ValueError: If the embedded object is not valid JSON or not an object
  '''
  data = json.loads(extract_json_object(text))
  if not isinstance(data, dict):
    raise ValueError(f'Expected a JSON object, got {type(data).__name__}')
  return data


def coerce_number(value: Any, default: float) -> float:
  '''Return value as float if it is a finite real number, else default.'''
  if isinstance(value, bool) or not isinstance(value, Real):
    return default
  value = float(value)
  if not math.isfinite(value):
    return default
  return value


def build_inputs(
    data: dict[str, Any],
    ticker: str,
    config: Optional[AppConfig] = None,
) -> ValuationInputs:
  '''
  Build a complete ValuationInputs from a parsed lookup payload.

  Args:
    data: Parsed JSON object from the model
    ticker: Ticker the lookup was issued for
    config: Supplies defaults for missing rates (default: AppConfig.default())

  Returns:
    ValuationInputs with defaults applied to every unusable field
  '''
  config = config or AppConfig.default()
  symbol = data.get('symbol')
  if not isinstance(symbol, str) or not symbol:
    symbol = ticker.upper()

  return ValuationInputs(
      symbol=symbol,
      current_price=coerce_number(data.get('currentPrice'), 0.0),
      free_cash_flow=coerce_number(data.get('freeCashFlow'), 0.0),
      growth_rate_pct=coerce_number(data.get('growthRate'),
                                    config.default_growth_rate_pct),
      discount_rate_pct=coerce_number(data.get('discountRate'),
                                      config.default_discount_rate_pct),
      terminal_growth_rate_pct=coerce_number(
          data.get('terminalGrowthRate'),
          config.default_terminal_growth_rate_pct),
      shares_outstanding=coerce_number(data.get('sharesOutstanding'), 0.0),
      projection_years=config.clamp_years(config.default_projection_years),
  )


def extract_reasoning(data: dict[str, Any]) -> str:
  reasoning = data.get('reasoning')
  if isinstance(reasoning, str) and reasoning.strip():
    return reasoning.strip()
  return DEFAULT_REASONING


def _first_candidate(response: dict[str, Any]) -> dict[str, Any]:
  candidates = response.get('candidates')
  if not isinstance(candidates, list) or not candidates:
    return {}
  candidate = candidates[0]
  return candidate if isinstance(candidate, dict) else {}


def extract_text(response: dict[str, Any]) -> str:
  '''Concatenate the string text parts of the first candidate.'''
  candidate = _first_candidate(response)
  content = candidate.get('content')
  if not isinstance(content, dict):
    return ''
  parts = content.get('parts')
  if not isinstance(parts, list):
    return ''
  texts = (p.get('text') for p in parts if isinstance(p, dict))
  return ''.join(t for t in texts if isinstance(t, str))


def extract_sources(response: dict[str, Any]) -> list[str]:
  '''
  Collect web citation URIs from the first candidate's grounding metadata.

  Returns:
    Unique URIs in first-seen order
  '''
  metadata = _first_candidate(response).get('groundingMetadata')
  if not isinstance(metadata, dict):
    return []
  chunks = metadata.get('groundingChunks')
  if not isinstance(chunks, list):
    return []
  sources: list[str] = []
  for chunk in chunks:
    web = chunk.get('web') if isinstance(chunk, dict) else None
    uri = web.get('uri') if isinstance(web, dict) else None
    if isinstance(uri, str) and uri and uri not in sources:
      sources.append(uri)
  return sources
