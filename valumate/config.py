"""
Application configuration.

AppConfig is a serializable (JSON-friendly) configuration class holding the
assumption source settings, the default manual-entry assumptions and the
projection horizon limits. The valuation engine itself takes no
configuration.
"""

from dataclasses import asdict
from dataclasses import dataclass
from dataclasses import fields
import json
import os
from typing import Any, Mapping, Optional

from valumate.domain.types import clamp_projection_years
from valumate.domain.types import ValuationInputs

GEMINI_API_BASE = 'https://generativelanguage.googleapis.com/v1beta'


@dataclass
class AppConfig:
  """
  Configuration for the valuation application.

  Attributes:
    model: Gemini model name used by the assumption source
    api_base: Base URL of the Gemini REST API
    api_key: Gemini API key (empty disables auto-fill)
    request_timeout_sec: HTTP timeout for a single lookup
    default_growth_rate_pct: Growth used when a source omits it
    default_discount_rate_pct: Discount rate used when a source omits it
    default_terminal_growth_rate_pct: Terminal growth used when omitted
    default_projection_years: Initial forecast horizon
    min_projection_years: Lower bound for the horizon
    max_projection_years: Upper bound for the horizon
    max_workers: Thread pool size for background lookups
  """
  model: str = 'gemini-2.5-flash'
  api_base: str = GEMINI_API_BASE
  api_key: str = ''
  request_timeout_sec: float = 60.0
  default_growth_rate_pct: float = 10.0
  default_discount_rate_pct: float = 9.0
  default_terminal_growth_rate_pct: float = 2.5
  default_projection_years: int = 5
  min_projection_years: int = 1
  max_projection_years: int = 10
  max_workers: int = 1

  @classmethod
  def default(cls) -> 'AppConfig':
    """Create default configuration (no API key)."""
    return cls()

  @classmethod
  def from_env(
      cls,
      environ: Optional[Mapping[str, str]] = None,
  ) -> 'AppConfig':
    """
    Create configuration from environment variables.

    Reads:
      GEMINI_API_KEY (falls back to API_KEY)
      VALUMATE_MODEL
      VALUMATE_TIMEOUT_SEC

    Args:
      environ: Mapping to read from (default: os.environ)
    """
    env = os.environ if environ is None else environ
    config = cls.default()
    config.api_key = env.get('GEMINI_API_KEY') or env.get('API_KEY', '')
    if env.get('VALUMATE_MODEL'):
      config.model = env['VALUMATE_MODEL']
    if env.get('VALUMATE_TIMEOUT_SEC'):
      config.request_timeout_sec = float(env['VALUMATE_TIMEOUT_SEC'])
    return config

  def default_inputs(self, symbol: str = '') -> ValuationInputs:
    """Blank assumption set for manual entry."""
    return ValuationInputs(
        symbol=symbol,
        growth_rate_pct=self.default_growth_rate_pct,
        discount_rate_pct=self.default_discount_rate_pct,
        terminal_growth_rate_pct=self.default_terminal_growth_rate_pct,
        projection_years=self.clamp_years(self.default_projection_years),
    )

  def clamp_years(self, years: int) -> int:
    """Clamp a horizon into the configured bounds."""
    return clamp_projection_years(years, self.min_projection_years,
                                  self.max_projection_years)

  def to_dict(self) -> dict[str, Any]:
    """Convert to dictionary."""
    return asdict(self)

  def to_json(self) -> str:
    """Serialize to JSON string."""
    return json.dumps(self.to_dict(), indent=2)

  @classmethod
  def from_dict(cls, data: dict[str, Any]) -> 'AppConfig':
    """
    Create from dictionary.

    Raises:
      ValueError: If data contains unknown keys
    """
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - known)
    if unknown:
      raise ValueError(f'Unknown config keys: {unknown}. '
                       f'Available: {sorted(known)}')
    return cls(**data)

  @classmethod
  def from_json(cls, json_str: str) -> 'AppConfig':
    """Create from JSON string."""
    return cls.from_dict(json.loads(json_str))
