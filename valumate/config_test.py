import pytest

from valumate.config import AppConfig
from valumate.domain.types import ValuationInputs


class TestAppConfig:
  """Tests for AppConfig."""

  def test_default(self):
    config = AppConfig.default()

    assert config.model == 'gemini-2.5-flash'
    assert config.api_key == ''
    assert config.min_projection_years == 1
    assert config.max_projection_years == 10

  def test_default_inputs(self):
    """Default inputs match the manual-entry form."""
    inputs = AppConfig.default().default_inputs('msft')

    assert inputs == ValuationInputs(symbol='msft')

  def test_default_inputs_clamps_years(self):
    config = AppConfig(default_projection_years=40)

    assert config.default_inputs().projection_years == 10

  def test_from_env(self):
    config = AppConfig.from_env({
        'GEMINI_API_KEY': 'secret',
        'VALUMATE_MODEL': 'gemini-2.5-pro',
        'VALUMATE_TIMEOUT_SEC': '15',
    })

    assert config.api_key == 'secret'
    assert config.model == 'gemini-2.5-pro'
    assert config.request_timeout_sec == 15.0

  def test_from_env_fallback_key(self):
    """API_KEY is used when GEMINI_API_KEY is absent."""
    config = AppConfig.from_env({'API_KEY': 'legacy'})

    assert config.api_key == 'legacy'
    assert config.model == 'gemini-2.5-flash'

  def test_from_env_empty(self):
    assert AppConfig.from_env({}).api_key == ''

  def test_json_round_trip(self):
    config = AppConfig(model='m', request_timeout_sec=5.0, max_workers=2)

    assert AppConfig.from_json(config.to_json()) == config

  def test_from_dict_unknown_key(self):
    with pytest.raises(ValueError, match='Unknown config keys'):
      AppConfig.from_dict({'n_years': 10})
