import matplotlib
import pytest

from valumate.domain.types import ValuationInputs
from valumate.engine.dcf import compute

matplotlib.use('Agg')


@pytest.fixture
def scenario_a_inputs() -> ValuationInputs:
  """Five-year assumption set with a comfortable r - g spread."""
  return ValuationInputs(
      symbol='TEST',
      current_price=50.0,
      free_cash_flow=100.0,
      growth_rate_pct=10.0,
      discount_rate_pct=9.0,
      terminal_growth_rate_pct=2.5,
      shares_outstanding=1000.0,
      projection_years=5,
  )


@pytest.fixture
def undervalued_inputs() -> ValuationInputs:
  """Realistic large-cap inputs whose intrinsic value exceeds price."""
  return ValuationInputs(
      symbol='UNDR',
      current_price=20.0,
      free_cash_flow=2_000_000_000.0,
      growth_rate_pct=8.0,
      discount_rate_pct=9.0,
      terminal_growth_rate_pct=2.5,
      shares_outstanding=1_000_000_000.0,
      projection_years=5,
  )


@pytest.fixture
def gemini_payload() -> dict:
  """generateContent response with markdown-wrapped JSON and citations."""
  text = ('```json\n'
          '{"symbol": "AAPL", "currentPrice": 190.5, '
          '"freeCashFlow": 99500000000, "growthRate": 8, '
          '"discountRate": 9.2, "terminalGrowthRate": 2.5, '
          '"sharesOutstanding": 15400000000, '
          '"reasoning": "Based on FY2024 10-K."}\n'
          '```')
  return {
      'candidates': [{
          'content': {
              'parts': [{
                  'text': text
              }],
              'role': 'model',
          },
          'groundingMetadata': {
              'groundingChunks': [
                  {
                      'web': {
                          'uri': 'https://example.com/a',
                          'title': 'a'
                      }
                  },
                  {
                      'web': {
                          'uri': 'https://example.com/b',
                          'title': 'b'
                      }
                  },
                  {
                      'web': {
                          'uri': 'https://example.com/a',
                          'title': 'a again'
                      }
                  },
                  {
                      'retrievedContext': {
                          'uri': 'ignored'
                      }
                  },
              ]
          },
      }]
  }


@pytest.fixture
def scenario_a_result(scenario_a_inputs):
  return compute(scenario_a_inputs)
