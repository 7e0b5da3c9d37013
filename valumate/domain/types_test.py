import dataclasses

import pandas as pd
import pytest

from valumate.domain.types import clamp_projection_years
from valumate.domain.types import ValuationInputs
from valumate.domain.types import ValuationResult
from valumate.domain.types import YearProjection


class TestValuationInputs:
  """Tests for ValuationInputs dataclass."""

  def test_defaults(self):
    """Defaults match the manual-entry form."""
    inputs = ValuationInputs()

    assert inputs.symbol == ''
    assert inputs.current_price == 0.0
    assert inputs.free_cash_flow == 0.0
    assert inputs.growth_rate_pct == 10.0
    assert inputs.discount_rate_pct == 9.0
    assert inputs.terminal_growth_rate_pct == 2.5
    assert inputs.shares_outstanding == 0.0
    assert inputs.projection_years == 5

  def test_immutable(self, scenario_a_inputs):
    """Inputs are value objects."""
    with pytest.raises(dataclasses.FrozenInstanceError):
      scenario_a_inputs.current_price = 1.0

  def test_with_updates(self, scenario_a_inputs):
    """with_updates returns a new instance."""
    updated = scenario_a_inputs.with_updates(current_price=75.0)

    assert updated.current_price == 75.0
    assert scenario_a_inputs.current_price == 50.0
    assert updated.free_cash_flow == scenario_a_inputs.free_cash_flow

  def test_to_dict_uses_wire_names(self, scenario_a_inputs):
    """Wire form uses camelCase keys."""
    data = scenario_a_inputs.to_dict()

    assert data == {
        'symbol': 'TEST',
        'currentPrice': 50.0,
        'freeCashFlow': 100.0,
        'growthRate': 10.0,
        'discountRate': 9.0,
        'terminalGrowthRate': 2.5,
        'sharesOutstanding': 1000.0,
        'projectionYears': 5,
    }

  def test_from_dict_round_trip(self, scenario_a_inputs):
    """from_dict inverts to_dict."""
    assert ValuationInputs.from_dict(
        scenario_a_inputs.to_dict()) == scenario_a_inputs

  def test_from_dict_partial(self):
    """Missing and null keys keep defaults, unknown keys are ignored."""
    inputs = ValuationInputs.from_dict({
        'freeCashFlow': '2500',
        'growthRate': None,
        'projectionYears': 7,
        'reasoning': 'ignored',
    })

    assert inputs.free_cash_flow == 2500.0
    assert inputs.growth_rate_pct == 10.0
    assert inputs.projection_years == 7

  def test_from_dict_invalid_number(self):
    """Non-numeric value raises ValueError."""
    with pytest.raises(ValueError):
      ValuationInputs.from_dict({'currentPrice': 'n/a'})


class TestClampProjectionYears:

  @pytest.mark.parametrize('years,expected', [
      (0, 1),
      (-3, 1),
      (1, 1),
      (5, 5),
      (10, 10),
      (25, 10),
  ])
  def test_clamp(self, years, expected):
    assert clamp_projection_years(years) == expected

  def test_custom_bounds(self):
    assert clamp_projection_years(8, lo=2, hi=6) == 6


class TestValuationResult:
  """Tests for ValuationResult dataclass."""

  def _make_result(self) -> ValuationResult:
    return ValuationResult(
        projections=(
            YearProjection(year=1, fcf=110.0, discounted_fcf=100.0),
            YearProjection(year=2, fcf=121.0, discounted_fcf=100.0),
        ),
        terminal_value=2000.0,
        present_terminal_value=1652.9,
        total_enterprise_value=1852.9,
        intrinsic_value_per_share=18.529,
        upside_downside_pct=-7.355,
        is_undervalued=False,
    )

  def test_sum_discounted_fcf(self):
    assert self._make_result().sum_discounted_fcf == pytest.approx(200.0)

  def test_to_dict(self):
    """Wire form mirrors the result fields."""
    data = self._make_result().to_dict()

    assert data['projections'][0] == {
        'year': 1,
        'fcf': 110.0,
        'discountedFcf': 100.0,
    }
    assert data['terminalValue'] == 2000.0
    assert data['presentTerminalValue'] == 1652.9
    assert data['totalEnterpriseValue'] == 1852.9
    assert data['intrinsicValuePerShare'] == 18.529
    assert data['upsideDownside'] == -7.355
    assert data['isUndervalued'] is False

  def test_to_frame(self):
    """Projection table is indexed by year."""
    frame = self._make_result().to_frame()

    expected = pd.DataFrame(
        {
            'fcf': [110.0, 121.0],
            'discounted_fcf': [100.0, 100.0],
        },
        index=pd.Index([1, 2], name='year'),
    )
    pd.testing.assert_frame_equal(frame, expected)

  def test_to_frame_empty(self):
    """Empty projections give an empty table."""
    result = dataclasses.replace(self._make_result(), projections=())

    assert result.to_frame().empty
