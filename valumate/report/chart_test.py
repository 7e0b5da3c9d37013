import pytest

from valumate.report.chart import chart_rows
from valumate.report.chart import plot_projection_chart
from valumate.report.chart import TERMINAL_LABEL


class TestChartRows:

  def test_rows(self, scenario_a_result):
    rows = chart_rows(scenario_a_result)

    assert list(rows.columns) == ['label', 'fcf', 'discounted']
    assert len(rows) == 6
    assert rows['label'].tolist()[:2] == ['Year 1', 'Year 2']
    assert rows['discounted'].iloc[0] == pytest.approx(100.917, abs=0.001)

  def test_terminal_row_last(self, scenario_a_result):
    last = chart_rows(scenario_a_result).iloc[-1]

    assert last['label'] == TERMINAL_LABEL
    assert last['fcf'] == scenario_a_result.terminal_value
    assert last['discounted'] == scenario_a_result.present_terminal_value


class TestPlotProjectionChart:

  def test_writes_png(self, scenario_a_result, tmp_path):
    output = tmp_path / 'charts' / 'test.png'

    written = plot_projection_chart(scenario_a_result, output, title='TEST')

    assert written == output
    assert output.exists()
    assert output.read_bytes()[:8] == b'\x89PNG\r\n\x1a\n'
