import pytest

from valumate.report.formatting import format_compact
from valumate.report.formatting import format_currency
from valumate.report.formatting import format_percent


class TestFormatCurrency:

  @pytest.mark.parametrize('value,expected', [
      (1234.5, '$1,234.50'),
      (0, '$0.00'),
      (2.16453, '$2.16'),
      (1_000_000, '$1,000,000.00'),
      (-1234.5, '-$1,234.50'),
      (-0.001, '$0.00'),
  ])
  def test_format(self, value, expected):
    assert format_currency(value) == expected

  def test_non_finite(self):
    assert format_currency(float('inf')) == 'inf'


class TestFormatCompact:

  @pytest.mark.parametrize('value,expected', [
      (0, '0'),
      (12.34, '12.3'),
      (950, '950'),
      (1000, '1K'),
      (1500, '1.5K'),
      (1_500_000, '1.5M'),
      (2_340_000, '2.3M'),
      (99_500_000_000, '99.5B'),
      (1.2e12, '1.2T'),
      (-4e9, '-4B'),
      (999_960, '1M'),
      (999.96, '1K'),
  ])
  def test_format(self, value, expected):
    assert format_compact(value) == expected


class TestFormatPercent:

  def test_positive_signed(self):
    assert format_percent(12.346) == '+12.35%'

  def test_negative(self):
    assert format_percent(-95.67) == '-95.67%'

  def test_unsigned(self):
    assert format_percent(5.0, signed=False) == '5.00%'
