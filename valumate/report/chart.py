'''
Bar chart of discounted cash flows.

One bar per explicit forecast year plus a final, highlighted bar for the
present value of the terminal value.
'''

import logging
from pathlib import Path
from typing import Optional

import matplotlib.pyplot as plt
import pandas as pd

from valumate.domain.types import ValuationResult
from valumate.report.formatting import format_compact

logger = logging.getLogger(__name__)

TERMINAL_LABEL = 'Terminal (PV)'
YEAR_COLOR = '#94a3b8'
TERMINAL_COLOR = '#3b82f6'


def chart_rows(result: ValuationResult) -> pd.DataFrame:
  '''
  Chart data for a result.

  Returns:
    DataFrame with columns label, fcf, discounted: one row per year, then
    a synthetic terminal row (terminal value, present terminal value)
  '''
  rows = [(f'Year {p.year}', p.fcf, p.discounted_fcf)
          for p in result.projections]
  rows.append(
      (TERMINAL_LABEL, result.terminal_value, result.present_terminal_value))
  return pd.DataFrame(rows, columns=['label', 'fcf', 'discounted'])


def plot_projection_chart(
    result: ValuationResult,
    output_path: Path,
    title: Optional[str] = None,
) -> Path:
  '''
  Save a bar chart of discounted cash flows as an image.

  Args:
    result: Valuation result to plot
    output_path: Destination file (format from suffix, e.g. .png)
    title: Chart title (default: 'Projected Cash Flows (Discounted)')

  Returns:
    The path written
  '''
  rows = chart_rows(result)
  colors = [YEAR_COLOR] * (len(rows) - 1) + [TERMINAL_COLOR]

  fig, ax = plt.subplots(figsize=(10, 5))
  bars = ax.bar(rows['label'], rows['discounted'], color=colors)
  ax.bar_label(bars,
               labels=[format_compact(v) for v in rows['discounted']],
               fontsize=9)

  ax.set_title(title or 'Projected Cash Flows (Discounted)',
               fontsize=14,
               fontweight='bold')
  ax.yaxis.set_visible(False)
  ax.grid(True, axis='y', alpha=0.3, linestyle='--')
  ax.text(0.5,
          -0.12,
          'Blue bar is the present value of the terminal value',
          transform=ax.transAxes,
          ha='center',
          fontsize=9,
          color='#64748b')
  fig.tight_layout()

  output_path = Path(output_path)
  output_path.parent.mkdir(parents=True, exist_ok=True)
  fig.savefig(output_path, dpi=150, bbox_inches='tight')
  plt.close(fig)
  logger.info('Saved: %s', output_path)
  return output_path
