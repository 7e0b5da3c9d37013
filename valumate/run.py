'''
Single-company valuation entrypoint.

This module provides the command line entry point. It:
1. Optionally pre-fills inputs from the Gemini assumption source
2. Applies any explicitly supplied assumptions on top
3. Runs the DCF engine
4. Logs a verdict card, and optionally writes a chart and JSON output

Usage:
  python -m valumate.run --ticker AAPL --auto-fill
  python -m valumate.run --ticker TEST --price 50 --fcf 100 --shares 1000 \\
      --growth 10 --discount 9 --terminal-growth 2.5 --years 5 \\
      --chart output/test.png --json
'''

import argparse
import json
import logging
from pathlib import Path
from typing import Optional

from valumate.app.state import ValuationSession
from valumate.config import AppConfig
from valumate.domain.types import ValuationResult
from valumate.report.card import has_valuation
from valumate.report.card import render_verdict
from valumate.report.chart import plot_projection_chart
from valumate.sources.base import AssumptionSource
from valumate.sources.gemini import GeminiAssumptionSource

logger = logging.getLogger(__name__)

# CLI flag destination -> ValuationInputs attribute.
INPUT_FLAGS: dict[str, str] = {
    'price': 'current_price',
    'fcf': 'free_cash_flow',
    'growth': 'growth_rate_pct',
    'discount': 'discount_rate_pct',
    'terminal_growth': 'terminal_growth_rate_pct',
    'shares': 'shares_outstanding',
    'years': 'projection_years',
}


def load_config(config_path: Optional[Path]) -> AppConfig:
  '''Load AppConfig from a JSON file, or from the environment.'''
  if config_path is None:
    return AppConfig.from_env()
  if not config_path.exists():
    raise FileNotFoundError(f'Config not found: {config_path}')
  with open(config_path, 'r', encoding='utf-8') as f:
    config = AppConfig.from_json(f.read())
  if not config.api_key:
    config.api_key = AppConfig.from_env().api_key
  return config


def build_parser() -> argparse.ArgumentParser:
  parser = argparse.ArgumentParser(description='Run DCF valuation')
  parser.add_argument('--ticker', type=str, default='', help='Company ticker')
  parser.add_argument('--price',
                      type=float,
                      help='Current market price per share')
  parser.add_argument('--fcf',
                      type=float,
                      help='Latest annual free cash flow (raw units)')
  parser.add_argument('--growth',
                      type=float,
                      help='FCF growth rate during projection (%%)')
  parser.add_argument('--discount',
                      type=float,
                      help='Discount rate / WACC (%%)')
  parser.add_argument('--terminal-growth',
                      type=float,
                      help='Perpetual growth rate after projection (%%)')
  parser.add_argument('--shares',
                      type=float,
                      help='Shares outstanding (raw units)')
  parser.add_argument('--years',
                      type=int,
                      help='Explicit projection years (clamped to 1-10)')
  parser.add_argument('--auto-fill',
                      action='store_true',
                      help='Pre-fill inputs from Gemini (GEMINI_API_KEY)')
  parser.add_argument('--chart',
                      type=Path,
                      help='Write the discounted cash flow chart here')
  parser.add_argument('--json',
                      action='store_true',
                      help='Print the result as JSON')
  parser.add_argument('--config', type=Path, help='Path to AppConfig JSON')
  parser.add_argument('--verbose',
                      '-v',
                      action='store_true',
                      help='Verbose output')
  return parser


def make_source(config: AppConfig) -> Optional[AssumptionSource]:
  try:
    return GeminiAssumptionSource(config)
  except ValueError as e:
    logger.warning('Auto-fill disabled: %s', e)
    return None


def run(args: argparse.Namespace,
        source: Optional[AssumptionSource] = None) -> ValuationResult:
  '''
  Run one valuation from parsed CLI arguments.

  Args:
    args: Parsed arguments from build_parser()
    source: Assumption source override (default: Gemini when --auto-fill)

  Returns:
    ValuationResult for the final inputs
  '''
  config = load_config(args.config)
  if args.auto_fill and source is None:
    source = make_source(config)

  with ValuationSession(source=source, config=config) as session:
    session.edit_field('symbol', args.ticker)

    if args.auto_fill:
      future = session.analyze()
      if future is not None:
        state = future.result()
        if state.error:
          logger.warning('%s: %s', args.ticker, state.error)

    manual = {
        attr: getattr(args, flag)
        for flag, attr in INPUT_FLAGS.items()
        if getattr(args, flag) is not None
    }
    if manual:
      session.edit(**manual)

    state = session.state

  result = state.result

  separator = '=' * 70
  logger.info(separator)
  logger.info('%s',
              render_verdict(state.inputs, result, state.reasoning,
                             state.sources))
  logger.info(separator)
  if not has_valuation(state.inputs):
    logger.warning('Price and free cash flow must be positive for a '
                   'meaningful verdict.')

  if args.chart:
    plot_projection_chart(result, args.chart,
                          title=f'{state.inputs.symbol} Discounted Cash Flows')

  if args.json:
    payload = {
        'inputs': state.inputs.to_dict(),
        'result': result.to_dict(),
    }
    print(json.dumps(payload, indent=2))

  return result


def main(argv: Optional[list[str]] = None) -> None:
  '''CLI entrypoint.'''
  args = build_parser().parse_args(argv)

  logging.basicConfig(
      level=logging.DEBUG if args.verbose else logging.INFO,
      format='%(message)s',
  )
  run(args)


if __name__ == '__main__':
  main()
