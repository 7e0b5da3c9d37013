'''
ValuMate: discounted cash flow valuation.

The core is a pure DCF engine that maps an assumption set to a valuation
result. Around it sit an optional LLM-backed assumption source, an
event-driven application state and a small presentation layer.

Usage:
  from valumate.domain.types import ValuationInputs
  from valumate.engine.dcf import compute

  inputs = ValuationInputs(current_price=50, free_cash_flow=100,
                           shares_outstanding=1000)
  result = compute(inputs)
  print(result.intrinsic_value_per_share, result.is_undervalued)
'''
