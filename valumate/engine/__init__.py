'''DCF calculation engine with pure math functions.'''

from valumate.engine.dcf import (
    compute,
    compute_terminal_value,
    project_cash_flows,
    TERMINAL_DENOMINATOR_FLOOR,
)

__all__ = [
    'compute',
    'compute_terminal_value',
    'project_cash_flows',
    'TERMINAL_DENOMINATOR_FLOOR',
]
