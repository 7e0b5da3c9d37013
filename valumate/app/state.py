'''
Application state for an interactive valuation session.

State is an immutable AppState updated only through discrete events via
reduce(). The valuation itself is never stored: AppState.result recomputes
it from the current inputs, so every edit is reflected immediately.

ValuationSession wraps the reducer with the one asynchronous operation, the
assumption lookup. Lookups run on a thread pool; each carries a request id
and a completion for anything but the latest request is dropped.

Usage:
  session = ValuationSession(source=GeminiAssumptionSource(config))
  session.edit(symbol='AAPL')
  future = session.analyze()
  state = future.result()
  print(state.result.intrinsic_value_per_share)
'''

from concurrent.futures import Future
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field, replace
import logging
import math
import re
import threading
from typing import Any, Callable, Optional, Union

from valumate.config import AppConfig
from valumate.domain.types import AssumptionSuggestion
from valumate.domain.types import ValuationInputs
from valumate.domain.types import ValuationResult
from valumate.engine.dcf import compute
from valumate.report.card import has_valuation
from valumate.sources.base import AssumptionSource
from valumate.sources.base import AssumptionSourceError

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = 'Failed to analyze stock.'

_LEADING_NUMBER_RE = re.compile(r'^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?')


def parse_form_value(name: str, text: str) -> Any:
  '''
  Convert raw form text into a field value.

  The symbol is upper-cased. Numeric fields take the leading number of the
  text and fall back to 0 when there is none, so partially typed values
  such as "12.", "-" or an out-of-range "1e400" never fail.
  '''
  if name == 'symbol':
    return text.upper()
  match = _LEADING_NUMBER_RE.match(text or '')
  value = float(match.group(0)) if match else 0.0
  if not math.isfinite(value):
    value = 0.0
  if name == 'projection_years':
    return int(value)
  return value


@dataclass(frozen=True)
class AppState:
  '''
  Snapshot of the session.

  Attributes:
    inputs: Current assumption set
    is_loading: True while the latest lookup is outstanding
    reasoning: Rationale from the last successful lookup
    sources: Citation URLs from the last successful lookup
    error: User-facing message from the last failed lookup
    request_id: Id of the latest issued lookup (0 before any)
  '''
  inputs: ValuationInputs = field(default_factory=ValuationInputs)
  is_loading: bool = False
  reasoning: Optional[str] = None
  sources: tuple[str, ...] = ()
  error: Optional[str] = None
  request_id: int = 0

  @property
  def has_valuation(self) -> bool:
    '''Whether inputs are complete enough to show a verdict.'''
    return has_valuation(self.inputs)

  @property
  def result(self) -> ValuationResult:
    return compute(self.inputs)


@dataclass(frozen=True)
class InputsEdited:
  '''User changed one or more input fields.'''
  changes: dict[str, Any]


@dataclass(frozen=True)
class FieldEdited:
  '''User typed raw text into a single form field.'''
  name: str
  text: str


@dataclass(frozen=True)
class AnalyzeRequested:
  request_id: int


@dataclass(frozen=True)
class AnalyzeSucceeded:
  request_id: int
  suggestion: AssumptionSuggestion


@dataclass(frozen=True)
class AnalyzeFailed:
  request_id: int
  message: str


Event = Union[InputsEdited, FieldEdited, AnalyzeRequested, AnalyzeSucceeded,
              AnalyzeFailed]


def reduce(state: AppState, event: Event,
           config: Optional[AppConfig] = None) -> AppState:
  '''
  Apply one event to a state.

  Pure: returns a new AppState and never mutates the given one.

  Args:
    state: Current state
    event: Event to apply
    config: Supplies projection year bounds (default: AppConfig.default())

  Returns:
    Next state

  Raises:
    TypeError: If event is not a known event type
  '''
  config = config or AppConfig.default()

  if isinstance(event, InputsEdited):
    changes = dict(event.changes)
    if 'projection_years' in changes:
      changes['projection_years'] = config.clamp_years(
          changes['projection_years'])
    return replace(state, inputs=state.inputs.with_updates(**changes))

  if isinstance(event, FieldEdited):
    return reduce(state,
                  InputsEdited({event.name: parse_form_value(event.name,
                                                             event.text)}),
                  config)

  if isinstance(event, AnalyzeRequested):
    return replace(state,
                   is_loading=True,
                   error=None,
                   reasoning=None,
                   request_id=event.request_id)

  if isinstance(event, (AnalyzeSucceeded, AnalyzeFailed)):
    if event.request_id != state.request_id:
      logger.debug('Dropping superseded lookup %d (latest %d)',
                   event.request_id, state.request_id)
      return state

  if isinstance(event, AnalyzeSucceeded):
    suggestion = event.suggestion
    return replace(state,
                   inputs=suggestion.inputs,
                   reasoning=suggestion.reasoning,
                   sources=tuple(suggestion.sources),
                   is_loading=False)

  if isinstance(event, AnalyzeFailed):
    return replace(state, error=event.message, is_loading=False)

  raise TypeError(f'Unknown event: {event!r}')


class ValuationSession:
  '''
  Event-driven session around AppState.

  Dispatch is serialized with a lock because lookup completions arrive on
  worker threads.
  '''

  def __init__(
      self,
      source: Optional[AssumptionSource] = None,
      config: Optional[AppConfig] = None,
      executor: Optional[ThreadPoolExecutor] = None,
  ):
    '''
    Initialize session.

    Args:
      source: Assumption source for analyze() (None disables auto-fill)
      config: AppConfig (default: AppConfig.default())
      executor: Pool for lookups (default: owned pool of config.max_workers)
    '''
    self.config = config or AppConfig.default()
    self.source = source
    self._owns_executor = executor is None
    self._executor = executor or ThreadPoolExecutor(
        max_workers=self.config.max_workers)
    self._lock = threading.Lock()
    self._next_request_id = 0
    self._listeners: list[Callable[[AppState], None]] = []
    self._state = AppState(inputs=self.config.default_inputs())

  @property
  def state(self) -> AppState:
    return self._state

  def subscribe(self, listener: Callable[[AppState], None]) -> None:
    '''Register a callback invoked with every new state.'''
    self._listeners.append(listener)

  def dispatch(self, event: Event) -> AppState:
    with self._lock:
      self._state = reduce(self._state, event, self.config)
      state = self._state
    for listener in self._listeners:
      listener(state)
    return state

  def edit(self, **changes: Any) -> AppState:
    return self.dispatch(InputsEdited(changes=changes))

  def edit_field(self, name: str, text: str) -> AppState:
    return self.dispatch(FieldEdited(name=name, text=text))

  def analyze(self) -> Optional['Future[AppState]']:
    '''
    Start an assumption lookup for the current symbol.

    Returns:
      Future resolving to the state after the lookup is applied, or None
      when there is no symbol or no source
    '''
    symbol = self._state.inputs.symbol.strip()
    if not symbol:
      return None
    if self.source is None:
      logger.warning('Auto-fill requested for %s but no source configured',
                     symbol)
      return None

    with self._lock:
      self._next_request_id += 1
      request_id = self._next_request_id
    self.dispatch(AnalyzeRequested(request_id=request_id))
    return self._executor.submit(self._lookup, self.source, request_id,
                                 symbol)

  def _lookup(self, source: AssumptionSource, request_id: int,
              symbol: str) -> AppState:
    try:
      suggestion = source.fetch(symbol)
    except AssumptionSourceError as e:
      return self.dispatch(AnalyzeFailed(request_id=request_id,
                                         message=str(e)))
    except Exception:  # pylint: disable=broad-except
      logger.exception('Unexpected failure looking up %s', symbol)
      return self.dispatch(
          AnalyzeFailed(request_id=request_id,
                        message=GENERIC_FAILURE_MESSAGE))
    return self.dispatch(
        AnalyzeSucceeded(request_id=request_id, suggestion=suggestion))

  def close(self) -> None:
    if self._owns_executor:
      self._executor.shutdown(wait=True)

  def __enter__(self) -> 'ValuationSession':
    return self

  def __exit__(self, *exc_info: Any) -> None:
    self.close()
