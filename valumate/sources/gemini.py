'''
Gemini-backed assumption source.

Asks a Gemini model, grounded with Google Search, for the figures a DCF
needs and parses its JSON reply. A single request per lookup: no retries,
the timeout is the only transport policy.

References:
- generateContent endpoint:
  https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent
- Grounding with Google Search returns citations under
  candidates[].groundingMetadata.groundingChunks[].web.uri
'''

import logging
from typing import Any, Optional

import requests

from valumate.config import AppConfig
from valumate.domain.types import AssumptionSuggestion
from valumate.sources.base import AssumptionSource
from valumate.sources.base import AssumptionSourceError
from valumate.sources.response import build_inputs
from valumate.sources.response import extract_reasoning
from valumate.sources.response import extract_sources
from valumate.sources.response import extract_text
from valumate.sources.response import parse_payload

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = '''
I need to perform a Discounted Cash Flow (DCF) valuation for the company with
ticker symbol: {ticker}.

Please use Google Search to find the most recent financial data available.
I need the following specific metrics:
1. Current Stock Price (USD).
2. Latest Annual Free Cash Flow (FCF) in USD.
3. Estimated Growth Rate for the next 5 years (percentage). If unknown,
   estimate based on historical CAGR or industry averages (conservative).
4. Weighted Average Cost of Capital (WACC) as the Discount Rate (percentage).
5. Shares Outstanding.

Return a JSON object with this structure:
{{
  "symbol": "{ticker}",
  "currentPrice": <number>,
  "freeCashFlow": <number>,
  "growthRate": <number>,
  "discountRate": <number>,
  "terminalGrowthRate": 2.5,
  "sharesOutstanding": <number>,
  "reasoning": "<short summary of where the figures come from and why this
                growth rate / WACC was chosen>"
}}

Rules:
- Return ONLY raw JSON. No markdown code blocks.
- freeCashFlow and sharesOutstanding should be full raw numbers
  (e.g., 1000000000 for 1B).
- If you find values in billions/millions, convert them to full numbers.
'''


def build_prompt(ticker: str) -> str:
  return PROMPT_TEMPLATE.format(ticker=ticker)


class GeminiAssumptionSource(AssumptionSource):
  '''
  Assumption source backed by the Gemini REST API.

  A response schema cannot be combined with the search tool, so the JSON
  shape is requested in the prompt and parsed tolerantly.
  '''

  def __init__(
      self,
      config: AppConfig,
      session: Optional[requests.Session] = None,
  ):
    '''
    Initialize Gemini source.

    Args:
      config: AppConfig with api_key, model, api_base and timeout
      session: HTTP session to reuse (default: new requests.Session)

    Raises:
      ValueError: If config has no API key
    '''
    if not config.api_key:
      raise ValueError('Gemini API key is not configured. '
                       'Set GEMINI_API_KEY to enable auto-fill.')
    self.config = config
    self.session = session or requests.Session()

  @property
  def endpoint(self) -> str:
    return (f'{self.config.api_base.rstrip("/")}/models/'
            f'{self.config.model}:generateContent')

  def request_body(self, ticker: str) -> dict[str, Any]:
    return {
        'contents': [{
            'role': 'user',
            'parts': [{
                'text': build_prompt(ticker)
            }],
        }],
        'tools': [{
            'google_search': {}
        }],
    }

  def generate(self, ticker: str) -> dict[str, Any]:
    '''
    Issue one generateContent request.

    Returns:
      Decoded JSON response

    Raises:
      requests.RequestException: On transport or HTTP errors
      ValueError: If the body is not JSON
    '''
    resp = self.session.post(
        self.endpoint,
        headers={
            'x-goog-api-key': self.config.api_key,
            'Content-Type': 'application/json',
        },
        json=self.request_body(ticker),
        timeout=self.config.request_timeout_sec,
    )
    status = int(resp.status_code)
    if status >= 400:
      raise requests.HTTPError(
          f'HTTP {status} from {self.config.model}: {resp.text[:200]}')
    body = resp.json()
    if not isinstance(body, dict):
      raise ValueError(f'Unexpected response body: {type(body).__name__}')
    return body

  def fetch(self, ticker: str) -> AssumptionSuggestion:
    '''Look up assumptions for ticker via Gemini.'''
    logger.info('Requesting DCF assumptions for %s from %s', ticker,
                self.config.model)
    try:
      response = self.generate(ticker)
      data = parse_payload(extract_text(response))
      inputs = build_inputs(data, ticker, self.config)
      reasoning = extract_reasoning(data)
      sources = extract_sources(response)
    except (requests.RequestException, ValueError, TypeError) as e:
      logger.error('Gemini lookup for %s failed: %s', ticker, e)
      raise AssumptionSourceError() from e

    logger.debug('%s: parsed %s with %d sources', ticker, inputs.to_dict(),
                 len(sources))

    return AssumptionSuggestion(
        inputs=inputs,
        reasoning=reasoning,
        sources=tuple(sources),
    )
