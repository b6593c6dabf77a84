"""Quote fetching and strict parsing of 0x quote responses."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx
from eth_utils import is_address, is_hex

from ...providers.zerox import ZeroExProvider
from ..errors import QuoteMalformed, QuoteUnavailable
from .constants import ZERO_ADDRESS
from .models import Quote, TradeRequest


logger = logging.getLogger(__name__)


def _require(payload: Dict[str, Any], path: str) -> Any:
    node: Any = payload
    for key in path.split("."):
        if not isinstance(node, dict) or node.get(key) in (None, ""):
            raise QuoteMalformed(f"Quote response is missing {path}", field=path)
        node = node[key]
    return node


def _optional(payload: Dict[str, Any], path: str) -> Optional[Any]:
    node: Any = payload
    for key in path.split("."):
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node if node not in (None, "") else None


def _as_int(value: Any, path: str) -> int:
    if isinstance(value, bool):
        raise QuoteMalformed(f"Quote field {path} is not an integer: {value!r}", field=path)
    if isinstance(value, int):
        result = value
    elif isinstance(value, str):
        text = value.strip()
        try:
            result = int(text, 16) if text.lower().startswith("0x") else int(text)
        except ValueError:
            raise QuoteMalformed(f"Quote field {path} is not an integer: {value!r}", field=path)
    else:
        raise QuoteMalformed(f"Quote field {path} is not an integer: {value!r}", field=path)
    if result < 0:
        raise QuoteMalformed(f"Quote field {path} is negative: {value!r}", field=path)
    return result


def _require_int(payload: Dict[str, Any], path: str, fallback: str) -> int:
    # 0x v2 nests value/gasPrice under "transaction"; v1 keeps them top-level
    value = _optional(payload, path)
    if value is None:
        value = _optional(payload, fallback)
    if value is None:
        raise QuoteMalformed(f"Quote response is missing {path}", field=path)
    return _as_int(value, path)


def _address(value: Any, path: str) -> str:
    if not isinstance(value, str) or not is_address(value):
        raise QuoteMalformed(f"Quote field {path} is not an address: {value!r}", field=path)
    return value


def _token(payload: Dict[str, Any], key: str, requested: Optional[str]) -> str:
    quoted = _optional(payload, key)
    if quoted is None:
        if requested is None:
            raise QuoteMalformed(f"Quote response is missing {key}", field=key)
        return requested
    if requested is not None and str(quoted).lower() != requested.lower():
        raise QuoteMalformed(f"Quote {key} {quoted} does not match requested {requested}", field=key)
    return quoted


def parse_quote(payload: Any, request: Optional[TradeRequest] = None) -> Quote:
    """Parse a quote response body into a ``Quote``.

    Only ``issues.allowance.spender`` falls back to a default (the zero
    address). ``sellToken``/``buyToken`` may be omitted when the originating
    request is known, but must match it when present. Any other missing or
    invalid field raises ``QuoteMalformed``.
    """
    if not isinstance(payload, dict):
        raise QuoteMalformed("Quote response is not a JSON object")

    target = _address(_require(payload, "transaction.to"), "transaction.to")
    calldata = _require(payload, "transaction.data")
    if not isinstance(calldata, str) or not is_hex(calldata):
        raise QuoteMalformed(f"Quote field transaction.data is not hex: {calldata!r}", field="transaction.data")

    spender = _optional(payload, "issues.allowance.spender")
    spender = ZERO_ADDRESS if spender is None else _address(spender, "issues.allowance.spender")

    sell_amount = _optional(payload, "sellAmount")
    buy_amount = _optional(payload, "buyAmount")

    return Quote(
        sell_token=_token(payload, "sellToken", request.sell_token if request else None),
        buy_token=_token(payload, "buyToken", request.buy_token if request else None),
        transaction_target=target,
        transaction_calldata=calldata,
        value=_require_int(payload, "value", "transaction.value"),
        gas_price=_require_int(payload, "gasPrice", "transaction.gasPrice"),
        allowance_spender=spender,
        sell_amount=_as_int(sell_amount, "sellAmount") if sell_amount is not None else None,
        buy_amount=_as_int(buy_amount, "buyAmount") if buy_amount is not None else None,
        raw_response=payload,
    )


class QuoteClient:
    """Fetches a single quote per trade request. Never retries."""

    def __init__(self, provider: Optional[ZeroExProvider] = None) -> None:
        self.provider = provider or ZeroExProvider()

    async def fetch_quote(self, request: TradeRequest) -> Quote:
        params = request.to_query_params()
        logger.info(f"Fetching quote {self.provider.quote_url_for(params)}")

        try:
            response = await self.provider.get_quote(params)
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            body = exc.response.text
            logger.error(f"Quote request failed with HTTP {status}: {body[:200]}")
            raise QuoteUnavailable(f"Quote request failed with HTTP {status}", status_code=status, body=body) from exc
        except httpx.HTTPError as exc:
            logger.error(f"Quote request failed: {exc}")
            raise QuoteUnavailable(f"Quote request failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise QuoteMalformed("Quote response is not valid JSON") from exc

        quote = parse_quote(payload, request)
        logger.info(
            f"Received a quote with sellAmount {quote.sell_amount}, "
            f"target {quote.transaction_target}, spender {quote.allowance_spender}"
        )
        return quote
