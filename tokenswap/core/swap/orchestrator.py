"""SwapOrchestrator runs the deposit -> quote -> fill sequence."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional, Union

import structlog

from tokenswap.config import settings

from ..errors import ResultExtractionFailed
from ..execution.executor import TransactionExecutor
from ..execution.models import Receipt, TransactionIntent
from ..execution.rpc import NetworkContext
from ..units import from_base_units, to_base_units
from .constants import (
    BOUGHT_TOKENS_EVENT,
    DEPOSIT_ETH_SIGNATURE,
    FILL_QUOTE_SIGNATURE,
    SWAP_CONTRACT_EVENTS,
)
from .models import Quote, SwapResult, TradeRequest
from .quote_client import QuoteClient


logger = structlog.stdlib.get_logger("swap.orchestrator")


class SwapOrchestrator:
    """
    Sells the contract-held sell token for the buy token through a 0x quote.

    Steps, strictly in order and each attempted once:
    1. depositETH() with the sell amount (wrapped to WETH by the contract)
    2. fetch a quote for selling that amount
    3. fillQuote(...) with the quote's target and calldata
    4. read boughtAmount from the BoughtTokens event

    Any failure aborts the run. Funds already moved stay where they are.
    """

    def __init__(
        self,
        network: NetworkContext,
        *,
        executor: Optional[TransactionExecutor] = None,
        quote_client: Optional[QuoteClient] = None,
        sell_token: Optional[str] = None,
        buy_token: Optional[str] = None,
        decimals: Optional[int] = None,
    ) -> None:
        self.network = network
        self.executor = executor or TransactionExecutor(network.rpc)
        self.quote_client = quote_client or QuoteClient()
        self.sell_token = sell_token or settings.sell_token
        self.buy_token = buy_token or settings.buy_token
        self.decimals = decimals if decimals is not None else settings.token_decimals

    async def run_swap(
        self,
        contract_address: str,
        sell_amount_human: Union[Decimal, str, int, float],
    ) -> SwapResult:
        sell_amount = to_base_units(sell_amount_human, self.decimals)
        if sell_amount <= 0:
            raise ValueError(f"Sell amount must be positive, got {sell_amount_human}")

        log = logger.bind(
            contract=contract_address,
            wallet=self.network.wallet_address,
            chain_id=self.network.chain_id,
        )

        log.info("depositing", amount=str(sell_amount_human), sell_amount=sell_amount)
        deposit_receipt = await self.deposit(contract_address, sell_amount)
        log.info("deposited", tx_hash=deposit_receipt.tx_hash)

        request = TradeRequest(
            sell_token=self.sell_token,
            buy_token=self.buy_token,
            sell_amount=sell_amount,
            taker=self.network.wallet_address,
            chain_id=self.network.chain_id,
        )
        log.info("fetching_quote", sell_token=request.sell_token, buy_token=request.buy_token)
        quote = await self.quote_client.fetch_quote(request)

        log.info("filling_quote", target=quote.transaction_target, spender=quote.allowance_spender)
        fill_receipt = await self.fill(contract_address, quote)

        bought_amount = self.extract_bought_amount(fill_receipt)
        result = SwapResult(
            bought_amount=bought_amount,
            bought_amount_human=from_base_units(bought_amount, self.decimals),
            sell_amount=sell_amount,
            deposit_tx_hash=deposit_receipt.tx_hash,
            fill_tx_hash=fill_receipt.tx_hash,
        )
        log.info("swap_complete", tx_hash=fill_receipt.tx_hash, bought_amount=bought_amount)
        return result

    async def deposit(self, contract_address: str, sell_amount: int) -> Receipt:
        intent = TransactionIntent(
            to=contract_address,
            method=DEPOSIT_ETH_SIGNATURE,
            sender=self.network.wallet_address,
            value=sell_amount,
        )
        return await self.executor.submit_and_confirm(intent, SWAP_CONTRACT_EVENTS)

    async def fill(self, contract_address: str, quote: Quote) -> Receipt:
        # fillQuote has fixed arity: the zero-address spender is passed, not omitted
        intent = TransactionIntent(
            to=contract_address,
            method=FILL_QUOTE_SIGNATURE,
            sender=self.network.wallet_address,
            args=(
                quote.sell_token,
                quote.buy_token,
                quote.allowance_spender,
                quote.transaction_target,
                quote.transaction_calldata,
            ),
            value=quote.value,
            gas_price=quote.gas_price,
        )
        return await self.executor.submit_and_confirm(intent, SWAP_CONTRACT_EVENTS)

    @staticmethod
    def extract_bought_amount(receipt: Receipt) -> int:
        event = receipt.find_event(BOUGHT_TOKENS_EVENT.name)
        if event is None or "boughtAmount" not in event.args:
            raise ResultExtractionFailed(receipt.tx_hash, BOUGHT_TOKENS_EVENT.name)
        return int(event.args["boughtAmount"])
