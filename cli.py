#!/usr/bin/env python3
"""Fill a WETH -> DAI 0x quote through a deployed SimpleTokenSwap contract"""

import argparse
import asyncio
import sys
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from tokenswap.config import settings
from tokenswap.core.execution import NetworkContext
from tokenswap.core.swap import SwapOrchestrator
from tokenswap.core.swap.constants import token_symbol
from tokenswap.core.units import format_amount
from tokenswap.logging_config import setup_logging


def _amount(value: str) -> Decimal:
    try:
        amount = Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"invalid amount: {value}")
    if not amount.is_finite() or amount <= 0:
        raise argparse.ArgumentTypeError(f"amount must be positive: {value}")
    return amount


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fill a swap WETH->DAI quote through a deployed SimpleTokenSwap contract",
    )
    parser.add_argument("deployed_address", help="Deployed address of the SimpleTokenSwap contract")
    parser.add_argument(
        "-a",
        "--sell-amount",
        "--sellAmount",
        dest="sell_amount",
        type=_amount,
        default=Decimal("0.1"),
        help="Amount of WETH to sell (in token units, default: 0.1)",
    )
    parser.add_argument("--log-level", default=None, help=f"Logging level (default: {settings.log_level})")
    return parser


async def swap(deployed_address: str, sell_amount: Decimal) -> None:
    network = await NetworkContext.connect()
    try:
        orchestrator = SwapOrchestrator(network)
        sell_symbol = token_symbol(orchestrator.sell_token)
        buy_symbol = token_symbol(orchestrator.buy_token)

        print(f"Depositing {sell_amount} ETH ({sell_symbol}) into the contract at {deployed_address}...")
        result = await orchestrator.run_swap(deployed_address, sell_amount)

        print(
            f"✔ Successfully sold {format_amount(sell_amount)} {sell_symbol} "
            f"for {format_amount(result.bought_amount_human)} {buy_symbol}!"
        )
        print(f"   deposit tx: {result.deposit_tx_hash}")
        print(f"   fill tx:    {result.fill_tx_hash}")
    finally:
        await network.close()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        asyncio.run(swap(args.deployed_address, args.sell_amount))
    except Exception as e:
        print(f"❌ Error: {type(e).__name__}: {e}", file=sys.stderr)
        return 1
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
