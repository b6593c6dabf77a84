import os

from pathlib import Path
from typing import Any, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    def model_post_init(self, __context: Any) -> None:
        """Ensure we pick up legacy environment variable aliases."""

        super().model_post_init(__context)

        if not self.zerox_api_key:
            fallback = os.getenv("ZEROEX_API_KEY") or os.getenv("ZRX_API_KEY")
            if fallback:
                object.__setattr__(self, "zerox_api_key", fallback)

    log_level: str = Field(default="INFO", description="Logging level")

    # Network
    rpc_url: str = Field(
        default="http://localhost:8545",
        description="JSON-RPC endpoint of a node that can sign for the wallet",
    )
    rpc_timeout_seconds: float = Field(default=60.0, gt=0, description="Per-request RPC timeout")
    wallet_address: str = Field(
        default="",
        description="Sender address; falls back to the node's first account when empty",
    )

    # 0x Swap API
    zerox_quote_url: str = Field(
        default="https://api.0x.org/swap/allowance-holder/quote",
        description="Quote endpoint of the 0x Swap API",
    )
    zerox_api_key: str = Field(default="", description="0x API key")
    zerox_api_version: str = Field(default="v2", description="Value sent in the 0x-version header")
    quote_timeout_seconds: float = Field(default=20.0, gt=0, description="Quote request timeout")

    # Trade pair
    sell_token: str = Field(
        default="0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2",
        description="Token the contract sells (WETH on mainnet)",
    )
    buy_token: str = Field(
        default="0x6B175474E89094C44Da98b954EedeAC495271d0F",
        description="Token the contract buys (DAI on mainnet)",
    )
    token_decimals: int = Field(default=18, ge=0, le=77, description="Decimals of both tokens")

    # Confirmation
    receipt_poll_interval_seconds: float = Field(
        default=1.0,
        gt=0,
        description="Delay between eth_getTransactionReceipt polls",
    )
    confirmation_timeout_seconds: Optional[float] = Field(
        default=None,
        gt=0,
        description="Give up waiting for a receipt after this many seconds; unset waits forever",
    )

    @property
    def has_zerox_key(self) -> bool:
        return bool(self.zerox_api_key)


# Global settings instance
settings = Settings()
