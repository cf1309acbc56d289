"""Application configuration using pydantic-settings.

Values come from environment variables (or a local ``.env`` file). The swap
constants (slippage, gas price, approval fallback) live here so they can be
overridden without touching the workflow code.
"""

from dataclasses import dataclass
from decimal import Decimal
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from zeroex_swap.tokens import get_erc20_proxy_address

EIGHT_GWEI_IN_WEI = 8 * 10**9
DEFAULT_SLIPPAGE_PERCENTAGE = Decimal("0.01")
DEFAULT_APPROVAL_AMOUNT = Decimal("300")


@dataclass(frozen=True)
class SwapDefaults:
    """Fixed parameters applied to every swap request."""

    slippage_percentage: Decimal = DEFAULT_SLIPPAGE_PERCENTAGE
    gas_price_wei: int = EIGHT_GWEI_IN_WEI
    # Human units of the sell token granted when the allowance is too low
    approval_amount: Decimal = DEFAULT_APPROVAL_AMOUNT


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # Chain
    # ======================
    rpc_url: str = Field(default="http://localhost:8545", description="Ethereum JSON-RPC URL")
    chain_id: int = Field(default=42, description="Chain ID (42 = Kovan)")
    private_key: Optional[str] = Field(
        default=None,
        description="Hex private key for local signing (unset = node signs)",
    )
    receipt_timeout: int = Field(
        default=120, description="Seconds to wait for an approval/transfer receipt"
    )

    # ======================
    # 0x API
    # ======================
    zeroex_api_url: str = Field(
        default="https://kovan.api.0x.org", description="0x API base URL"
    )
    zeroex_api_key: str = Field(default="", description="0x API key (optional)")
    erc20_proxy_address: Optional[str] = Field(
        default=None,
        description="0x ERC20 proxy (allowance spender); defaults to the chain's deployment",
    )
    http_timeout: float = Field(default=30.0, description="HTTP timeout in seconds")

    # ======================
    # Swap defaults
    # ======================
    slippage_percentage: Decimal = Field(
        default=DEFAULT_SLIPPAGE_PERCENTAGE, description="Slippage tolerance (0.01 = 1%)"
    )
    gas_price_wei: int = Field(default=EIGHT_GWEI_IN_WEI, description="Gas price sent to the 0x API")
    approval_amount: Decimal = Field(
        default=DEFAULT_APPROVAL_AMOUNT,
        description="Allowance granted (in human units) when the current one is too low",
    )

    # ======================
    # Environment
    # ======================
    debug: bool = Field(default=False, description="Enable debug logging")

    @property
    def spender_address(self) -> str:
        """Address that receives the token allowance."""
        if self.erc20_proxy_address:
            return self.erc20_proxy_address
        return get_erc20_proxy_address(self.chain_id)

    def swap_defaults(self) -> SwapDefaults:
        """Build the swap parameter record from settings."""
        return SwapDefaults(
            slippage_percentage=self.slippage_percentage,
            gas_price_wei=self.gas_price_wei,
            approval_amount=self.approval_amount,
        )

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "rpc_url": self.rpc_url,
            "chain_id": self.chain_id,
            "signing": "local" if self.private_key else "node",
            "zeroex_api_url": self.zeroex_api_url,
            "zeroex_api_key": "***" if self.zeroex_api_key else "(not set)",
            "erc20_proxy_address": self.erc20_proxy_address or "(chain default)",
            "slippage_percentage": str(self.slippage_percentage),
            "gas_price_wei": self.gas_price_wei,
            "approval_amount": str(self.approval_amount),
            "debug": self.debug,
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
