"""0x Swap API integration.

The quote endpoint returns a ready-to-send transaction that fills the swap
against the orders 0x matched.
API docs: https://0x.org/docs/api#get-swapv0quote
"""

import logging
from decimal import Decimal
from typing import Any, Optional, Union

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from zeroex_swap.chain.base import TxData, parse_quantity
from zeroex_swap.exceptions import QuoteRequestError

logger = logging.getLogger(__name__)

QUOTE_PATH = "/swap/v0/quote"


class SwapQuote(BaseModel):
    """Deserialized response of GET /swap/v0/quote."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    from_address: str = Field(..., alias="from", description="Taker address")
    to: str = Field(..., description="Contract to call")
    data: str = Field(..., description="Calldata")
    gas: int = Field(..., description="Gas limit")
    gas_price: int = Field(..., alias="gasPrice", description="Gas price in wei")
    value: int = Field(default=0, description="Wei to send with the transaction")
    orders: list[dict[str, Any]] = Field(default_factory=list, description="Matched 0x orders")

    price: Optional[str] = None
    buy_amount: Optional[str] = Field(default=None, alias="buyAmount")
    sell_amount: Optional[str] = Field(default=None, alias="sellAmount")
    allowance_target: Optional[str] = Field(default=None, alias="allowanceTarget")

    @field_validator("gas", "gas_price", "value", mode="before")
    @classmethod
    def _parse_quantity(cls, value: Union[int, str, None]) -> int:
        return parse_quantity(value)

    @field_validator("price", "buy_amount", "sell_amount", mode="before")
    @classmethod
    def _as_string(cls, value: Any) -> Optional[str]:
        return None if value is None else str(value)

    def to_tx_data(self) -> TxData:
        """Extract the Ethereum transaction part of the quote."""
        return TxData(
            from_address=self.from_address,
            to=self.to,
            data=self.data,
            gas=self.gas,
            gas_price=self.gas_price,
            value=self.value,
        )


class ZeroExQuoteClient:
    """Client for the 0x Swap API quote endpoint."""

    def __init__(
        self,
        base_url: str = "https://kovan.api.0x.org",
        timeout: float = 30.0,
        api_key: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize 0x client.

        Args:
            base_url: API host for the target chain
            timeout: Request timeout in seconds
            api_key: 0x API key (sent as the ``0x-api-key`` header)
            client: Pre-built httpx client; the caller keeps ownership
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._owns_client = client is None

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "ZeroExQuoteClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def _get_headers(self) -> dict:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["0x-api-key"] = self.api_key
        return headers

    async def get_quote(
        self,
        sell_token: str,
        buy_token: str,
        sell_amount: str,
        taker_address: str,
        slippage_percentage: Decimal,
        gas_price: int,
    ) -> SwapQuote:
        """Request a swap quote.

        Args:
            sell_token: Address of the token to sell
            buy_token: Address of the token to buy
            sell_amount: Amount to sell in base units, as a decimal string
            taker_address: Address that will send the transaction
            slippage_percentage: Max slippage (0.01 = 1%)
            gas_price: Gas price in wei

        Returns:
            Parsed quote

        Raises:
            QuoteRequestError: On transport failure or a non-2xx response
        """
        params = {
            "sellToken": sell_token,
            "buyToken": buy_token,
            "sellAmount": sell_amount,
            "takerAddress": taker_address,
            "slippagePercentage": str(slippage_percentage),
            "gasPrice": str(gas_price),
        }
        url = f"{self.base_url}{QUOTE_PATH}"
        logger.debug(f"Requesting 0x quote: {url} {params}")

        try:
            response = await self._client.get(url, params=params, headers=self._get_headers())
        except httpx.HTTPError as e:
            raise QuoteRequestError(f"0x API request failed: {e}") from e

        # Redirects are not followed, so a 3xx is an error too
        if not response.is_success:
            raise QuoteRequestError(_error_message(response), status_code=response.status_code)

        try:
            return SwapQuote.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise QuoteRequestError(
                f"Invalid quote response: {e}", status_code=response.status_code
            ) from e


def _error_message(response: httpx.Response) -> str:
    """Pull the most useful message out of an error response."""
    try:
        payload = response.json()
    except ValueError:
        return response.text

    if isinstance(payload, dict):
        return payload.get("reason") or payload.get("message") or response.text
    return response.text
