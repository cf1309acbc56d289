"""Pytest configuration and fixtures."""

import os
from decimal import Decimal
from typing import Optional

import pytest

# Set test environment
os.environ["CHAIN_ID"] = "42"
os.environ["ZEROEX_API_URL"] = "https://kovan.api.0x.org"
os.environ["DEBUG"] = "false"
os.environ.pop("PRIVATE_KEY", None)

from zeroex_swap.chain.base import TokenContract, TransactionSender, TxData
from zeroex_swap.config import SwapDefaults, get_settings
from zeroex_swap.routing.zeroex import SwapQuote
from zeroex_swap.swap.orchestrator import SwapOrchestrator
from zeroex_swap.tokens import ERC20Token

TAKER = "0x5409ED021D9299bf6814279A6A1411A7e866A631"
PROXY = "0xf1ec01d6236d3cd881a0bf0130ea25fe4234003e"
EXCHANGE = "0x61935CbDd02287B511119DDb11Aeb42F1593b7Ef"

DAI_ADDRESS = "0x48178164eB4769BB919414Adc980b659a634703E"
WETH_ADDRESS = "0xd0A1E359811322d97991E03f863a0C30C2cF029C"
USDC_ADDRESS = "0x1111111111111111111111111111111111111111"


class FakeTokenContract(TokenContract):
    """In-memory ERC-20 that records every call."""

    def __init__(self, address: str, name: str, decimals: int, calls: list):
        self._address = address
        self._name = name
        self._decimals = decimals
        self.calls = calls
        self.balances: dict[str, int] = {}
        self.allowances: dict[tuple[str, str], int] = {}
        self.approvals: list[tuple[str, int, str]] = []
        self.transfers: list[tuple[str, int, str]] = []
        self.approve_error: Optional[Exception] = None

    @property
    def address(self) -> str:
        return self._address

    async def name(self) -> str:
        return self._name

    async def symbol(self) -> str:
        return self._name

    async def decimals(self) -> int:
        self.calls.append(("decimals", self._address))
        return self._decimals

    async def balance_of(self, owner: str) -> int:
        self.calls.append(("balance_of", owner))
        return self.balances.get(owner, 0)

    async def allowance(self, owner: str, spender: str) -> int:
        self.calls.append(("allowance", owner, spender))
        return self.allowances.get((owner, spender), 0)

    async def approve(self, spender: str, amount: int, owner: str) -> str:
        self.calls.append(("approve", spender, amount, owner))
        if self.approve_error is not None:
            raise self.approve_error
        self.approvals.append((spender, amount, owner))
        self.allowances[(owner, spender)] = amount
        return "0xapprove"

    async def transfer(self, recipient: str, amount: int, owner: str) -> str:
        self.calls.append(("transfer", recipient, amount, owner))
        self.transfers.append((recipient, amount, owner))
        self.balances[owner] = self.balances.get(owner, 0) - amount
        self.balances[recipient] = self.balances.get(recipient, 0) + amount
        return "0xtransfer"


class FakeSender(TransactionSender):
    """Records submitted transactions."""

    def __init__(self, calls: list):
        self.calls = calls
        self.sent: list[TxData] = []
        self.error: Optional[Exception] = None

    async def send_transaction(self, tx: TxData) -> str:
        self.calls.append(("send_transaction", tx))
        if self.error is not None:
            raise self.error
        self.sent.append(tx)
        return "0xswap"


class FakeQuoteClient:
    """Stands in for ZeroExQuoteClient and records quote requests."""

    def __init__(self, calls: list, orders: Optional[list] = None):
        self.calls = calls
        self.requests: list[dict] = []
        self.orders = orders if orders is not None else [{"makerAddress": EXCHANGE}]
        self.error: Optional[Exception] = None

    async def get_quote(self, **params) -> SwapQuote:
        self.calls.append(("get_quote", params))
        if self.error is not None:
            raise self.error
        self.requests.append(params)
        return SwapQuote.model_validate(
            {
                "from": params["taker_address"],
                "to": EXCHANGE,
                "data": "0xdeadbeef",
                "gas": "250000",
                "gasPrice": str(params["gas_price"]),
                "value": "0",
                "orders": self.orders,
            }
        )


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached; reset between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def calls() -> list:
    """Shared call log, in order, across all fakes."""
    return []


@pytest.fixture
def dai(calls) -> ERC20Token:
    contract = FakeTokenContract(DAI_ADDRESS, "DAI", 18, calls)
    return ERC20Token(symbol="DAI", address=DAI_ADDRESS, contract=contract)


@pytest.fixture
def weth(calls) -> ERC20Token:
    contract = FakeTokenContract(WETH_ADDRESS, "WETH", 18, calls)
    return ERC20Token(symbol="WETH", address=WETH_ADDRESS, contract=contract)


@pytest.fixture
def usdc(calls) -> ERC20Token:
    contract = FakeTokenContract(USDC_ADDRESS, "USDC", 6, calls)
    return ERC20Token(symbol="USDC", address=USDC_ADDRESS, contract=contract)


@pytest.fixture
def sender(calls) -> FakeSender:
    return FakeSender(calls)


@pytest.fixture
def quote_client(calls) -> FakeQuoteClient:
    return FakeQuoteClient(calls)


@pytest.fixture
def defaults() -> SwapDefaults:
    return SwapDefaults(
        slippage_percentage=Decimal("0.01"),
        gas_price_wei=8 * 10**9,
        approval_amount=Decimal("300"),
    )


@pytest.fixture
def orchestrator(quote_client, sender, defaults) -> SwapOrchestrator:
    return SwapOrchestrator(
        quote_client=quote_client,
        sender=sender,
        spender=PROXY,
        defaults=defaults,
    )
