"""ERC-20 token descriptors and well-known addresses."""

import re
from dataclasses import dataclass, field

from zeroex_swap.chain.base import TokenContract
from zeroex_swap.exceptions import UnknownTokenError, UnsupportedChainError

# Chain IDs
CHAIN_IDS = {
    "mainnet": 1,
    "kovan": 42,
}

# 0x ERC20Proxy: the contract that needs an allowance before the
# exchange can move a taker's tokens
ERC20_PROXY_ADDRESSES = {
    1: "0x95e6f48254609a6ee006f7d493c8e5fb97094cef",
    42: "0xf1ec01d6236d3cd881a0bf0130ea25fe4234003e",
}

# Token addresses by chain
TOKEN_ADDRESSES = {
    1: {
        "WETH": "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2",
        "DAI": "0x6B175474E89094C44Da98b954EedeAC495271d0F",
        "USDC": "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48",
        "USDT": "0xdAC17F958D2ee523a2206206994597C13D831ec7",
        "ZRX": "0xE41d2489571d322189246DaFA5ebDe1F4699F498",
    },
    42: {
        # Fake DAI deployed for testing
        "DAI": "0x48178164eB4769BB919414Adc980b659a634703E",
        "WETH": "0xd0A1E359811322d97991E03f863a0C30C2cF029C",
    },
}

_ADDRESS_RE = re.compile(r"^0x[a-fA-F0-9]{40}$")


def is_address(value: str) -> bool:
    """Check if a string looks like a hex EVM address."""
    return bool(_ADDRESS_RE.match(value))


def get_erc20_proxy_address(chain_id: int) -> str:
    """Get the 0x ERC20 proxy deployed on a chain."""
    try:
        return ERC20_PROXY_ADDRESSES[chain_id]
    except KeyError:
        raise UnsupportedChainError(chain_id) from None


def resolve_token_address(symbol_or_address: str, chain_id: int) -> str:
    """Resolve a token symbol (or pass through an address) for a chain."""
    if is_address(symbol_or_address):
        return symbol_or_address

    address = TOKEN_ADDRESSES.get(chain_id, {}).get(symbol_or_address.upper())
    if not address:
        raise UnknownTokenError(f"Unknown token {symbol_or_address!r} on chain {chain_id}")
    return address


@dataclass(frozen=True, eq=False)
class ERC20Token:
    """A token as the user sees it, plus the contract used to talk to it.

    Two tokens are equal when their addresses are, regardless of case.
    """

    symbol: str
    address: str
    contract: TokenContract = field(repr=False)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ERC20Token):
            return NotImplemented
        return self.address.lower() == other.address.lower()

    def __hash__(self) -> int:
        return hash(self.address.lower())
