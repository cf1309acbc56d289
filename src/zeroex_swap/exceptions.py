"""Errors raised by the swap workflow and its collaborators."""

from typing import Optional


class SwapError(Exception):
    """Base class for all zeroex_swap errors."""


class InsufficientFundsError(SwapError):
    """Raised when the seller's balance is below the requested amount."""

    def __init__(self, token: str, required: int, available: int):
        self.token = token
        self.required = required
        self.available = available
        super().__init__(
            f"Insufficient {token} balance: need {required} base units, have {available}"
        )


class QuoteRequestError(SwapError):
    """Raised when the 0x API cannot be reached or rejects the request."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        if status_code is not None:
            message = f"0x API returned {status_code}: {message}"
        super().__init__(message)


class TransactionRejectedError(SwapError):
    """Raised when a mined transaction reverted."""

    def __init__(self, tx_hash: str, reason: str = "reverted"):
        self.tx_hash = tx_hash
        super().__init__(f"Transaction {tx_hash} failed ({reason})")


class UnknownTokenError(SwapError):
    """Raised when a token symbol is not in the registry."""


class InvalidAmountError(SwapError):
    """Raised when an amount to sell or send is not positive."""

    def __init__(self, amount: int):
        self.amount = amount
        super().__init__(f"Amount must be positive, got {amount} base units")


class UnsupportedChainError(SwapError):
    """Raised when no 0x ERC20 proxy is known for the configured chain."""

    def __init__(self, chain_id: int):
        self.chain_id = chain_id
        super().__init__(f"No 0x ERC20 proxy known for chain {chain_id}")
