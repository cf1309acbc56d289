"""Swap workflow and the token helpers it is built from."""

from zeroex_swap.swap.orchestrator import (
    SwapOrchestrator,
    TokenInfo,
    describe_token,
    get_allowance,
    get_balance,
    needs_approval,
    perform_swap_async,
    send_tokens,
    set_allowance,
    to_base_units_for,
)

__all__ = [
    "SwapOrchestrator",
    "TokenInfo",
    "describe_token",
    "get_allowance",
    "get_balance",
    "needs_approval",
    "perform_swap_async",
    "send_tokens",
    "set_allowance",
    "to_base_units_for",
]
