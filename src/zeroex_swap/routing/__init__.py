"""Swap quote providers."""

from zeroex_swap.routing.zeroex import SwapQuote, ZeroExQuoteClient

__all__ = ["SwapQuote", "ZeroExQuoteClient"]
