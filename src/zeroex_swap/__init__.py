"""ERC-20 token helpers and 0x API swaps."""

__version__ = "0.1.0"
