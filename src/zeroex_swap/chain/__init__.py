"""Chain access: abstract interfaces and their web3.py implementations."""

from zeroex_swap.chain.base import TokenContract, TransactionSender, TxData, parse_quantity
from zeroex_swap.chain.web3_client import (
    ERC20_ABI,
    LocalSigner,
    Web3TokenContract,
    Web3TransactionSender,
    create_web3,
    wait_for_receipt,
)

__all__ = [
    # Interfaces
    "TokenContract",
    "TransactionSender",
    "TxData",
    "parse_quantity",
    # web3.py
    "ERC20_ABI",
    "LocalSigner",
    "Web3TokenContract",
    "Web3TransactionSender",
    "create_web3",
    "wait_for_receipt",
]
