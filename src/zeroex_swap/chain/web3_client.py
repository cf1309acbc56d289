"""web3.py implementations of the chain interfaces.

Transactions are either signed locally with an eth-account key (when a
private key is configured) or handed to the node with eth_sendTransaction,
in which case the node's unlocked account signs them.
"""

import asyncio
import logging
from typing import Any, Optional

from eth_account import Account
from web3 import Web3
from web3.exceptions import TransactionNotFound

from zeroex_swap.chain.base import TokenContract, TransactionSender, TxData
from zeroex_swap.exceptions import TransactionRejectedError

logger = logging.getLogger(__name__)

# Minimal ERC-20 ABI (reads plus approve/transfer)
ERC20_ABI = [
    {
        "constant": True,
        "inputs": [],
        "name": "name",
        "outputs": [{"name": "", "type": "string"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "constant": True,
        "inputs": [],
        "name": "symbol",
        "outputs": [{"name": "", "type": "string"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "constant": True,
        "inputs": [],
        "name": "decimals",
        "outputs": [{"name": "", "type": "uint8"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "constant": True,
        "inputs": [{"name": "owner", "type": "address"}],
        "name": "balanceOf",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "constant": True,
        "inputs": [{"name": "owner", "type": "address"}, {"name": "spender", "type": "address"}],
        "name": "allowance",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "constant": False,
        "inputs": [{"name": "spender", "type": "address"}, {"name": "amount", "type": "uint256"}],
        "name": "approve",
        "outputs": [{"name": "", "type": "bool"}],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "constant": False,
        "inputs": [{"name": "recipient", "type": "address"}, {"name": "amount", "type": "uint256"}],
        "name": "transfer",
        "outputs": [{"name": "", "type": "bool"}],
        "stateMutability": "nonpayable",
        "type": "function",
    },
]


def create_web3(rpc_url: str) -> Web3:
    """Create a Web3 instance connected over HTTP."""
    return Web3(Web3.HTTPProvider(rpc_url))


class LocalSigner:
    """Signs transactions with a private key held in process."""

    def __init__(self, private_key: str):
        self._account = Account.from_key(private_key)

    @property
    def address(self) -> str:
        return self._account.address

    def sign_and_send(self, web3: Web3, tx_params: dict) -> str:
        """Fill missing fields, sign and broadcast. Returns the tx hash."""
        tx_params = dict(tx_params)
        tx_params.setdefault("from", self.address)

        if "nonce" not in tx_params:
            tx_params["nonce"] = web3.eth.get_transaction_count(self.address, "pending")
        if "chainId" not in tx_params:
            tx_params["chainId"] = web3.eth.chain_id
        if "gas" not in tx_params:
            tx_params["gas"] = web3.eth.estimate_gas(tx_params)
        if "gasPrice" not in tx_params and "maxFeePerGas" not in tx_params:
            tx_params["gasPrice"] = web3.eth.gas_price

        signed_tx = self._account.sign_transaction(tx_params)
        # eth-account >= 0.13 renamed rawTransaction to raw_transaction
        raw_tx = getattr(signed_tx, "raw_transaction", None) or signed_tx.rawTransaction
        tx_hash = web3.eth.send_raw_transaction(raw_tx)
        return Web3.to_hex(tx_hash)


async def wait_for_receipt(
    web3: Web3,
    tx_hash: str,
    timeout: int = 120,
    poll_interval: float = 2.0,
) -> dict:
    """Wait for a transaction to be mined.

    Raises:
        TransactionRejectedError: If the transaction reverted
        TimeoutError: If no receipt appears within ``timeout`` seconds
    """
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout

    while True:
        try:
            receipt = web3.eth.get_transaction_receipt(tx_hash)
        except TransactionNotFound:
            receipt = None

        if receipt is not None:
            if receipt["status"] == 0:
                raise TransactionRejectedError(tx_hash)
            return dict(receipt)

        if loop.time() >= deadline:
            raise TimeoutError(f"Transaction {tx_hash} not mined after {timeout}s")

        await asyncio.sleep(poll_interval)


class Web3TokenContract(TokenContract):
    """ERC-20 contract accessed through web3.py."""

    def __init__(
        self,
        web3: Web3,
        address: str,
        signer: Optional[LocalSigner] = None,
        receipt_timeout: int = 120,
    ):
        self.web3 = web3
        self.signer = signer
        self.receipt_timeout = receipt_timeout
        self._address = Web3.to_checksum_address(address)
        self._contract = web3.eth.contract(address=self._address, abi=ERC20_ABI)

    @property
    def address(self) -> str:
        return self._address

    async def name(self) -> str:
        return self._contract.functions.name().call()

    async def symbol(self) -> str:
        return self._contract.functions.symbol().call()

    async def decimals(self) -> int:
        return int(self._contract.functions.decimals().call())

    async def balance_of(self, owner: str) -> int:
        owner = Web3.to_checksum_address(owner)
        return int(self._contract.functions.balanceOf(owner).call())

    async def allowance(self, owner: str, spender: str) -> int:
        owner = Web3.to_checksum_address(owner)
        spender = Web3.to_checksum_address(spender)
        return int(self._contract.functions.allowance(owner, spender).call())

    async def approve(self, spender: str, amount: int, owner: str) -> str:
        spender = Web3.to_checksum_address(spender)
        logger.info(f"Approving {spender} to spend {amount} of {self._address}")
        return await self._submit(self._contract.functions.approve(spender, amount), owner)

    async def transfer(self, recipient: str, amount: int, owner: str) -> str:
        recipient = Web3.to_checksum_address(recipient)
        logger.info(f"Transferring {amount} of {self._address} to {recipient}")
        return await self._submit(self._contract.functions.transfer(recipient, amount), owner)

    async def _submit(self, function: Any, owner: str) -> str:
        """Send a contract write and wait until it is mined."""
        owner = Web3.to_checksum_address(owner)

        if self.signer is not None:
            if self.signer.address != owner:
                raise ValueError(
                    f"Configured signer {self.signer.address} cannot send from {owner}"
                )
            tx = function.build_transaction({"from": owner})
            tx_hash = self.signer.sign_and_send(self.web3, tx)
        else:
            tx_hash = Web3.to_hex(function.transact({"from": owner}))

        logger.info(f"Transaction submitted: {tx_hash}")
        await wait_for_receipt(self.web3, tx_hash, timeout=self.receipt_timeout)
        logger.info(f"Transaction confirmed: {tx_hash}")
        return tx_hash


class Web3TransactionSender(TransactionSender):
    """Submits prepared transactions through web3.py."""

    def __init__(self, web3: Web3, signer: Optional[LocalSigner] = None):
        self.web3 = web3
        self.signer = signer

    async def send_transaction(self, tx: TxData) -> str:
        params = tx.to_web3()
        params["from"] = Web3.to_checksum_address(params["from"])
        params["to"] = Web3.to_checksum_address(params["to"])

        if self.signer is not None:
            return self.signer.sign_and_send(self.web3, params)

        return Web3.to_hex(self.web3.eth.send_transaction(params))
