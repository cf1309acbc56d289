"""Abstract chain interfaces used by the swap workflow.

The workflow only talks to these classes, so tests can swap in in-memory
fakes and nothing needs a live node.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Union


def parse_quantity(value: Union[int, str, None], default: int = 0) -> int:
    """Parse an int, decimal string or 0x-prefixed hex string."""
    if value is None or value == "":
        return default
    if isinstance(value, int):
        return value
    value = value.strip()
    if value.lower().startswith("0x"):
        return int(value, 16)
    return int(value)


@dataclass
class TxData:
    """Unsigned Ethereum transaction descriptor."""

    from_address: str
    to: str
    data: str
    gas: int
    gas_price: int
    value: int = 0

    def to_web3(self) -> dict:
        """Render as a web3 transaction dict."""
        return {
            "from": self.from_address,
            "to": self.to,
            "data": self.data,
            "gas": self.gas,
            "gasPrice": self.gas_price,
            "value": self.value,
        }


class TokenContract(ABC):
    """Read and write operations on a single ERC20 token contract."""

    @property
    @abstractmethod
    def address(self) -> str:
        """Contract address."""
        pass

    @abstractmethod
    async def name(self) -> str:
        pass

    @abstractmethod
    async def symbol(self) -> str:
        pass

    @abstractmethod
    async def decimals(self) -> int:
        pass

    @abstractmethod
    async def balance_of(self, owner: str) -> int:
        """Balance of ``owner`` in base units."""
        pass

    @abstractmethod
    async def allowance(self, owner: str, spender: str) -> int:
        """Amount ``spender`` may move out of ``owner``'s balance, in base units."""
        pass

    @abstractmethod
    async def approve(self, spender: str, amount: int, owner: str) -> str:
        """
        Allow ``spender`` to withdraw up to ``amount`` from ``owner``.

        Returns:
            Transaction hash, once the approval has been mined successfully
        """
        pass

    @abstractmethod
    async def transfer(self, recipient: str, amount: int, owner: str) -> str:
        """
        Transfer ``amount`` base units from ``owner`` to ``recipient``.

        Returns:
            Transaction hash, once the transfer has been mined successfully
        """
        pass


class TransactionSender(ABC):
    """Submits prepared transactions to the network."""

    @abstractmethod
    async def send_transaction(self, tx: TxData) -> str:
        """
        Submit a transaction.

        Returns:
            Transaction hash as soon as the node accepts it (not mined)
        """
        pass
