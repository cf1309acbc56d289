"""Token swap workflow.

Sells one ERC-20 token for another through the 0x API:

1. Check the seller holds enough of the sell token
2. Make sure the 0x ERC20 proxy is allowed to move it (approve if not)
3. Ask the 0x API for a quote, which includes a ready-made transaction
4. Submit that transaction

Steps run one after another. Nothing is retried, and an approval that went
through is kept even if a later step fails.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from web3 import Web3

from zeroex_swap.chain.base import TransactionSender
from zeroex_swap.chain.web3_client import LocalSigner, Web3TransactionSender
from zeroex_swap.config import Settings, SwapDefaults, get_settings
from zeroex_swap.exceptions import InsufficientFundsError, InvalidAmountError
from zeroex_swap.routing.zeroex import ZeroExQuoteClient
from zeroex_swap.tokens import ERC20Token
from zeroex_swap.units import Numeric, from_base_units, to_base_units

logger = logging.getLogger(__name__)


@dataclass
class TokenInfo:
    """Basic on-chain facts about a token and one holder."""

    name: str
    decimals: int
    balance: int

    @property
    def balance_human(self) -> Decimal:
        return from_base_units(self.balance, self.decimals)


async def get_balance(token: ERC20Token, address: str) -> int:
    """Get the token balance of an address, in base units."""
    return await token.contract.balance_of(address)


async def get_allowance(token: ERC20Token, owner: str, spender: str) -> int:
    """Get how much ``spender`` may withdraw on behalf of ``owner``, in base units."""
    return await token.contract.allowance(owner, spender)


async def set_allowance(token: ERC20Token, owner: str, spender: str, amount: int) -> str:
    """Let ``spender`` withdraw up to ``amount`` base units from ``owner``.

    This writes to the chain, so it sends a transaction and waits for it to
    be mined.
    """
    return await token.contract.approve(spender, amount, owner=owner)


async def to_base_units_for(token: ERC20Token, amount: Numeric) -> int:
    """Convert a human amount (e.g. 133.232) into base units for ``token``."""
    decimals = await token.contract.decimals()
    return to_base_units(amount, decimals)


async def send_tokens(token: ERC20Token, owner: str, recipient: str, amount: Numeric) -> str:
    """Transfer a human amount of ``token`` from ``owner`` to ``recipient``."""
    amount_base = await to_base_units_for(token, amount)
    if amount_base <= 0:
        raise InvalidAmountError(amount_base)
    logger.info(f"Sending {amount} {token.symbol} ({amount_base} base units) to {recipient}")
    return await token.contract.transfer(recipient, amount_base, owner=owner)


def needs_approval(allowance: int, amount: int) -> bool:
    """Check if the current allowance is too small for ``amount``."""
    return allowance < amount


async def describe_token(token: ERC20Token, address: str) -> TokenInfo:
    """Read name, decimals and the balance of ``address``.

    Reading contract state is a call, not a transaction, so nothing is
    signed or paid for.
    """
    contract = token.contract
    return TokenInfo(
        name=await contract.name(),
        decimals=await contract.decimals(),
        balance=await contract.balance_of(address),
    )


class SwapOrchestrator:
    """Runs a single sell-token -> buy-token swap end to end."""

    def __init__(
        self,
        quote_client: ZeroExQuoteClient,
        sender: TransactionSender,
        spender: str,
        defaults: Optional[SwapDefaults] = None,
    ):
        """
        Args:
            quote_client: 0x API client
            sender: Submits the quoted transaction
            spender: 0x ERC20 proxy address that needs the allowance
            defaults: Slippage, gas price and approval fallback
        """
        self.quote_client = quote_client
        self.sender = sender
        self.spender = spender
        self.defaults = defaults or SwapDefaults()

    async def perform_swap(
        self,
        buy_token: ERC20Token,
        sell_token: ERC20Token,
        amount_to_sell: Numeric,
        from_address: str,
    ) -> str:
        """Sell ``amount_to_sell`` of ``sell_token`` for ``buy_token``.

        Returns:
            Hash of the submitted swap transaction

        Raises:
            InvalidAmountError: Amount is zero or negative; nothing was sent
            InsufficientFundsError: Balance is below the amount; nothing was sent
        """
        logger.info(
            f"Swap requested: {amount_to_sell} {sell_token.symbol} -> {buy_token.symbol} "
            f"from {from_address}"
        )

        # Check #1: does the seller have enough?
        amount = await to_base_units_for(sell_token, amount_to_sell)
        if amount <= 0:
            raise InvalidAmountError(amount)
        balance = await get_balance(sell_token, from_address)
        if amount > balance:
            logger.warning(
                f"Insufficient {sell_token.symbol}: need {amount}, have {balance}"
            )
            raise InsufficientFundsError(sell_token.symbol, required=amount, available=balance)

        # Check #2: may the 0x proxy withdraw it?
        allowance = await get_allowance(sell_token, from_address, self.spender)
        if needs_approval(allowance, amount):
            # Fixed fallback, not derived from amount: larger swaps re-approve every time
            approval = await to_base_units_for(sell_token, self.defaults.approval_amount)
            logger.info(
                f"Allowance {allowance} < {amount}, approving {approval} "
                f"{sell_token.symbol} for {self.spender}"
            )
            await set_allowance(sell_token, from_address, self.spender, approval)
        else:
            logger.info(f"Allowance {allowance} covers {amount}, skipping approval")

        quote = await self.quote_client.get_quote(
            sell_token=sell_token.address,
            buy_token=buy_token.address,
            sell_amount=str(amount),
            taker_address=from_address,
            slippage_percentage=self.defaults.slippage_percentage,
            gas_price=self.defaults.gas_price_wei,
        )
        tx_data = quote.to_tx_data()

        logger.info(f"Ethereum transaction generated by the 0x API: {tx_data}")
        logger.info(f"Orders used to perform the swap ({len(quote.orders)}): {quote.orders}")

        tx_hash = await self.sender.send_transaction(tx_data)
        logger.info(f"Swap transaction submitted: {tx_hash}")
        return tx_hash


async def perform_swap_async(
    buy_token: ERC20Token,
    sell_token: ERC20Token,
    amount_to_sell: Numeric,
    from_address: str,
    *,
    web3: Web3,
    settings: Optional[Settings] = None,
) -> str:
    """Perform a swap with collaborators built from settings.

    Args:
        buy_token: Token to buy
        sell_token: Token to sell
        amount_to_sell: Human amount of ``sell_token``
        from_address: Address that sells and sends the transaction
        web3: Connected Web3 instance
        settings: Overrides the environment settings

    Returns:
        Hash of the submitted swap transaction
    """
    settings = settings or get_settings()
    signer = LocalSigner(settings.private_key) if settings.private_key else None

    async with ZeroExQuoteClient(
        base_url=settings.zeroex_api_url,
        timeout=settings.http_timeout,
        api_key=settings.zeroex_api_key or None,
    ) as quote_client:
        orchestrator = SwapOrchestrator(
            quote_client=quote_client,
            sender=Web3TransactionSender(web3, signer=signer),
            spender=settings.spender_address,
            defaults=settings.swap_defaults(),
        )
        return await orchestrator.perform_swap(buy_token, sell_token, amount_to_sell, from_address)
