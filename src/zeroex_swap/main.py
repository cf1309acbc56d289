"""Command-line entry point.

Usage:
    zeroex-swap info
    zeroex-swap balance DAI 0xYourAddress
    zeroex-swap transfer DAI 0xRecipient 100 --from 0xYourAddress
    zeroex-swap swap --sell DAI --buy WETH --amount 20.5 --from 0xYourAddress
"""

import argparse
import asyncio
import json
import logging
import sys
from decimal import Decimal
from typing import Optional

from web3 import Web3

from zeroex_swap.chain.web3_client import LocalSigner, Web3TokenContract, create_web3
from zeroex_swap.config import Settings, get_settings
from zeroex_swap.exceptions import SwapError
from zeroex_swap.swap.orchestrator import describe_token, perform_swap_async, send_tokens
from zeroex_swap.tokens import ERC20Token, is_address, resolve_token_address

logger = logging.getLogger(__name__)


def setup_logging(settings: Settings) -> None:
    log_level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def build_token(symbol_or_address: str, web3: Web3, settings: Settings) -> ERC20Token:
    """Create a token from a known symbol or a raw address."""
    address = resolve_token_address(symbol_or_address, settings.chain_id)
    signer = LocalSigner(settings.private_key) if settings.private_key else None
    contract = Web3TokenContract(
        web3, address, signer=signer, receipt_timeout=settings.receipt_timeout
    )
    symbol = address[:10] if is_address(symbol_or_address) else symbol_or_address.upper()
    return ERC20Token(symbol=symbol, address=contract.address, contract=contract)


async def show_balance(token_arg: str, address: str, settings: Settings) -> None:
    web3 = create_web3(settings.rpc_url)
    token = build_token(token_arg, web3, settings)
    info = await describe_token(token, address)
    print(f"{info.name} ({token.address})")
    print(f"Decimals: {info.decimals}")
    print(f"Balance:  {info.balance_human} ({info.balance} base units)")


async def run_swap(
    sell: str,
    buy: str,
    amount: Decimal,
    from_address: str,
    settings: Settings,
) -> str:
    web3 = create_web3(settings.rpc_url)
    sell_token = build_token(sell, web3, settings)
    buy_token = build_token(buy, web3, settings)
    return await perform_swap_async(
        buy_token, sell_token, amount, from_address, web3=web3, settings=settings
    )


async def run_transfer(
    token_arg: str,
    recipient: str,
    amount: Decimal,
    from_address: str,
    settings: Settings,
) -> str:
    web3 = create_web3(settings.rpc_url)
    token = build_token(token_arg, web3, settings)
    return await send_tokens(token, from_address, recipient, amount)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zeroex-swap",
        description="Check ERC-20 balances and swap tokens through the 0x API",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("info", help="Show the active configuration")

    balance = subparsers.add_parser("balance", help="Show a token balance")
    balance.add_argument("token", help="Token symbol or address")
    balance.add_argument("address", help="Holder address")

    swap = subparsers.add_parser("swap", help="Sell one token for another")
    swap.add_argument("--sell", required=True, help="Token to sell (symbol or address)")
    swap.add_argument("--buy", required=True, help="Token to buy (symbol or address)")
    swap.add_argument("--amount", required=True, type=Decimal, help="Human amount to sell")
    swap.add_argument("--from", dest="from_address", required=True, help="Seller address")

    transfer = subparsers.add_parser("transfer", help="Send tokens to another address")
    transfer.add_argument("token", help="Token symbol or address")
    transfer.add_argument("recipient", help="Recipient address")
    transfer.add_argument("amount", type=Decimal, help="Human amount to send")
    transfer.add_argument("--from", dest="from_address", required=True, help="Sender address")

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(settings)

    try:
        if args.command == "info":
            print(json.dumps(settings.get_safe_dict(), indent=2))
        elif args.command == "balance":
            asyncio.run(show_balance(args.token, args.address, settings))
        elif args.command == "swap":
            tx_hash = asyncio.run(
                run_swap(args.sell, args.buy, args.amount, args.from_address, settings)
            )
            print(f"Swap submitted: {tx_hash}")
        elif args.command == "transfer":
            tx_hash = asyncio.run(
                run_transfer(args.token, args.recipient, args.amount, args.from_address, settings)
            )
            print(f"Transfer confirmed: {tx_hash}")
    except SwapError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1
    except ValueError as e:
        # Malformed addresses from web3/eth-utils checksumming
        logger.error(f"Invalid input: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
