"""Tests for settings and token registry."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from conftest import DAI_ADDRESS, PROXY
from zeroex_swap.config import EIGHT_GWEI_IN_WEI, Settings, SwapDefaults, get_settings
from zeroex_swap.exceptions import UnknownTokenError, UnsupportedChainError
from zeroex_swap.tokens import (
    ERC20Token,
    get_erc20_proxy_address,
    is_address,
    resolve_token_address,
)


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.chain_id == 42
        assert settings.slippage_percentage == Decimal("0.01")
        assert settings.gas_price_wei == EIGHT_GWEI_IN_WEI == 8000000000
        assert settings.approval_amount == Decimal("300")
        assert settings.private_key is None

    def test_swap_defaults(self):
        assert Settings(_env_file=None).swap_defaults() == SwapDefaults()

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("SLIPPAGE_PERCENTAGE", "0.005")
        monkeypatch.setenv("GAS_PRICE_WEI", "20000000000")
        monkeypatch.setenv("APPROVAL_AMOUNT", "1000")

        defaults = Settings(_env_file=None).swap_defaults()

        assert defaults.slippage_percentage == Decimal("0.005")
        assert defaults.gas_price_wei == 20000000000
        assert defaults.approval_amount == Decimal("1000")

    def test_spender_defaults_to_chain_proxy(self):
        assert Settings(_env_file=None, chain_id=42).spender_address == PROXY

    def test_spender_override(self):
        settings = Settings(_env_file=None, erc20_proxy_address="0x" + "12" * 20)
        assert settings.spender_address == "0x" + "12" * 20

    def test_safe_dict_redacts_secrets(self):
        settings = Settings(
            _env_file=None,
            private_key="0x" + "11" * 32,
            zeroex_api_key="secret",
        )
        safe = settings.get_safe_dict()

        assert safe["signing"] == "local"
        assert safe["zeroex_api_key"] == "***"
        assert "11" * 32 not in str(safe)
        assert "secret" not in str(safe)

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestTokens:
    """Tests for the token registry."""

    def test_resolve_symbol(self):
        assert resolve_token_address("dai", 42) == DAI_ADDRESS

    def test_resolve_address_passthrough(self):
        address = "0x" + "ab" * 20
        assert resolve_token_address(address, 1) == address

    def test_unknown_symbol(self):
        with pytest.raises(UnknownTokenError):
            resolve_token_address("NOPE", 42)

    def test_is_address(self):
        assert is_address(DAI_ADDRESS)
        assert not is_address("DAI")
        assert not is_address("0x1234")

    def test_proxy_lookup(self):
        assert get_erc20_proxy_address(42) == PROXY
        with pytest.raises(UnsupportedChainError) as exc_info:
            get_erc20_proxy_address(999)
        assert exc_info.value.chain_id == 999

    def test_spender_for_unknown_chain(self):
        with pytest.raises(UnsupportedChainError):
            Settings(_env_file=None, chain_id=999).spender_address

    def test_token_identity_is_address(self):
        a = ERC20Token(symbol="DAI", address=DAI_ADDRESS, contract=MagicMock())
        b = ERC20Token(symbol="FAKE", address=DAI_ADDRESS.lower(), contract=MagicMock())
        c = ERC20Token(symbol="DAI", address="0x" + "00" * 20, contract=MagicMock())

        assert a == b
        assert hash(a) == hash(b)
        assert a != c

    def test_token_is_immutable(self):
        token = ERC20Token(symbol="DAI", address=DAI_ADDRESS, contract=MagicMock())
        with pytest.raises(AttributeError):
            token.symbol = "USDC"
