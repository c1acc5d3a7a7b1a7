"""
Pytest fixtures for Transfer Blink tests.

FakeChainReader stands in for the RPC-backed reader: a dict of accounts, a
fixed blockhash, a call log, and an optional exception to raise on every read.
"""

from __future__ import annotations

import struct

import pytest
from solders.hash import Hash
from solders.pubkey import Pubkey
from spl.token.constants import TOKEN_PROGRAM_ID

from transfer_blink.chain.reader import AccountSnapshot
from transfer_blink.transfer.accounts import holding_account_address

# Valid Solana pubkeys (base58, 32 bytes)
PAYER = "9QCfNuQuxct1Xk9ytFYgxc5fThmTzL4pHQnSjjrVUrka"
RECIPIENT = "7F1WzVNQ1Qpurqxxdyv3UrFQR3uoNepULVW9A4bAJ5nZ"
USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"

TOKEN_ACCOUNT_LEN = 165


def make_mint_data(decimals: int, supply: int = 1_000_000_000, initialized: bool = True) -> bytes:
    """82-byte SPL mint layout: authority option + key, supply, decimals, init flag, freeze option + key."""
    return struct.pack(
        "<I32sQBBI32s",
        1,
        bytes(32),
        supply,
        decimals,
        1 if initialized else 0,
        0,
        bytes(32),
    )


class FakeChainReader:
    def __init__(self) -> None:
        self.accounts: dict[Pubkey, AccountSnapshot] = {}
        self.blockhash = Hash.new_unique()
        self.calls: list[tuple[str, Pubkey | None]] = []
        self.fail: Exception | None = None

    def get_latest_blockhash(self) -> Hash:
        self.calls.append(("get_latest_blockhash", None))
        if self.fail is not None:
            raise self.fail
        return self.blockhash

    def get_account_info(self, address: Pubkey) -> AccountSnapshot | None:
        self.calls.append(("get_account_info", address))
        if self.fail is not None:
            raise self.fail
        return self.accounts.get(address)

    def add_mint(self, mint: Pubkey, decimals: int, program_id: Pubkey = TOKEN_PROGRAM_ID) -> None:
        self.accounts[mint] = AccountSnapshot(owner=program_id, data=make_mint_data(decimals), lamports=1_461_600)

    def add_token_account(self, owner: Pubkey, mint: Pubkey, program_id: Pubkey = TOKEN_PROGRAM_ID) -> Pubkey:
        ata = holding_account_address(owner, mint, program_id)
        self.accounts[ata] = AccountSnapshot(owner=program_id, data=bytes(TOKEN_ACCOUNT_LEN), lamports=2_039_280)
        return ata


@pytest.fixture
def payer() -> Pubkey:
    return Pubkey.from_string(PAYER)


@pytest.fixture
def recipient() -> Pubkey:
    return Pubkey.from_string(RECIPIENT)


@pytest.fixture
def usdc_mint() -> Pubkey:
    return Pubkey.from_string(USDC_MINT)


@pytest.fixture
def fake_reader() -> FakeChainReader:
    return FakeChainReader()


@pytest.fixture
def settings_env(monkeypatch):
    """Deterministic devnet settings; clears the settings cache around the test."""
    from transfer_blink.config.settings import get_settings

    monkeypatch.setenv("SOLANA_NETWORK", "devnet")
    for name in ("SOLANA_RPC_URL", "HELIUS_API_KEY", "ACTION_VERSION", "ACTION_ICON_PATH", "SOLANA_COMMITMENT"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def client(settings_env, fake_reader):
    """FastAPI TestClient with the chain reader dependency replaced by the fake."""
    from fastapi.testclient import TestClient

    from transfer_blink.api_server.dependencies import get_chain_reader
    from transfer_blink.api_server.server import app

    app.dependency_overrides[get_chain_reader] = lambda: fake_reader
    yield TestClient(app)
    app.dependency_overrides.clear()
