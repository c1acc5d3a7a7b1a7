"""
SolanaChainReader with mocked RPC responses.

Verifies: blockhash extraction, account snapshots (bytes and base64 data),
missing accounts, and transport failures mapped to ChainStateUnavailable.
"""

from __future__ import annotations

import base64
from unittest.mock import MagicMock, patch

import httpx
import pytest
from solana.exceptions import SolanaRpcException
from solana.rpc.api import Client
from solders.hash import Hash
from solders.pubkey import Pubkey
from solders.rpc.requests import GetAccountInfo
from spl.token.constants import TOKEN_PROGRAM_ID

from transfer_blink.chain.reader import SolanaChainReader
from transfer_blink.core.exceptions import ChainStateUnavailable


def test_get_latest_blockhash():
    blockhash = Hash.new_unique()
    mock_client = MagicMock()
    mock_client.get_latest_blockhash.return_value = MagicMock(value=MagicMock(blockhash=blockhash))

    reader = SolanaChainReader(mock_client, commitment="finalized")

    assert reader.get_latest_blockhash() == blockhash
    _, kwargs = mock_client.get_latest_blockhash.call_args
    assert kwargs["commitment"] == "finalized"


def test_get_latest_blockhash_empty_response():
    mock_client = MagicMock()
    mock_client.get_latest_blockhash.return_value = MagicMock(value=None)
    with pytest.raises(ChainStateUnavailable):
        SolanaChainReader(mock_client).get_latest_blockhash()


def test_get_account_info_missing():
    mock_client = MagicMock()
    mock_client.get_account_info.return_value = MagicMock(value=None)
    assert SolanaChainReader(mock_client).get_account_info(Pubkey.new_unique()) is None


def test_get_account_info_snapshot():
    address = Pubkey.new_unique()
    mock_client = MagicMock()
    mock_client.get_account_info.return_value = MagicMock(
        value=MagicMock(owner=TOKEN_PROGRAM_ID, data=b"\x01\x02", lamports=2_039_280)
    )

    snap = SolanaChainReader(mock_client).get_account_info(address)

    assert snap is not None
    assert snap.owner == TOKEN_PROGRAM_ID
    assert snap.data == b"\x01\x02"
    assert snap.lamports == 2_039_280
    args, kwargs = mock_client.get_account_info.call_args
    assert args[0] == address
    assert kwargs["encoding"] == "base64"


def test_get_account_info_base64_pair():
    """Older clients return data as [base64, encoding]."""
    mock_client = MagicMock()
    mock_client.get_account_info.return_value = MagicMock(
        value=MagicMock(owner=TOKEN_PROGRAM_ID, data=[base64.b64encode(b"mint").decode(), "base64"], lamports=1)
    )
    snap = SolanaChainReader(mock_client).get_account_info(Pubkey.new_unique())
    assert snap.data == b"mint"


def _rpc_exception() -> SolanaRpcException:
    """SolanaRpcException as solana-py raises it: (cause, client method, self, request body)."""
    return SolanaRpcException(
        httpx.ConnectError("connection refused"),
        Client.get_account_info,
        None,
        GetAccountInfo(Pubkey.default()),
    )


@pytest.mark.parametrize(
    "make_error",
    [
        lambda: httpx.ConnectError("connection refused"),
        lambda: httpx.ReadTimeout("timed out"),
        _rpc_exception,
    ],
    ids=["connect_error", "read_timeout", "solana_rpc_exception"],
)
def test_transport_errors_are_retryable(make_error):
    error = make_error()
    mock_client = MagicMock()
    mock_client.get_account_info.side_effect = error
    mock_client.get_latest_blockhash.side_effect = error
    reader = SolanaChainReader(mock_client)

    with pytest.raises(ChainStateUnavailable) as exc_info:
        reader.get_account_info(Pubkey.new_unique())
    assert exc_info.value.retryable is True
    assert exc_info.value.__cause__ is error

    with pytest.raises(ChainStateUnavailable):
        reader.get_latest_blockhash()


def test_unexpected_errors_propagate():
    """Programming errors are not disguised as transient chain failures."""
    mock_client = MagicMock()
    mock_client.get_account_info.side_effect = KeyError("boom")
    with pytest.raises(KeyError):
        SolanaChainReader(mock_client).get_account_info(Pubkey.new_unique())


def test_from_settings_builds_client(settings_env):
    from transfer_blink.config.settings import Settings

    settings = Settings(solana_rpc_url="https://rpc.example.com", commitment="processed", rpc_timeout_sec=5.0)
    with patch("transfer_blink.chain.reader.Client") as mock_client_cls:
        reader = SolanaChainReader.from_settings(settings)

    args, kwargs = mock_client_cls.call_args
    assert args[0] == "https://rpc.example.com"
    assert kwargs["commitment"] == "processed"
    assert kwargs["timeout"] == 5.0
    assert isinstance(reader, SolanaChainReader)
