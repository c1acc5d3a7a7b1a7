"""
Application-level exceptions.

Every failure the transfer engine can produce is a TransferError subclass with a
stable code, the HTTP status the API maps it to, and whether the caller may retry.
"""

from __future__ import annotations


class TransferError(Exception):
    """Base class for transfer-construction failures."""

    code = "transfer_error"
    http_status = 400
    retryable = False

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        return {"error": self.message, "code": self.code}


class InvalidAddress(TransferError):
    """Payer, recipient or mint is not a valid base58 public key."""

    code = "invalid_address"

    def __init__(self, field: str, value: str) -> None:
        shown = value if len(value) <= 48 else value[:48] + "..."
        super().__init__(f"Invalid {field} address: {shown!r}")
        self.field = field
        self.value = value


class MintNotFound(TransferError):
    """No account exists at the token mint address."""

    code = "mint_not_found"

    def __init__(self, mint: str) -> None:
        super().__init__(f"Token mint {mint} not found")
        self.mint = mint


class MintMalformed(TransferError):
    """The account at the mint address is not an initialized SPL token mint."""

    code = "mint_malformed"

    def __init__(self, mint: str, reason: str) -> None:
        super().__init__(f"Account {mint} is not a valid token mint: {reason}")
        self.mint = mint
        self.reason = reason


class AmountOutOfRange(TransferError):
    code = "amount_out_of_range"


class ChainStateUnavailable(TransferError):
    """Chain state could not be read (RPC/network failure). Safe to retry."""

    code = "chain_state_unavailable"
    http_status = 503
    retryable = True


class AssemblyError(TransferError):
    """Transaction could not be assembled (empty, uncompilable or oversized)."""

    code = "assembly_error"
    http_status = 500
