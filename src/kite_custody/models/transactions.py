"""Transaction contracts: nonce, gas, create, sign and broadcast.

Signing and gas estimation happen in the orchestrator. These models only
describe what goes over the wire.
"""

from enum import IntEnum
from typing import Any, Optional

from pydantic import Field

from kite_custody.models.base import KiteModel


class TransactionType(IntEnum):
    """EVM transaction envelope type."""
    LEGACY = 0
    ACCESS_LIST = 1   # EIP-2930
    EIP1559 = 2


class GasData(KiteModel):
    """Gas parameters for a transaction (decimal wei strings)."""

    gas_price: Optional[str] = Field(None, description="Legacy gas price")
    max_fee_per_gas: Optional[str] = Field(None, description="EIP-1559 max fee")
    max_priority_fee_per_gas: Optional[str] = Field(None, description="EIP-1559 priority fee")
    gas_limit: Optional[str] = Field(None, description="Gas limit")


class GasDataTier(GasData):
    """One tier (low / average / high) of a gas estimate."""


class ChainSupportInfo(KiteModel):
    supports_eip1559: Optional[bool] = Field(None, alias="supportsEIP1559")
    chain_id: Optional[int] = None
    message: Optional[str] = None


class NonceResult(KiteModel):
    wallet_id: Optional[str] = None
    wallet_address: Optional[str] = None
    nonce: Optional[int] = None
    rpc_url: Optional[str] = None


class GasPricesResult(KiteModel):
    """Three-tier gas estimate. Estimates include a 30% safety buffer."""

    rpc_url: Optional[str] = None
    low: Optional[GasDataTier] = None
    average: Optional[GasDataTier] = None
    high: Optional[GasDataTier] = None
    chain_support: Optional[ChainSupportInfo] = None
    message: Optional[str] = None


class GasPriceResult(GasData):
    """Single gas estimate (legacy or EIP-1559)."""

    rpc_url: Optional[str] = None
    chain_support: Optional[ChainSupportInfo] = None
    message: Optional[str] = None


class CreateTransactionResult(KiteModel):
    """An unsigned transaction ready for ``sign_transaction``."""

    wallet_id: Optional[str] = None
    transaction: Optional[dict[str, Any]] = None
    unsigned_raw: Optional[str] = Field(None, description="Unsigned serialized transaction (0x hex)")
    chain_id: Optional[int] = None
    rpc_url: Optional[str] = None
    transaction_type: Optional[int] = None
    gas_limit: Optional[str] = None
    nonce: Optional[int] = None
    token_address: Optional[str] = None
    chain_warning: Optional[str] = None


class TransactionSignature(KiteModel):
    r: Optional[str] = None
    s: Optional[str] = None
    v: Optional[int] = None


class SignTransactionResult(KiteModel):
    wallet_id: Optional[str] = None
    unsigned_raw: Optional[str] = None
    signed_hex: Optional[str] = Field(None, description="Signed serialized transaction (0x hex)")
    transaction_hash: Optional[str] = None
    signature: Optional[TransactionSignature] = None


class BroadcastTransactionResult(KiteModel):
    """Broadcast outcome.

    When the node rejects the transaction the orchestrator may still answer
    with a 2xx and fill in ``error_code`` / ``error_data`` / ``reason``.
    """

    transaction_hash: Optional[str] = None
    block_number: Optional[int] = None
    block_hash: Optional[str] = None
    status: Optional[int] = None
    gas_used: Optional[str] = None

    # Error details (if broadcast failed)
    error_code: Optional[str] = None
    error_data: Any = None
    reason: Optional[str] = None

    @property
    def failed(self) -> bool:
        """Check if the orchestrator reported a broadcast rejection."""
        return bool(self.error_code or self.reason)
