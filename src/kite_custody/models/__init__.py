"""Request and response contracts for the KITE Custody Orchestrator API."""

from kite_custody.models.health import HealthStatus
from kite_custody.models.transactions import (
    BroadcastTransactionResult,
    ChainSupportInfo,
    CreateTransactionResult,
    GasData,
    GasDataTier,
    GasPriceResult,
    GasPricesResult,
    NonceResult,
    SignTransactionResult,
    TransactionSignature,
    TransactionType,
)
from kite_custody.models.wallets import (
    CreateWalletResult,
    ListUsersResult,
    ListWalletsResult,
    User,
    UserDetail,
    UserWallets,
    Wallet,
)

__all__ = [
    # Health
    "HealthStatus",
    # Wallets and users
    "Wallet",
    "CreateWalletResult",
    "ListWalletsResult",
    "User",
    "UserDetail",
    "ListUsersResult",
    "UserWallets",
    # Transactions
    "TransactionType",
    "GasData",
    "GasDataTier",
    "ChainSupportInfo",
    "NonceResult",
    "GasPricesResult",
    "GasPriceResult",
    "CreateTransactionResult",
    "TransactionSignature",
    "SignTransactionResult",
    "BroadcastTransactionResult",
]
