"""KITE Custodial SDK.

Async client for the KITE Custody Orchestrator API. Organization is derived
from your API key; no org management on the client.
"""

from kite_custody.client import KiteClient
from kite_custody.config import Settings, get_settings
from kite_custody.errors import KiteApiError, KiteError, KiteNetworkError
from kite_custody.log import LogLevel, SdkLogger
from kite_custody.models import (
    BroadcastTransactionResult,
    CreateTransactionResult,
    CreateWalletResult,
    GasData,
    GasPriceResult,
    GasPricesResult,
    HealthStatus,
    ListUsersResult,
    ListWalletsResult,
    NonceResult,
    SignTransactionResult,
    TransactionType,
    User,
    UserDetail,
    UserWallets,
    Wallet,
)

__version__ = "0.1.0"

__all__ = [
    "KiteClient",
    "Settings",
    "get_settings",
    # Errors
    "KiteError",
    "KiteApiError",
    "KiteNetworkError",
    # Logging
    "LogLevel",
    "SdkLogger",
    # Models
    "HealthStatus",
    "Wallet",
    "CreateWalletResult",
    "ListWalletsResult",
    "User",
    "UserDetail",
    "ListUsersResult",
    "UserWallets",
    "TransactionType",
    "GasData",
    "NonceResult",
    "GasPricesResult",
    "GasPriceResult",
    "CreateTransactionResult",
    "SignTransactionResult",
    "BroadcastTransactionResult",
]
