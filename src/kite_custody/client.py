"""KITE Custody Orchestrator client.

Organization is derived from the API key; there is no org management on
the client. Every method either returns a typed result or raises
KiteApiError / KiteNetworkError.

Typical flow:
1. create_wallet (or get_wallets_by_user)
2. get_nonce / get_gas_price
3. create_native_transfer or create_erc20_transfer -> unsigned_raw
4. sign_transaction -> signed_hex
5. broadcast_transaction
"""

from typing import Any, Optional, TypeVar, Union
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from kite_custody.config import Settings, get_settings
from kite_custody.errors import KiteApiError
from kite_custody.log import LogSink, SdkLogger
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
    UserDetail,
    UserWallets,
    Wallet,
)
from kite_custody.models.base import KiteModel
from kite_custody.transport import RequestConfig, request

ModelT = TypeVar("ModelT", bound=KiteModel)

DEFAULT_TIMEOUT_MS = 30000
VALID_TRANSACTION_TYPES = (0, 1, 2)


def _segment(value: str) -> str:
    """Percent-encode a user-supplied path segment."""
    return quote(value, safe="")


def _compact(body: dict[str, Any]) -> dict[str, Any]:
    """Drop unset fields from a request body."""
    return {key: value for key, value in body.items() if value is not None}


def _nested(data: Any) -> Any:
    """Unwrap a second ``data`` level some endpoints still return."""
    if isinstance(data, dict) and data.get("data") is not None:
        return data["data"]
    return data


def _parse(model: type[ModelT], data: Any, raw: Any = None) -> ModelT:
    """Validate a 2xx payload; a payload of the wrong shape is an API error."""
    try:
        return model.model_validate(data if isinstance(data, dict) else {})
    except ValidationError as e:
        raise KiteApiError(
            status_code=502,
            message="Unexpected response shape",
            raw=data if raw is None else raw,
        ) from e


def _gas_data_body(gas_data: Union[GasData, dict, None]) -> Optional[dict]:
    if isinstance(gas_data, GasData):
        return gas_data.to_wire()
    return gas_data


def _require_string(value: Any, name: str) -> None:
    if not value or not isinstance(value, str):
        raise KiteApiError(status_code=400, message=f"{name} is required and must be a string")


def _check_transaction_type(transaction_type: Optional[int]) -> None:
    if transaction_type is not None and transaction_type not in VALID_TRANSACTION_TYPES:
        raise KiteApiError(
            status_code=400,
            message="transaction_type must be 0, 1 (Legacy), or 2 (EIP-1559) if provided",
        )


class KiteClient:
    """Async client for the KITE Custody Orchestrator API."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        log_level: str = "info",
        timeout: int = DEFAULT_TIMEOUT_MS,
        log_sink: Optional[LogSink] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            base_url: Orchestrator base URL (e.g. https://kite.example.com)
            api_key: API key for your organization
            log_level: Minimum SDK log level (debug, info, warn, error)
            timeout: Request timeout in milliseconds
            log_sink: Optional ``(level, message)`` callable receiving SDK logs
            transport: Optional httpx transport used for every request
        """
        base_url = (base_url or "").strip()
        api_key = (api_key or "").strip()

        if not base_url:
            raise ValueError("KiteClient: base_url is required")
        if not api_key:
            raise ValueError("KiteClient: api_key is required")
        if not api_key.isascii():
            raise ValueError("KiteClient: api_key must be ASCII")
        if isinstance(timeout, bool) or not isinstance(timeout, int) or timeout <= 0:
            raise ValueError("KiteClient: timeout must be a positive number of milliseconds")

        self.config = RequestConfig(
            base_url=base_url,
            api_key=api_key,
            timeout=timeout,
            log=SdkLogger(log_level, sink=log_sink),
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **kwargs) -> "KiteClient":
        """Create a client from ``KITE_*`` settings."""
        settings = settings or get_settings()
        return cls(
            base_url=settings.base_url,
            api_key=settings.api_key,
            log_level=settings.log_level,
            timeout=settings.timeout,
            **kwargs,
        )

    async def _request(self, method: str, path: str, body: Optional[dict] = None) -> Any:
        return await request(self.config, method, path, body)

    def __repr__(self) -> str:
        return f"KiteClient(base_url={self.config.base_url!r})"

    # --- Health ---

    async def health_check(self) -> HealthStatus:
        """Health check for the KITE Custody Orchestrator."""
        data = await self._request("GET", "/health")
        return _parse(HealthStatus, data)

    # --- Wallets ---

    async def create_wallet(self, user_email: str) -> CreateWalletResult:
        """Create a user (if needed) and a wallet for that user.

        One wallet per user per organization; the orchestrator answers 409
        when the user already has one.
        """
        _require_string(user_email, "user_email")
        data = await self._request("POST", "/api/wallets", {"userEmail": user_email})
        return _parse(CreateWalletResult, data)

    async def list_wallets(self) -> ListWalletsResult:
        """List all wallets for your organization."""
        data = await self._request("GET", "/api/wallets")
        return self._listing(ListWalletsResult, data, "wallets")

    async def get_wallet(self, wallet_id: str) -> Wallet:
        """Get a single wallet by ID."""
        _require_string(wallet_id, "wallet_id")
        data = await self._request("GET", f"/api/wallets/{_segment(wallet_id)}")
        return _parse(Wallet, _nested(data))

    async def get_wallets_by_user(self, email: str) -> UserWallets:
        """Get all wallets for a user by email."""
        _require_string(email, "email")
        data = await self._request("GET", f"/api/wallets/users/{_segment(email)}/wallets")
        return _parse(UserWallets, data)

    # --- Users ---

    async def list_users(self) -> ListUsersResult:
        """List all users in your organization."""
        data = await self._request("GET", "/api/users")
        return self._listing(ListUsersResult, data, "users")

    async def get_user(self, email: str) -> UserDetail:
        """Get a user by email."""
        _require_string(email, "email")
        data = await self._request("GET", f"/api/users/{_segment(email)}")
        return _parse(UserDetail, _nested(data))

    @staticmethod
    def _listing(model: type[ModelT], data: Any, key: str) -> ModelT:
        """Accept ``{key, count}`` or ``{data: {key, count}}``; anything else is empty."""
        for candidate in (data, _nested(data)):
            if isinstance(candidate, dict) and isinstance(candidate.get(key), list):
                return _parse(model, {key: candidate[key], "count": candidate.get("count")}, raw=data)
        return model.model_validate({key: [], "count": 0})

    # --- Transactions: Nonce & Gas ---

    async def get_nonce(self, wallet_id: str, rpc_url: str) -> NonceResult:
        """Get the current nonce for a wallet on the given chain."""
        if not wallet_id or not rpc_url:
            raise KiteApiError(status_code=400, message="wallet_id and rpc_url are required")
        data = await self._request(
            "POST",
            "/api/transactions/nonce",
            {"walletId": wallet_id, "rpcUrl": rpc_url},
        )
        return _parse(NonceResult, data)

    async def get_gas_prices(
        self,
        rpc_url: str,
        transaction_type: Optional[int] = None,
        transaction: Optional[dict[str, Any]] = None,
    ) -> GasPricesResult:
        """Get gas price estimates with 3 tiers (low, average, high).

        The orchestrator detects EIP-1559 support for the chain and validates
        the transaction type. Passing ``transaction`` gives an accurate gas
        limit. Estimates include a 30% safety buffer.
        """
        if not rpc_url:
            raise KiteApiError(status_code=400, message="rpc_url is required")
        data = await self._request(
            "POST",
            "/api/transactions/gas-prices",
            _compact({
                "rpcUrl": rpc_url,
                "transactionType": transaction_type,
                "transaction": transaction,
            }),
        )
        return _parse(GasPricesResult, data)

    async def get_gas_price(
        self,
        rpc_url: str,
        transaction_type: Optional[int] = None,
        transaction: Optional[dict[str, Any]] = None,
    ) -> GasPriceResult:
        """Get a single gas price (legacy or EIP-1559), with a 30% safety buffer."""
        if not rpc_url:
            raise KiteApiError(status_code=400, message="rpc_url is required")
        data = await self._request(
            "POST",
            "/api/transactions/gas-price",
            _compact({
                "rpcUrl": rpc_url,
                "transactionType": transaction_type,
                "transaction": transaction,
            }),
        )
        return _parse(GasPriceResult, data)

    # --- Transactions: Create ---

    async def create_native_transfer(
        self,
        wallet_id: str,
        rpc_url: str,
        to: str,
        value: Optional[str] = None,
        token_address: Optional[str] = None,
        transaction_type: Optional[int] = None,
        gas_data: Union[GasData, dict, None] = None,
        nonce: Optional[int] = None,
    ) -> CreateTransactionResult:
        """Create an unsigned native (ETH) transfer transaction.

        Transaction type and gas data are auto-detected by the orchestrator
        when omitted: type 2 if the chain supports EIP-1559, type 1
        otherwise; gas with a 30% buffer (50% when ``token_address`` marks
        the transfer as ERC20 for estimation).

        Args:
            wallet_id: Sending wallet
            rpc_url: Chain RPC endpoint
            to: Recipient address
            value: Amount in wei (decimal string)
            token_address: Optional ERC20 token, used for gas estimation only
            transaction_type: 0, 1 or 2
            gas_data: Explicit gas parameters
            nonce: Explicit nonce

        Returns:
            CreateTransactionResult whose ``unsigned_raw`` feeds sign_transaction
        """
        if not wallet_id or not rpc_url or not to:
            raise KiteApiError(status_code=400, message="wallet_id, rpc_url, and to are required")
        _check_transaction_type(transaction_type)

        data = await self._request(
            "POST",
            "/api/transactions/native",
            _compact({
                "walletId": wallet_id,
                "rpcUrl": rpc_url,
                "to": to,
                "value": value,
                "tokenAddress": token_address,
                "transactionType": transaction_type,
                "gasData": _gas_data_body(gas_data),
                "nonce": nonce,
            }),
        )
        return _parse(CreateTransactionResult, data)

    async def create_erc20_transfer(
        self,
        wallet_id: str,
        rpc_url: str,
        token_address: str,
        to: str,
        amount: Optional[str],
        transaction_type: Optional[int] = None,
        gas_data: Union[GasData, dict, None] = None,
        nonce: Optional[int] = None,
    ) -> CreateTransactionResult:
        """Create an unsigned ERC20 token transfer transaction.

        Gas is auto-calculated with a 50% safety buffer when ``gas_data`` is
        omitted; the transaction type is auto-detected as for native transfers.
        """
        if not wallet_id or not rpc_url or not token_address or not to or amount is None:
            raise KiteApiError(
                status_code=400,
                message="wallet_id, rpc_url, token_address, to, and amount are required",
            )
        _check_transaction_type(transaction_type)

        data = await self._request(
            "POST",
            "/api/transactions/erc20",
            _compact({
                "walletId": wallet_id,
                "rpcUrl": rpc_url,
                "tokenAddress": token_address,
                "to": to,
                "amount": amount,
                "transactionType": transaction_type,
                "gasData": _gas_data_body(gas_data),
                "nonce": nonce,
            }),
        )
        return _parse(CreateTransactionResult, data)

    # --- Transactions: Sign & Broadcast ---

    async def sign_transaction(
        self,
        wallet_id: str,
        unsigned_raw: str,
        transaction: Optional[dict[str, Any]] = None,
    ) -> SignTransactionResult:
        """Sign an unsigned transaction from create_native_transfer or create_erc20_transfer."""
        _require_string(wallet_id, "wallet_id")
        if not unsigned_raw or not isinstance(unsigned_raw, str) or not unsigned_raw.startswith("0x"):
            raise KiteApiError(
                status_code=400,
                message="unsigned_raw is required and must be a valid hex string starting with 0x",
            )
        data = await self._request(
            "POST",
            "/api/transactions/sign",
            _compact({
                "walletId": wallet_id,
                "unsignedRaw": unsigned_raw,
                "transaction": transaction,
            }),
        )
        return _parse(SignTransactionResult, data)

    async def broadcast_transaction(self, signed_hex: str, rpc_url: str) -> BroadcastTransactionResult:
        """Broadcast a signed transaction to the chain.

        A rejected broadcast may come back either as KiteApiError (inspect
        ``raw`` for the node's reason) or as a result with ``error_code``,
        ``error_data`` and ``reason`` filled in.
        """
        _require_string(signed_hex, "signed_hex")
        _require_string(rpc_url, "rpc_url")
        data = await self._request(
            "POST",
            "/api/transactions/broadcast",
            {"signedHex": signed_hex, "rpcUrl": rpc_url},
        )
        return _parse(BroadcastTransactionResult, data)
