"""Wallet and user contracts.

Organization is derived from the API key on the backend; no model here
carries organization management.
"""

from typing import Optional

from pydantic import Field

from kite_custody.models.base import KiteModel


class Wallet(KiteModel):
    """A custodial wallet."""

    wallet_id: Optional[str] = Field(None, description="Wallet identifier")
    address: Optional[str] = Field(None, description="On-chain address")
    user_id: Optional[str] = None
    user_email: Optional[str] = None
    organization_id: Optional[str] = None
    created_at: Optional[str] = None


class CreateWalletResult(KiteModel):
    """Result of creating a user (if needed) and their wallet."""

    user_id: Optional[str] = None
    user_email: Optional[str] = None
    wallet_id: Optional[str] = None
    address: Optional[str] = None


class ListWalletsResult(KiteModel):
    wallets: list[Wallet] = Field(default_factory=list)
    count: Optional[int] = None


class User(KiteModel):
    """A user in the caller's organization."""

    user_id: Optional[str] = None
    email: Optional[str] = None
    organization_id: Optional[str] = None
    wallet_count: Optional[int] = None
    has_wallet: Optional[bool] = None


class UserDetail(User):
    """A user together with their wallets."""

    wallets: Optional[list[Wallet]] = None


class ListUsersResult(KiteModel):
    users: list[User] = Field(default_factory=list)
    count: Optional[int] = None


class UserWallets(KiteModel):
    """All wallets belonging to one user."""

    user: Optional[User] = None
    wallets: Optional[list[Wallet]] = None
    count: Optional[int] = None
