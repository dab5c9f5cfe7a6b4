"""End-to-end smoke run against a live KITE Custody Orchestrator.

Usage:
    KITE_BASE_URL=http://localhost:3000 KITE_API_KEY=your-key kite-smoke [--skip-broadcast]

Options:
    --email           User email to create/look up (default: unique per run)
    --rpc-url         Chain RPC endpoint (default: RPC_URL env or Ethereum mainnet)
    --skip-broadcast  Sign but do not send the transaction

Every client method is called once; failures are reported and the run
continues, except for health and wallet setup which abort it.
"""

import argparse
import asyncio
import logging
import os
import sys
import time
from typing import Optional

from kite_custody.client import KiteClient
from kite_custody.config import get_settings
from kite_custody.errors import KiteApiError, KiteNetworkError
from kite_custody.models import GasData, TransactionType

DEFAULT_RPC_URL = "https://eth.llamarpc.com"
BURN_ADDRESS = "0x0000000000000000000000000000000000000001"

# Step outcome -> (ANSI color, mark)
OUTCOMES = {
    "ok": ("\033[92m", "✓"),
    "fail": ("\033[91m", "✗"),
    "warn": ("\033[93m", "⚠"),
}


def report(step: str, outcome: str, detail: str = ""):
    """Print one colored step line."""
    color, mark = OUTCOMES[outcome]
    line = f"  {color}{mark}\033[0m {step}"
    print(f"{line} - {detail}" if detail else line)


def report_failure(step: str, err: Exception):
    """Report a failed step, classifying KITE errors by kind and status."""
    if isinstance(err, KiteApiError):
        report(step, "fail", f"API error {err.status_code} - {err.message}")
        if err.is_auth_error:
            report(step, "warn", "Check KITE_API_KEY")
        elif err.is_not_found:
            report(step, "warn", "Resource not found")
    elif isinstance(err, KiteNetworkError):
        report(step, "fail", f"Network error - {err.message}")
    else:
        report(step, "fail", str(err))


async def run_smoke(
    client: KiteClient,
    email: str,
    rpc_url: str,
    skip_broadcast: bool = True,
) -> bool:
    """Call every endpoint once.

    Returns:
        False if the run had to abort (health or wallet setup failed)
    """
    wallet_id: Optional[str] = None
    unsigned_raw: Optional[str] = None
    signed_hex: Optional[str] = None

    print("\n🩺 Health...")
    try:
        health = await client.health_check()
        report("Health", "ok", f"{health.status} ({health.service})")
    except Exception as e:
        report_failure("health_check", e)
        return False

    print("\n👛 Wallets...")
    try:
        created = await client.create_wallet(email)
        wallet_id = created.wallet_id
        report("Create wallet", "ok", f"{wallet_id} for {email}, address {created.address}")
    except KiteApiError as e:
        if e.status_code == 409:
            report("Create wallet", "warn", "User already has a wallet; listing wallets to get wallet_id")
            try:
                listing = await client.list_wallets()
                if listing.wallets:
                    wallet_id = listing.wallets[0].wallet_id
            except Exception as list_error:
                report_failure("list_wallets (fallback)", list_error)
        if not wallet_id:
            report_failure("create_wallet", e)
            return False
    except Exception as e:
        report_failure("create_wallet", e)
        return False

    try:
        listing = await client.list_wallets()
        count = listing.count if listing.count is not None else len(listing.wallets)
        report("List wallets", "ok", f"{count} wallet(s)")
    except Exception as e:
        report_failure("list_wallets", e)

    try:
        wallet = await client.get_wallet(wallet_id)
        report("Get wallet", "ok", f"{wallet.wallet_id} -> {wallet.address}")
    except Exception as e:
        report_failure("get_wallet", e)

    try:
        by_user = await client.get_wallets_by_user(email)
        owner = by_user.user.email if by_user.user else None
        report("Wallets by user", "ok", f"{owner} has {by_user.count or 0} wallet(s)")
    except Exception as e:
        report_failure("get_wallets_by_user", e)

    print("\n👤 Users...")
    try:
        users = await client.list_users()
        count = users.count if users.count is not None else len(users.users)
        report("List users", "ok", f"{count} user(s)")
    except Exception as e:
        report_failure("list_users", e)

    try:
        user = await client.get_user(email)
        report("Get user", "ok", f"{user.email} ({user.user_id})")
    except Exception as e:
        report_failure("get_user", e)

    print("\n⛽ Nonce & gas...")
    nonce = 0
    try:
        nonce_result = await client.get_nonce(wallet_id, rpc_url)
        nonce = nonce_result.nonce or 0
        report("Nonce", "ok", str(nonce_result.nonce))
    except Exception as e:
        report_failure("get_nonce", e)

    try:
        gas = await client.get_gas_prices(rpc_url, transaction_type=TransactionType.EIP1559)
        average = gas.average.max_fee_per_gas if gas.average else None
        report("Gas prices (EIP-1559)", "ok", f"average max_fee_per_gas={average or 'n/a'}")
    except Exception as e:
        report_failure("get_gas_prices", e)

    gas_data = None
    try:
        single = await client.get_gas_price(rpc_url, transaction_type=TransactionType.EIP1559)
        report("Single gas price", "ok", f"max_fee_per_gas={single.max_fee_per_gas or 'n/a'}")
        if single.max_fee_per_gas:
            gas_data = GasData(
                max_fee_per_gas=single.max_fee_per_gas,
                max_priority_fee_per_gas=single.max_priority_fee_per_gas or single.max_fee_per_gas,
                gas_limit=single.gas_limit or "21000",
            )
    except Exception as e:
        report_failure("get_gas_price", e)

    print("\n✍️  Transactions...")
    try:
        tx = await client.create_native_transfer(
            wallet_id=wallet_id,
            rpc_url=rpc_url,
            to=BURN_ADDRESS,
            value="0",
            transaction_type=TransactionType.EIP1559,
            gas_data=gas_data,
            nonce=nonce,
        )
        unsigned_raw = tx.unsigned_raw
        report("Create native transfer", "ok", f"unsigned_raw length {len(unsigned_raw or '')}")
    except Exception as e:
        report_failure("create_native_transfer", e)

    if unsigned_raw:
        try:
            signed = await client.sign_transaction(wallet_id, unsigned_raw)
            signed_hex = signed.signed_hex
            report("Sign transaction", "ok", f"hash={signed.transaction_hash or 'n/a'}")
        except Exception as e:
            report_failure("sign_transaction", e)

    if signed_hex and not skip_broadcast:
        try:
            receipt = await client.broadcast_transaction(signed_hex, rpc_url)
            if receipt.failed:
                report("Broadcast", "fail", f"{receipt.error_code}: {receipt.reason}")
            else:
                report("Broadcast", "ok", f"tx_hash={receipt.transaction_hash}, status={receipt.status}")
        except Exception as e:
            report_failure("broadcast_transaction", e)
    elif signed_hex:
        report("Broadcast", "warn", "Skipped (--skip-broadcast)")

    return True


def main(argv: Optional[list[str]] = None) -> int:
    """Console entry point."""
    parser = argparse.ArgumentParser(description="KITE Custody Orchestrator smoke run")
    parser.add_argument(
        "--email",
        default=os.getenv("TEST_USER_EMAIL") or f"sdk-test-{int(time.time() * 1000)}@example.com",
        help="User email to create or look up",
    )
    parser.add_argument(
        "--rpc-url",
        default=os.getenv("RPC_URL", DEFAULT_RPC_URL),
        help="Chain RPC endpoint",
    )
    parser.add_argument(
        "--skip-broadcast",
        action="store_true",
        default=os.getenv("SKIP_BROADCAST", "").lower() in ("1", "true"),
        help="Sign but do not broadcast",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG, format="%(asctime)s - %(levelname)s - %(message)s")

    settings = get_settings()
    if not settings.has_api_key:
        print("KITE_API_KEY is required. Create an organization first (admin) and set the API key.")
        return 1

    print(f"KITE smoke run: {settings.get_safe_dict()}")
    client = KiteClient.from_settings(settings)
    ok = asyncio.run(run_smoke(client, args.email, args.rpc_url, args.skip_broadcast))

    print("\nSmoke run finished." if ok else "\nSmoke run aborted.")
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
