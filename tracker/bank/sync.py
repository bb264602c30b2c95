"""Imports aggregator transactions into the ledger."""

import logging
from datetime import datetime, timedelta

from fastapi.concurrency import run_in_threadpool

from tracker.bank.gateway import PlaidGateway
from tracker.bank.schemas import BankAccount, BankTransactionCreate, SyncResult
from tracker.storage.base import Storage
from tracker.transaction.schemas import TransactionCreate

logger = logging.getLogger(__name__)

SYNC_WINDOW_DAYS = 30


def to_ledger_transaction(bank_transaction: BankTransactionCreate) -> TransactionCreate:
    """Mirror a bank transaction as a ledger transaction.

    The aggregator reports outflows as positive amounts and inflows as
    negative ones.
    """
    is_outflow = bank_transaction.amount > 0
    return TransactionCreate(
        type="expense" if is_outflow else "income",
        amount=abs(bank_transaction.amount),
        category=bank_transaction.category if is_outflow else "Other Income",
        description=bank_transaction.merchant_name or bank_transaction.name,
        date=bank_transaction.date,
    )


async def sync_account(
    storage: Storage,
    gateway: PlaidGateway,
    access_token: str,
    account: BankAccount,
    now: datetime,
) -> SyncResult:
    """Pull the last SYNC_WINDOW_DAYS of transactions for one account.

    Pending and already imported transactions are skipped; every new posted
    one is stored as a bank transaction and mirrored into the ledger.
    """
    fetched = await run_in_threadpool(
        gateway.get_transactions,
        access_token,
        account.account_id,
        (now - timedelta(days=SYNC_WINDOW_DAYS)).date(),
        now.date(),
    )

    synced = skipped = 0
    for data in fetched:
        if data.pending:
            skipped += 1
            continue
        bank_transaction = BankTransactionCreate(**data.model_dump(), bank_account_id=account.id)
        stored = await storage.add_bank_transaction(bank_transaction, to_ledger_transaction(bank_transaction))
        if stored is None:
            skipped += 1
            continue
        synced += 1

    await storage.mark_bank_account_synced(account.id, now)
    logger.info("Synced bank account %s: %d new, %d skipped", account.id, synced, skipped)
    return SyncResult(synced=synced, skipped=skipped)
