"""Repository for bank account and bank transaction operations."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.bank.models import BankAccount, BankTransaction
from tracker.bank.schemas import BankAccountData, BankTransactionCreate
from tracker.transaction.models import Transaction
from tracker.transaction.schemas import TransactionCreate


class BankRepository:
    """Repository for bank data mirrored from the aggregator."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def get_accounts(self, user_id: int) -> List[BankAccount]:
        result = await self.session.execute(
            select(BankAccount).where(BankAccount.user_id == user_id).order_by(BankAccount.id)
        )
        return list(result.scalars().all())

    async def get_account(self, bank_account_id: int) -> Optional[BankAccount]:
        result = await self.session.execute(
            select(BankAccount).where(BankAccount.id == bank_account_id)
        )
        return result.scalar_one_or_none()

    async def get_account_by_external_id(self, account_id: str) -> Optional[BankAccount]:
        result = await self.session.execute(
            select(BankAccount).where(BankAccount.account_id == account_id)
        )
        return result.scalar_one_or_none()

    async def upsert_account(self, user_id: int, account: BankAccountData) -> Optional[BankAccount]:
        """Insert the account, or refresh it if the external id is known.

        Returns None, changing nothing, when the account belongs to another user.
        """
        db_account = await self.get_account_by_external_id(account.account_id)
        if db_account is None:
            db_account = BankAccount(user_id=user_id, **account.model_dump())
            self.session.add(db_account)
        elif db_account.user_id != user_id:
            return None
        else:
            for field, value in account.model_dump().items():
                setattr(db_account, field, value)

        await self.session.commit()
        await self.session.refresh(db_account)
        return db_account

    async def mark_synced(self, bank_account_id: int, when: datetime) -> Optional[BankAccount]:
        db_account = await self.get_account(bank_account_id)
        if not db_account:
            return None

        db_account.last_synced_at = when
        await self.session.commit()
        await self.session.refresh(db_account)
        return db_account

    async def add_transaction(
        self, transaction: BankTransactionCreate, ledger_transaction: TransactionCreate
    ) -> Optional[BankTransaction]:
        """Store a bank transaction and its ledger copy in one commit.

        Returns None if the bank transaction was imported before.
        """
        result = await self.session.execute(
            select(BankTransaction.id).where(
                BankTransaction.transaction_id == transaction.transaction_id
            )
        )
        if result.scalar_one_or_none() is not None:
            return None

        db_transaction = BankTransaction(**transaction.model_dump())
        self.session.add_all([db_transaction, Transaction(**ledger_transaction.model_dump())])
        await self.session.commit()
        await self.session.refresh(db_transaction)
        return db_transaction
