"""Bank account linking and sync endpoints (Plaid)."""

import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.concurrency import run_in_threadpool

from restapi.dependencies import get_plaid, get_storage
from restapi.endpoints.auth import get_current_user
from tracker.bank import schemas
from tracker.bank.gateway import PlaidGateway
from tracker.bank.sync import sync_account
from tracker.core.schemas import utcnow
from tracker.storage.base import BankAccountConflict, Storage
from tracker.user.schemas import UserInDB

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["bank"],
    responses={404: {"description": "Not found"}},
)


@router.get("/bank-accounts", response_model=List[schemas.BankAccount])
async def read_bank_accounts(
    storage: Storage = Depends(get_storage),
    current_user: UserInDB = Depends(get_current_user),
):
    """Get the linked bank accounts of the current user."""
    return await storage.get_bank_accounts(current_user.id)


@router.get("/plaid/create-link-token", response_model=schemas.LinkToken)
async def create_link_token(
    gateway: PlaidGateway = Depends(get_plaid),
    current_user: UserInDB = Depends(get_current_user),
):
    """Create a Link token for the bank connection widget."""
    link_token = await run_in_threadpool(gateway.create_link_token, current_user.id)
    return schemas.LinkToken(link_token=link_token)


@router.post("/plaid/exchange-public-token", response_model=List[schemas.BankAccount])
async def exchange_public_token(
    exchange: schemas.PublicTokenExchange,
    gateway: PlaidGateway = Depends(get_plaid),
    storage: Storage = Depends(get_storage),
    current_user: UserInDB = Depends(get_current_user),
):
    """
    Finish linking a bank.

    Stores the item's access token on the user and creates or refreshes
    every account of the item. An account already linked by another user
    is a 409.
    """
    access_token, item_id = await run_in_threadpool(gateway.exchange_public_token, exchange.public_token)
    institution = (exchange.metadata or {}).get("institution") or {}
    accounts = await run_in_threadpool(gateway.get_accounts, access_token, institution.get("name"))
    try:
        linked = [await storage.upsert_bank_account(current_user.id, account) for account in accounts]
    except BankAccountConflict as e:
        logger.warning("User %s tried to link account %s owned by another user", current_user.id, e)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Bank account is already linked to another user"
        )

    await storage.update_user(current_user.id, {
        "plaid_access_token": access_token,
        "plaid_item_id": item_id,
    })
    logger.info("User %s linked item %s with %d accounts", current_user.id, item_id, len(linked))
    return linked


@router.post("/bank-accounts/sync", response_model=schemas.SyncResult)
async def sync_bank_account(
    sync: schemas.SyncRequest,
    gateway: PlaidGateway = Depends(get_plaid),
    storage: Storage = Depends(get_storage),
    current_user: UserInDB = Depends(get_current_user),
):
    """Import the last 30 days of posted transactions of one account."""
    account = await storage.get_bank_account(sync.account_id)
    if account is None or account.user_id != current_user.id:
        raise HTTPException(status_code=404, detail="Bank account not found")
    if not current_user.plaid_access_token:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No bank connection for this user"
        )

    return await sync_account(storage, gateway, current_user.plaid_access_token, account, utcnow())
