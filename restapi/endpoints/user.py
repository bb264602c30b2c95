"""Current-user endpoints: profile, subscription state and trials."""

import logging
from fastapi import APIRouter, Depends, HTTPException, Query

from restapi.dependencies import get_storage
from restapi.endpoints.auth import get_current_user
from tracker.core.schemas import utcnow
from tracker.storage.base import Storage
from tracker.subscription import plans
from tracker.user import schemas

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/users",
    tags=["users"],
    responses={401: {"description": "Not authenticated"}},
)


@router.get("/me", response_model=schemas.User)
async def read_current_user(current_user: schemas.UserInDB = Depends(get_current_user)):
    """Get the authenticated user."""
    return current_user


@router.get("/me/subscription", response_model=plans.SubscriptionSummary)
async def read_subscription(current_user: schemas.UserInDB = Depends(get_current_user)):
    """
    Get the user's plan state.

    Returns:
    - Plan name (free, monthly_trial, annual_trial, monthly, annual)
    - Trial kind and days left, when on a trial
    - Whether the trial has expired
    - Feature flags of the plan
    """
    now = utcnow()
    return plans.summarize(plans.plan_for_user(current_user, now), now)


@router.post("/me/trial", response_model=plans.SubscriptionSummary)
async def start_trial(
    trial: plans.TrialRequest,
    storage: Storage = Depends(get_storage),
    current_user: schemas.UserInDB = Depends(get_current_user),
):
    """Start a monthly or annual trial. Only free users can start one."""
    now = utcnow()
    if not isinstance(plans.plan_for_user(current_user, now), plans.Free):
        raise HTTPException(
            status_code=400,
            detail="A trial can only be started from the free plan"
        )

    user = await storage.update_user(current_user.id, {
        "subscription_status": plans.plan_name(plans.Trial(kind=trial.kind, started_at=now)),
        "trial_started_at": now,
    })
    logger.info("User %s started a %s trial", current_user.id, trial.kind)
    return plans.summarize(plans.plan_for_user(user, now), now)


@router.get("/me/upgrade-required", response_model=plans.UpgradeCheck)
async def check_upgrade_required(
    feature: str = Query(..., description="Feature flag name, e.g. advancedReports or maxTransactions"),
    storage: Storage = Depends(get_storage),
    current_user: schemas.UserInDB = Depends(get_current_user),
):
    """Whether using a feature should prompt the user to upgrade."""
    name = plans.FEATURE_NAMES.get(feature)
    if name is None:
        raise HTTPException(status_code=400, detail=f"Unknown feature: {feature}")

    now = utcnow()
    transaction_count = len(await storage.get_transactions()) if name == "max_transactions" else 0
    return plans.UpgradeCheck(
        feature=feature,
        upgrade_required=plans.upgrade_required(
            plans.plan_for_user(current_user, now), name, now, transaction_count
        ),
    )
