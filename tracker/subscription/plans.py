"""Subscription plans and the features each one unlocks.

A plan is one of three variants: ``Free``, ``Trial(kind, started_at)`` or
``Paid(kind)``. Gating is advisory; it decides what the UI offers, it does
not protect any endpoint.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Literal, Optional, Union

from pydantic import BaseModel

from tracker.core.schemas import CamelModel

PlanKind = Literal["monthly", "annual"]

TRIAL_DAYS = {"monthly": 15, "annual": 30}
PAID_PERIOD_DAYS = {"monthly": 30, "annual": 365}
FREE_TRANSACTION_LIMIT = 50


@dataclass(frozen=True)
class Free:
    pass


@dataclass(frozen=True)
class Trial:
    kind: PlanKind
    started_at: datetime


@dataclass(frozen=True)
class Paid:
    kind: PlanKind


Plan = Union[Free, Trial, Paid]


class Features(CamelModel):
    """Feature flags; ``max_transactions`` of None means unlimited."""
    max_transactions: Optional[int]
    custom_categories: bool
    advanced_reports: bool
    loan_management: bool
    business_tracking: bool
    multi_currency: bool
    data_export: bool
    cloud_sync: bool
    ai_insights: bool
    receipt_scanning: bool
    smart_budgets: bool
    goal_tracking: bool
    team_collaboration: bool
    priority_support: bool


_FLAGS = [name for name in Features.model_fields if name != "max_transactions"]

FREE_FEATURES = Features(max_transactions=FREE_TRANSACTION_LIMIT, **{name: False for name in _FLAGS})
PREMIUM_FEATURES = Features(max_transactions=None, **{name: True for name in _FLAGS})


def plan_name(plan: Plan) -> str:
    """Stored subscription status string for a plan."""
    if isinstance(plan, Trial):
        return f"{plan.kind}_trial"
    if isinstance(plan, Paid):
        return plan.kind
    return "free"


def trial_days_left(plan: Plan, now: datetime) -> int:
    if not isinstance(plan, Trial):
        return 0
    elapsed_days = math.floor((now - plan.started_at) / timedelta(days=1))
    return max(0, TRIAL_DAYS[plan.kind] - elapsed_days)


def is_trial_expired(plan: Plan, now: datetime) -> bool:
    return isinstance(plan, Trial) and trial_days_left(plan, now) <= 0


def features_for(plan: Plan, now: datetime) -> Features:
    if isinstance(plan, Paid) or (isinstance(plan, Trial) and not is_trial_expired(plan, now)):
        return PREMIUM_FEATURES
    return FREE_FEATURES


def upgrade_required(plan: Plan, feature: str, now: datetime, transaction_count: int = 0) -> bool:
    """Whether using ``feature`` should prompt the user to upgrade."""
    locked_plan = isinstance(plan, Free) or is_trial_expired(plan, now)
    if feature == "max_transactions":
        return transaction_count >= FREE_TRANSACTION_LIMIT and locked_plan
    if feature not in _FLAGS:
        raise KeyError(f"Unknown feature: {feature}")
    return not getattr(features_for(plan, now), feature) and locked_plan


def plan_for_user(user, now: datetime) -> Plan:
    """Build the plan from a user's stored subscription fields.

    A paid plan whose expiry has passed falls back to Free.
    """
    status = user.subscription_status
    if status in ("monthly_trial", "annual_trial"):
        kind = status.split("_", 1)[0]
        return Trial(kind=kind, started_at=user.trial_started_at or user.created_at)
    if status in ("monthly", "annual"):
        expires_at = user.subscription_expires_at
        if expires_at is not None and expires_at < now:
            return Free()
        return Paid(kind=status)
    return Free()


class SubscriptionSummary(CamelModel):
    """What the client needs to render plan state."""
    plan: str
    trial_kind: Optional[PlanKind] = None
    trial_days_left: int
    is_trial_expired: bool
    features: Features


def summarize(plan: Plan, now: datetime) -> SubscriptionSummary:
    return SubscriptionSummary(
        plan=plan_name(plan),
        trial_kind=plan.kind if isinstance(plan, Trial) else None,
        trial_days_left=trial_days_left(plan, now),
        is_trial_expired=is_trial_expired(plan, now),
        features=features_for(plan, now),
    )


class TrialRequest(BaseModel):
    kind: PlanKind


class UpgradeCheck(CamelModel):
    feature: str
    upgrade_required: bool


# Wire names (camelCase) to feature attribute names
FEATURE_NAMES = {field.alias or name: name for name, field in Features.model_fields.items()}
