from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest

from tracker.subscription import plans

NOW = datetime(2024, 6, 1, 12)


def test_trial_days_left():
    assert plans.trial_days_left(plans.Trial("monthly", NOW), NOW) == 15
    assert plans.trial_days_left(plans.Trial("annual", NOW - timedelta(days=10)), NOW) == 20
    assert plans.trial_days_left(plans.Trial("monthly", NOW - timedelta(days=40)), NOW) == 0
    assert plans.trial_days_left(plans.Free(), NOW) == 0
    assert plans.trial_days_left(plans.Paid("annual"), NOW) == 0


def test_trial_expiry():
    assert not plans.is_trial_expired(plans.Trial("monthly", NOW - timedelta(days=14)), NOW)
    assert plans.is_trial_expired(plans.Trial("monthly", NOW - timedelta(days=15)), NOW)
    assert not plans.is_trial_expired(plans.Free(), NOW)


def test_features_per_plan():
    assert plans.features_for(plans.Free(), NOW).max_transactions == 50
    assert plans.features_for(plans.Paid("monthly"), NOW).advanced_reports
    assert plans.features_for(plans.Trial("annual", NOW), NOW).max_transactions is None

    expired = plans.Trial("monthly", NOW - timedelta(days=30))
    assert plans.features_for(expired, NOW) == plans.FREE_FEATURES


def test_upgrade_required():
    free = plans.Free()
    assert plans.upgrade_required(free, "max_transactions", NOW, transaction_count=50)
    assert not plans.upgrade_required(free, "max_transactions", NOW, transaction_count=49)
    assert plans.upgrade_required(free, "data_export", NOW)

    assert not plans.upgrade_required(plans.Paid("annual"), "data_export", NOW)
    assert not plans.upgrade_required(plans.Trial("monthly", NOW), "max_transactions", NOW, 500)

    with pytest.raises(KeyError):
        plans.upgrade_required(free, "time_travel", NOW)


def test_plan_for_user():
    user = SimpleNamespace(
        subscription_status="annual_trial",
        trial_started_at=NOW - timedelta(days=3),
        subscription_expires_at=None,
        created_at=NOW - timedelta(days=5),
    )
    assert plans.plan_for_user(user, NOW) == plans.Trial("annual", NOW - timedelta(days=3))

    user.subscription_status = "monthly"
    user.subscription_expires_at = NOW + timedelta(days=1)
    assert plans.plan_for_user(user, NOW) == plans.Paid("monthly")

    user.subscription_expires_at = NOW - timedelta(days=1)
    assert plans.plan_for_user(user, NOW) == plans.Free()


def test_summary_uses_wire_names():
    summary = plans.summarize(plans.Trial("monthly", NOW - timedelta(days=5)), NOW)
    body = summary.model_dump(by_alias=True)

    assert body["plan"] == "monthly_trial"
    assert body["trialKind"] == "monthly"
    assert body["trialDaysLeft"] == 10
    assert body["isTrialExpired"] is False
    assert body["features"]["maxTransactions"] is None
    assert plans.FEATURE_NAMES["advancedReports"] == "advanced_reports"
