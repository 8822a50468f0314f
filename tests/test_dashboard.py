"""Tests for dashboard aggregation."""

from datetime import datetime, timedelta, UTC
from decimal import Decimal

from continuum.domain.calculations import quantize_money
from continuum.domain.dashboard import DashboardService, monthly_recurring_total
from continuum.domain.entities import BillingCycle

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=UTC)


def test_empty_dashboard(temp_db):
    summary = DashboardService(temp_db).build_summary(now=NOW)

    assert summary.monthly_recurring_total == Decimal("0")
    assert summary.total_assets_value == Decimal("0")
    assert summary.subscription_count == 0
    assert summary.upcoming_renewals == ()
    assert summary.expiring_warranties == ()


def test_summary_totals(temp_db, subscription_service, asset_service, warranty_service):
    subscription_service.create_subscription(
        name="Weekly box", amount=Decimal("10"), billing_cycle=BillingCycle.WEEKLY,
        next_due_date=NOW + timedelta(days=40),
    )
    subscription_service.create_subscription(
        name="Annual plan", amount=Decimal("120"), billing_cycle=BillingCycle.YEARLY,
        next_due_date=NOW + timedelta(days=4),
    )
    subscription_service.create_subscription(
        name="Rent", amount=Decimal("1200"), next_due_date=NOW - timedelta(days=1),
        is_subscription=False,
    )
    asset_service.create_asset(name="Car", current_value=Decimal("15000"))
    asset_service.create_asset(name="Watch", current_value=Decimal("499.99"))
    warranty_service.create_warranty(
        product_name="TV", purchase_date=NOW, expiry_date=NOW + timedelta(days=25)
    )
    warranty_service.create_warranty(
        product_name="Kettle", purchase_date=NOW, expiry_date=NOW - timedelta(days=2)
    )

    summary = DashboardService(temp_db).build_summary(now=NOW)

    assert quantize_money(summary.monthly_recurring_total) == Decimal("1253.33")
    assert summary.total_assets_value == Decimal("15499.99")
    assert summary.subscription_count == 2
    assert summary.recurring_payment_count == 1
    assert summary.warranty_count == 2
    assert [s.name for s in summary.upcoming_renewals] == ["Rent", "Annual plan"]
    assert [w.product_name for w in summary.expiring_warranties] == ["TV"]


def test_monthly_total_has_no_float_drift():
    class Item:
        def __init__(self, amount):
            self.amount = Decimal(amount)
            self.billing_cycle = BillingCycle.MONTHLY

    items = [Item("0.10") for _ in range(10)]
    assert monthly_recurring_total(items) == Decimal("1.00")


def test_monthly_breakdown_largest_first(temp_db, subscription_service):
    subscription_service.create_subscription(name="Small", amount=Decimal("5"))
    subscription_service.create_subscription(
        name="Big yearly", amount=Decimal("240"), billing_cycle=BillingCycle.YEARLY
    )
    subscription_service.create_subscription(name="Medium", amount=Decimal("12"))

    lines = DashboardService(temp_db).monthly_breakdown()

    assert [line.subscription.name for line in lines] == ["Big yearly", "Medium", "Small"]
    assert lines[0].monthly_amount == Decimal("20")
