"""Tests for calendar views."""

from datetime import date, datetime, timedelta, UTC

from continuum.domain.calendar import CalendarService, month_range, week_range


def test_month_range():
    assert month_range(2026, 2) == (date(2026, 2, 1), date(2026, 2, 28))
    assert month_range(2028, 2) == (date(2028, 2, 1), date(2028, 2, 29))


def test_week_range_starts_monday():
    # 2026-03-18 is a Wednesday
    assert week_range(date(2026, 3, 18)) == (date(2026, 3, 16), date(2026, 3, 22))


def test_events_for_month(temp_db, subscription_service, warranty_service):
    subscription_service.create_subscription(
        name="Netflix", next_due_date=datetime(2026, 3, 5, 9, 0, tzinfo=UTC)
    )
    subscription_service.create_subscription(
        name="Spotify", next_due_date=datetime(2026, 3, 5, 18, 0, tzinfo=UTC)
    )
    subscription_service.create_subscription(
        name="April thing", next_due_date=datetime(2026, 4, 1, 9, 0, tzinfo=UTC)
    )
    warranty_service.create_warranty(
        product_name="Router",
        purchase_date=datetime(2025, 3, 20, tzinfo=UTC),
        expiry_date=datetime(2026, 3, 20, 12, 0, tzinfo=UTC),
    )

    days = CalendarService(temp_db, tzinfo=UTC).events_for_month(2026, 3)

    assert [d.day for d in days] == [date(2026, 3, 5), date(2026, 3, 20)]
    assert [s.name for s in days[0].renewals] == ["Netflix", "Spotify"]
    assert days[0].expirations == ()
    assert [w.product_name for w in days[1].expirations] == ["Router"]


def test_events_for_week(temp_db, subscription_service):
    monday = datetime(2026, 3, 16, 12, 0, tzinfo=UTC)
    subscription_service.create_subscription(name="In week", next_due_date=monday + timedelta(days=6))
    subscription_service.create_subscription(name="Next week", next_due_date=monday + timedelta(days=7))

    days = CalendarService(temp_db, tzinfo=UTC).events_for_week(date(2026, 3, 18))

    assert [s.name for d in days for s in d.renewals] == ["In week"]


def test_events_for_empty_day(temp_db):
    entry = CalendarService(temp_db, tzinfo=UTC).events_for_day(date(2026, 3, 1))
    assert entry.is_empty
