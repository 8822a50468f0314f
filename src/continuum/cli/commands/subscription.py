"""Subscription management commands."""

import click
from continuum.cli.display import amount_option, date_option, day, money
from continuum.cli.error_handling import handle_domain_error
from continuum.domain.calculations import is_past_due, monthly_equivalent, next_renewal_date
from continuum.domain.entities import BillingCycle, SubscriptionCategory
from continuum.domain.errors import DomainError, PersistenceError
from continuum.domain.filters import (
    SubscriptionStatus,
    filter_by_category,
    filter_subscriptions_by_status,
    search_subscriptions,
)
from continuum.domain.subscription import SubscriptionService

CYCLE_CHOICE = click.Choice([c.value for c in BillingCycle], case_sensitive=False)
CATEGORY_CHOICE = click.Choice([c.value for c in SubscriptionCategory], case_sensitive=False)
STATUS_CHOICE = click.Choice([s.value for s in SubscriptionStatus], case_sensitive=False)


@click.group()
def subscription_group():
    """Manage subscriptions and recurring payments."""
    pass


@subscription_group.command("add")
@click.argument("name")
@click.option("--amount", default="0", show_default=True, help="Amount per billing cycle (e.g., 15.49)")
@click.option("--cycle", type=CYCLE_CHOICE, default=BillingCycle.MONTHLY.value, show_default=True, help="Billing cycle")
@click.option("--due", help="Next due date (YYYY-MM-DD or relative like 'tomorrow', 'in 2 weeks'); defaults to today")
@click.option("--category", type=CATEGORY_CHOICE, default=SubscriptionCategory.OTHER.value, show_default=True, help="Category")
@click.option("--notes", default="", help="Notes")
@click.option("--recurring-payment", is_flag=True, help="Track as a recurring payment (rent, loan) instead of a subscription")
@click.pass_context
def add_subscription(
    ctx,
    name: str,
    amount: str,
    cycle: str,
    due: str | None,
    category: str,
    notes: str,
    recurring_payment: bool,
):
    """Add a subscription or recurring payment.

    Examples:
        continuum subscription add "Netflix" --amount 15.49 --category Streaming
        continuum subscription add "Rent" --amount 1200 --category Rent --recurring-payment
    """
    service = SubscriptionService(ctx.obj["db"])
    name = name.strip()

    try:
        service.validate(name)
        subscription_id = service.create_subscription(
            name=name,
            amount=amount_option(ctx, amount),
            billing_cycle=BillingCycle.from_value(cycle),
            next_due_date=date_option(ctx, due, "due date"),
            category=SubscriptionCategory.from_value(category),
            notes=notes,
            is_subscription=not recurring_payment,
        )
    except (DomainError, PersistenceError) as e:
        handle_domain_error(ctx, e)

    kind = "recurring payment" if recurring_payment else "subscription"
    click.echo(f"Created {kind} '{name}' (ID: {subscription_id})")


@subscription_group.command("list")
@click.option("--category", type=CATEGORY_CHOICE, help="Only show this category")
@click.option("--search", help="Search name and category")
@click.option("--status", type=STATUS_CHOICE, default=SubscriptionStatus.ALL.value, show_default=True, help="Status bucket")
@click.pass_context
def list_subscriptions(ctx, category: str | None, search: str | None, status: str):
    """List subscriptions, soonest due first."""
    service = SubscriptionService(ctx.obj["db"])

    try:
        subscriptions = service.list_subscriptions()
    except PersistenceError as e:
        handle_domain_error(ctx, e)

    if category:
        subscriptions = filter_by_category(subscriptions, SubscriptionCategory.from_value(category))
    if search:
        subscriptions = search_subscriptions(subscriptions, search)
    subscriptions = filter_subscriptions_by_status(subscriptions, SubscriptionStatus(status.lower()))

    if not subscriptions:
        click.echo("No subscriptions found.")
        return

    click.echo(f"\nFound {len(subscriptions)} subscription(s):")
    click.echo("-" * 100)
    click.echo(
        f"{'ID':<6} {'Name':<24} {'Amount':>12} {'Cycle':<10} {'Due':<12} {'Monthly':>12} {'Category':<12}"
    )
    click.echo("-" * 100)
    for sub in subscriptions:
        flag = "  PAST DUE" if is_past_due(sub) else ""
        click.echo(
            f"{sub.id:<6} {sub.name[:24]:<24} {money(sub.amount):>12} {sub.billing_cycle.value:<10} "
            f"{day(sub.next_due_date):<12} {money(monthly_equivalent(sub)):>12} {sub.category.value:<12}{flag}"
        )


@subscription_group.command("show")
@click.argument("subscription_id", type=int)
@click.pass_context
def show_subscription(ctx, subscription_id: int):
    """Show subscription details."""
    service = SubscriptionService(ctx.obj["db"])

    try:
        sub = service.require_subscription(subscription_id)
    except (DomainError, PersistenceError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"\n{sub.name} (ID: {sub.id})")
    click.echo(f"  Type: {'Subscription' if sub.is_subscription else 'Recurring payment'}")
    click.echo(f"  Amount: {money(sub.amount)} ({sub.billing_cycle.value})")
    click.echo(f"  Monthly equivalent: {money(monthly_equivalent(sub))}")
    click.echo(f"  Category: {sub.category.value}")
    click.echo(f"  Next due: {day(sub.next_due_date)}{' (past due)' if is_past_due(sub) else ''}")
    click.echo(f"  Following renewal: {day(next_renewal_date(sub))}")
    if sub.notes:
        click.echo(f"  Notes: {sub.notes}")
    click.echo(f"  Created: {sub.created_at.isoformat()}")


@subscription_group.command("edit")
@click.argument("subscription_id", type=int)
@click.option("--name", help="New name")
@click.option("--amount", help="New amount per billing cycle")
@click.option("--cycle", type=CYCLE_CHOICE, help="New billing cycle")
@click.option("--due", help="New next due date")
@click.option("--category", type=CATEGORY_CHOICE, help="New category")
@click.option("--notes", help="New notes")
@click.option("--subscription/--recurring-payment", "is_subscription", default=None, help="Change the item type")
@click.pass_context
def edit_subscription(
    ctx,
    subscription_id: int,
    name: str | None,
    amount: str | None,
    cycle: str | None,
    due: str | None,
    category: str | None,
    notes: str | None,
    is_subscription: bool | None,
):
    """Edit a subscription.

    Updates only the fields that are provided.

    Examples:
        continuum subscription edit 1 --amount 17.99
        continuum subscription edit 2 --cycle Yearly --due 2027-01-01
    """
    service = SubscriptionService(ctx.obj["db"])

    try:
        if name is not None:
            name = name.strip()
            service.validate(name)
        sub = service.update_subscription(
            subscription_id,
            name=name,
            amount=amount_option(ctx, amount),
            billing_cycle=BillingCycle.from_value(cycle) if cycle else None,
            next_due_date=date_option(ctx, due, "due date"),
            category=SubscriptionCategory.from_value(category) if category else None,
            notes=notes,
            is_subscription=is_subscription,
        )
    except (DomainError, PersistenceError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated subscription '{sub.name}' (ID: {sub.id})")


@subscription_group.command("renew")
@click.argument("subscription_id", type=int)
@click.pass_context
def renew_subscription(ctx, subscription_id: int):
    """Advance the next due date by one billing cycle."""
    service = SubscriptionService(ctx.obj["db"])

    try:
        sub = service.renew_subscription(subscription_id)
    except (DomainError, PersistenceError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"Renewed '{sub.name}', next due {day(sub.next_due_date)}")


@subscription_group.command("delete")
@click.argument("subscription_id", type=int)
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_subscription(ctx, subscription_id: int, yes: bool):
    """Delete a subscription."""
    service = SubscriptionService(ctx.obj["db"])

    try:
        sub = service.require_subscription(subscription_id)
    except (DomainError, PersistenceError) as e:
        handle_domain_error(ctx, e)

    if not yes and not click.confirm(f"Are you sure you want to delete '{sub.name}' (ID: {sub.id})?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_subscription(subscription_id)
    except (DomainError, PersistenceError) as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted subscription '{sub.name}'")


def register_commands(cli):
    """Register subscription commands with main CLI."""
    cli.add_command(subscription_group, name="subscription")
