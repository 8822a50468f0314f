"""Dashboard command."""

import click
from continuum.cli.display import day, money
from continuum.cli.error_handling import handle_domain_error
from continuum.domain.calculations import days_until_expiry
from continuum.domain.dashboard import DashboardService
from continuum.domain.errors import PersistenceError

TOP_ITEMS = 5


@click.command("dashboard")
@click.option("--breakdown", is_flag=True, help="Show each item's share of the monthly total")
@click.pass_context
def dashboard(ctx, breakdown: bool):
    """Show monthly costs, asset value and what is coming up.

    Examples:
        continuum dashboard
        continuum dashboard --breakdown
    """
    service = DashboardService(ctx.obj["db"])

    try:
        summary = service.build_summary()
        lines = service.monthly_breakdown() if breakdown else []
    except PersistenceError as e:
        handle_domain_error(ctx, e)

    click.echo("\nOverview")
    click.echo("=" * 60)
    click.echo(f"  Monthly recurring:   {money(summary.monthly_recurring_total):>14}")
    click.echo(f"  Total asset value:   {money(summary.total_assets_value):>14}")
    click.echo(f"  Subscriptions:       {summary.subscription_count:>14}")
    click.echo(f"  Recurring payments:  {summary.recurring_payment_count:>14}")
    click.echo(f"  Warranties:          {summary.warranty_count:>14}")

    click.echo("\nUpcoming renewals")
    click.echo("-" * 60)
    if summary.upcoming_renewals:
        for sub in summary.upcoming_renewals[:TOP_ITEMS]:
            click.echo(f"  {day(sub.next_due_date):<12} {sub.name[:30]:<30} {money(sub.amount):>12}")
        remaining = len(summary.upcoming_renewals) - TOP_ITEMS
        if remaining > 0:
            click.echo(f"  ... and {remaining} more")
    else:
        click.echo("  Nothing due in the next 30 days.")

    click.echo("\nExpiring warranties")
    click.echo("-" * 60)
    if summary.expiring_warranties:
        for warranty in summary.expiring_warranties[:TOP_ITEMS]:
            click.echo(
                f"  {day(warranty.expiry_date):<12} {warranty.product_name[:30]:<30} "
                f"{days_until_expiry(warranty):>5}d left"
            )
        remaining = len(summary.expiring_warranties) - TOP_ITEMS
        if remaining > 0:
            click.echo(f"  ... and {remaining} more")
    else:
        click.echo("  No warranties expiring in the next 30 days.")

    if breakdown:
        click.echo("\nMonthly breakdown")
        click.echo("-" * 60)
        for line in lines:
            click.echo(
                f"  {line.subscription.name[:30]:<30} {line.subscription.billing_cycle.value:<10} "
                f"{money(line.monthly_amount):>12}"
            )


def register_commands(cli):
    """Register dashboard command with main CLI."""
    cli.add_command(dashboard)
