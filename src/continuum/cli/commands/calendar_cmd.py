"""Calendar command."""

from datetime import date, datetime

import click
from continuum.cli.display import money
from continuum.cli.error_handling import handle_domain_error
from continuum.domain.calendar import CalendarService
from continuum.domain.errors import PersistenceError
from continuum.utils.date_parser import parse_date


def _parse_month(ctx: click.Context, value: str) -> tuple[int, int]:
    """Parse YYYY-MM into (year, month)."""
    try:
        parsed = datetime.strptime(value.strip(), "%Y-%m")
    except ValueError:
        click.echo(f"Error: Invalid month '{value}'. Expected YYYY-MM.", err=True)
        ctx.exit(1)
    return parsed.year, parsed.month


@click.command("calendar")
@click.option("--month", help="Month to show (YYYY-MM); defaults to the current month")
@click.option("--week", help="Show the Monday to Sunday week containing this date")
@click.pass_context
def calendar(ctx, month: str | None, week: str | None):
    """Show renewals and warranty expirations by day.

    Examples:
        continuum calendar
        continuum calendar --month 2026-12
        continuum calendar --week today
    """
    if month and week:
        click.echo("Error: --month cannot be combined with --week.", err=True)
        ctx.exit(1)

    service = CalendarService(ctx.obj["db"])

    try:
        if week:
            try:
                anchor = parse_date(week)
            except ValueError as e:
                click.echo(f"Error: Invalid week: {e}", err=True)
                ctx.exit(1)
            days = service.events_for_week(anchor)
            title = f"Week of {anchor.isoformat()}"
        else:
            if month:
                year, month_number = _parse_month(ctx, month)
            else:
                today = date.today()
                year, month_number = today.year, today.month
            days = service.events_for_month(year, month_number)
            title = f"{year:04d}-{month_number:02d}"
    except PersistenceError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\n{title}")
    click.echo("=" * 60)
    if not days:
        click.echo("No renewals or expirations.")
        return

    for entry in days:
        click.echo(f"\n{entry.day.strftime('%a %Y-%m-%d')}")
        for sub in entry.renewals:
            click.echo(f"  Renewal  {sub.name[:36]:<36} {money(sub.amount):>12}")
        for warranty in entry.expirations:
            click.echo(f"  Expires  {warranty.product_name}")


def register_commands(cli):
    """Register calendar command with main CLI."""
    cli.add_command(calendar)
