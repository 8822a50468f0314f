"""CLI helpers for parsing options and rendering values."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

import click

from continuum.domain.calculations import local_date, quantize_money
from continuum.utils.amount_parser import parse_amount
from continuum.utils.date_parser import parse_date, start_of_day


def money(value: Decimal) -> str:
    """Render a money value with thousands separators and cents."""
    return f"{quantize_money(value):,.2f}"


def day(value: Optional[datetime]) -> str:
    """Render a timestamp as its local calendar date."""
    if value is None:
        return "-"
    return local_date(value).isoformat()


def amount_option(ctx: click.Context, value: Optional[str], label: str = "amount") -> Optional[Decimal]:
    """Parse an amount option, exiting with an error when it is invalid."""
    if value is None:
        return None
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def date_option(ctx: click.Context, value: Optional[str], label: str = "date") -> Optional[datetime]:
    """Parse a date option into local midnight, exiting with an error when invalid."""
    if value is None:
        return None
    try:
        return start_of_day(parse_date(value))
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)
