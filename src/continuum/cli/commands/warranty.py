"""Warranty management commands."""

import click
from continuum.cli.display import date_option, day
from continuum.cli.error_handling import handle_domain_error
from continuum.domain.calculations import days_until_expiry, is_expired
from continuum.domain.entities import Warranty
from continuum.domain.errors import DomainError, PersistenceError
from continuum.domain.filters import (
    WarrantyStatus,
    filter_warranties_by_status,
    search_warranties,
)
from continuum.domain.warranty import WarrantyService

STATUS_CHOICE = click.Choice([s.value for s in WarrantyStatus], case_sensitive=False)


def expiry_label(warranty: Warranty) -> str:
    """Describe how far away expiry is."""
    if is_expired(warranty):
        return "Expired"
    days = days_until_expiry(warranty)
    if days <= 30:
        return f"{days}d left"
    return ""


@click.group()
def warranty_group():
    """Manage product warranties."""
    pass


@warranty_group.command("add")
@click.argument("product_name")
@click.option("--vendor", help="Seller or manufacturer")
@click.option("--purchased", help="Purchase date (defaults to today)")
@click.option("--expires", help="Expiry date (defaults to one year from now)")
@click.option("--notes", default="", help="Notes")
@click.pass_context
def add_warranty(
    ctx, product_name: str, vendor: str | None, purchased: str | None, expires: str | None, notes: str
):
    """Add a warranty.

    Examples:
        continuum warranty add "Dishwasher" --vendor "Bosch" --expires 2028-05-01
        continuum warranty add "Headphones" --purchased today --expires "in 2 years"
    """
    service = WarrantyService(ctx.obj["db"])
    product_name = product_name.strip()

    try:
        service.validate(product_name)
        warranty_id = service.create_warranty(
            product_name=product_name,
            purchase_date=date_option(ctx, purchased, "purchase date"),
            expiry_date=date_option(ctx, expires, "expiry date"),
            vendor=vendor,
            notes=notes,
        )
    except (DomainError, PersistenceError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created warranty '{product_name}' (ID: {warranty_id})")


@warranty_group.command("list")
@click.option("--search", help="Search product name and vendor")
@click.option("--status", type=STATUS_CHOICE, default=WarrantyStatus.ALL.value, show_default=True, help="Status bucket")
@click.pass_context
def list_warranties(ctx, search: str | None, status: str):
    """List warranties, soonest expiry first."""
    service = WarrantyService(ctx.obj["db"])

    try:
        warranties = service.list_warranties()
    except PersistenceError as e:
        handle_domain_error(ctx, e)

    if search:
        warranties = search_warranties(warranties, search)
    warranties = filter_warranties_by_status(warranties, WarrantyStatus(status.lower()))

    if not warranties:
        click.echo("No warranties found.")
        return

    click.echo(f"\nFound {len(warranties)} warranty(ies):")
    click.echo("-" * 80)
    click.echo(f"{'ID':<6} {'Product':<28} {'Vendor':<18} {'Expires':<12} {'Status':<10}")
    click.echo("-" * 80)
    for warranty in warranties:
        click.echo(
            f"{warranty.id:<6} {warranty.product_name[:28]:<28} {(warranty.vendor or '')[:18]:<18} "
            f"{day(warranty.expiry_date):<12} {expiry_label(warranty):<10}"
        )


@warranty_group.command("show")
@click.argument("warranty_id", type=int)
@click.pass_context
def show_warranty(ctx, warranty_id: int):
    """Show warranty details."""
    service = WarrantyService(ctx.obj["db"])

    try:
        warranty = service.require_warranty(warranty_id)
    except (DomainError, PersistenceError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"\n{warranty.product_name} (ID: {warranty.id})")
    if warranty.vendor:
        click.echo(f"  Vendor: {warranty.vendor}")
    click.echo(f"  Purchased: {day(warranty.purchase_date)}")
    click.echo(f"  Expires: {day(warranty.expiry_date)}")
    if is_expired(warranty):
        click.echo("  Status: Expired")
    else:
        click.echo(f"  Status: Expires in {days_until_expiry(warranty)} days")
    if warranty.notes:
        click.echo(f"  Notes: {warranty.notes}")


@warranty_group.command("edit")
@click.argument("warranty_id", type=int)
@click.option("--product-name", help="New product name")
@click.option("--vendor", help="New vendor")
@click.option("--clear-vendor", is_flag=True, help="Remove the vendor")
@click.option("--purchased", help="New purchase date")
@click.option("--expires", help="New expiry date")
@click.option("--notes", help="New notes")
@click.pass_context
def edit_warranty(
    ctx,
    warranty_id: int,
    product_name: str | None,
    vendor: str | None,
    purchased: str | None,
    expires: str | None,
    notes: str | None,
    clear_vendor: bool,
):
    """Edit a warranty. Updates only the fields that are provided."""
    service = WarrantyService(ctx.obj["db"])

    if vendor is not None and clear_vendor:
        click.echo("Error: --vendor cannot be combined with --clear-vendor.", err=True)
        ctx.exit(1)

    try:
        if product_name is not None:
            product_name = product_name.strip()
            service.validate(product_name)
        warranty = service.update_warranty(
            warranty_id,
            product_name=product_name,
            purchase_date=date_option(ctx, purchased, "purchase date"),
            expiry_date=date_option(ctx, expires, "expiry date"),
            vendor=vendor,
            notes=notes,
            clear_vendor=clear_vendor,
        )
    except (DomainError, PersistenceError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated warranty '{warranty.product_name}' (ID: {warranty.id})")


@warranty_group.command("delete")
@click.argument("warranty_id", type=int)
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_warranty(ctx, warranty_id: int, yes: bool):
    """Delete a warranty."""
    service = WarrantyService(ctx.obj["db"])

    try:
        warranty = service.require_warranty(warranty_id)
    except (DomainError, PersistenceError) as e:
        handle_domain_error(ctx, e)

    if not yes and not click.confirm(
        f"Are you sure you want to delete '{warranty.product_name}' (ID: {warranty.id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_warranty(warranty_id)
    except (DomainError, PersistenceError) as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted warranty '{warranty.product_name}'")


def register_commands(cli):
    """Register warranty commands with main CLI."""
    cli.add_command(warranty_group, name="warranty")
