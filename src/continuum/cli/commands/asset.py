"""Personal asset management commands."""

import click
from continuum.cli.display import amount_option, date_option, day, money
from continuum.cli.error_handling import handle_domain_error
from continuum.domain.asset import AssetService, total_value
from continuum.domain.calculations import change_amount, change_percent
from continuum.domain.entities import AssetCategory
from continuum.domain.errors import DomainError, PersistenceError
from continuum.domain.filters import filter_by_category, search_assets

CATEGORY_CHOICE = click.Choice([c.value for c in AssetCategory], case_sensitive=False)


@click.group()
def asset_group():
    """Manage personal assets and their value history."""
    pass


@asset_group.command("add")
@click.argument("name")
@click.option("--value", default="0", show_default=True, help="Current value (e.g., 1299.00)")
@click.option("--category", type=CATEGORY_CHOICE, default=AssetCategory.OTHER.value, show_default=True, help="Category")
@click.option("--purchase-date", help="Purchase date (YYYY-MM-DD or relative like 'yesterday')")
@click.option("--notes", default="", help="Notes")
@click.pass_context
def add_asset(ctx, name: str, value: str, category: str, purchase_date: str | None, notes: str):
    """Add a personal asset.

    Examples:
        continuum asset add "Laptop" --value 1299 --category Electronics
        continuum asset add "Car" --value 18500 --category Vehicle --purchase-date 2022-06-01
    """
    service = AssetService(ctx.obj["db"])
    name = name.strip()

    try:
        service.validate(name)
        asset_id = service.create_asset(
            name=name,
            current_value=amount_option(ctx, value, "value"),
            category=AssetCategory.from_value(category),
            purchase_date=date_option(ctx, purchase_date, "purchase date"),
            notes=notes,
        )
    except (DomainError, PersistenceError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created asset '{name}' (ID: {asset_id})")


@asset_group.command("list")
@click.option("--category", type=CATEGORY_CHOICE, help="Only show this category")
@click.option("--search", help="Search name and category")
@click.pass_context
def list_assets(ctx, category: str | None, search: str | None):
    """List assets by name."""
    service = AssetService(ctx.obj["db"])

    try:
        assets = service.list_assets()
    except PersistenceError as e:
        handle_domain_error(ctx, e)

    if category:
        assets = filter_by_category(assets, AssetCategory.from_value(category))
    if search:
        assets = search_assets(assets, search)

    if not assets:
        click.echo("No assets found.")
        return

    click.echo(f"\nFound {len(assets)} asset(s):")
    click.echo("-" * 80)
    click.echo(f"{'ID':<6} {'Name':<28} {'Value':>14} {'Category':<14} {'Changes':>8}")
    click.echo("-" * 80)
    for asset in assets:
        click.echo(
            f"{asset.id:<6} {asset.name[:28]:<28} {money(asset.current_value):>14} "
            f"{asset.category.value:<14} {len(asset.value_changes):>8}"
        )
    click.echo("-" * 80)
    click.echo(f"{'Total':<35} {money(total_value(assets)):>14}")


@asset_group.command("show")
@click.argument("asset_id", type=int)
@click.pass_context
def show_asset(ctx, asset_id: int):
    """Show asset details and value history."""
    service = AssetService(ctx.obj["db"])

    try:
        asset = service.require_asset(asset_id)
        history = service.value_history(asset_id)
    except (DomainError, PersistenceError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"\n{asset.name} (ID: {asset.id})")
    click.echo(f"  Value: {money(asset.current_value)}")
    click.echo(f"  Category: {asset.category.value}")
    click.echo(f"  Purchased: {day(asset.purchase_date)}")
    if asset.notes:
        click.echo(f"  Notes: {asset.notes}")
    click.echo(f"  Updated: {asset.updated_at.isoformat()}")

    if not history:
        click.echo("\nNo value changes recorded.")
        return

    click.echo("\nValue history:")
    for change in history:
        percent = change_percent(change)
        percent_str = f" ({percent * 100:+.1f}%)" if percent is not None else ""
        note = f"  {change.note}" if change.note else ""
        click.echo(
            f"  {day(change.date)}  {money(change.previous_value)} -> {money(change.new_value)}  "
            f"{money(change_amount(change))}{percent_str}{note}"
        )


@asset_group.command("edit")
@click.argument("asset_id", type=int)
@click.option("--name", help="New name")
@click.option("--value", help="New current value (records a value change when different)")
@click.option("--note", help="Note stored with the value change")
@click.option("--category", type=CATEGORY_CHOICE, help="New category")
@click.option("--purchase-date", help="New purchase date")
@click.option("--clear-purchase-date", is_flag=True, help="Remove the purchase date")
@click.option("--notes", help="New notes")
@click.pass_context
def edit_asset(
    ctx,
    asset_id: int,
    name: str | None,
    value: str | None,
    note: str | None,
    category: str | None,
    purchase_date: str | None,
    clear_purchase_date: bool,
    notes: str | None,
):
    """Edit an asset.

    Changing the value records the transition in the asset's history.

    Examples:
        continuum asset edit 1 --value 950 --note "Market estimate"
        continuum asset edit 2 --clear-purchase-date
    """
    service = AssetService(ctx.obj["db"])

    if purchase_date is not None and clear_purchase_date:
        click.echo("Error: --purchase-date cannot be combined with --clear-purchase-date.", err=True)
        ctx.exit(1)

    try:
        if name is not None:
            name = name.strip()
            service.validate(name)
        change = service.update_asset(
            asset_id,
            name=name,
            current_value=amount_option(ctx, value, "value"),
            category=AssetCategory.from_value(category) if category else None,
            purchase_date=date_option(ctx, purchase_date, "purchase date"),
            notes=notes,
            clear_purchase_date=clear_purchase_date,
            value_change_note=note,
        )
    except (DomainError, PersistenceError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated asset {asset_id}")
    if change is not None:
        click.echo(
            f"Recorded value change {money(change.previous_value)} -> {money(change.new_value)}"
        )


@asset_group.command("delete")
@click.argument("asset_id", type=int)
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_asset(ctx, asset_id: int, yes: bool):
    """Delete an asset and its value history."""
    service = AssetService(ctx.obj["db"])

    try:
        asset = service.require_asset(asset_id)
    except (DomainError, PersistenceError) as e:
        handle_domain_error(ctx, e)

    if not yes and not click.confirm(
        f"Are you sure you want to delete '{asset.name}' and its "
        f"{len(asset.value_changes)} value change(s)?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        removed = service.delete_asset(asset_id)
    except (DomainError, PersistenceError) as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted asset '{asset.name}' and {removed} value change(s)")


def register_commands(cli):
    """Register asset commands with main CLI."""
    cli.add_command(asset_group, name="asset")
