"""Backup export and import commands."""

from pathlib import Path

import click
from continuum.cli.error_handling import handle_domain_error
from continuum.domain.backup import BackupService, export_filename
from continuum.domain.errors import DomainError, PersistenceError


@click.group()
def backup_group():
    """Export and import JSON backups."""
    pass


@backup_group.command("export")
@click.argument("path", required=False, type=click.Path(dir_okay=False))
@click.pass_context
def export_backup(ctx, path: str | None):
    """Write every subscription, asset and warranty to a JSON file.

    PATH defaults to continuum-backup-YYYY-MM-DD.json in the current directory.
    """
    service = BackupService(ctx.obj["db"])
    if path is None:
        path = export_filename()

    try:
        written = service.export_to_file(path)
    except (PersistenceError, OSError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"Exported backup to {written}")


@backup_group.command("import")
@click.argument("path", type=click.Path(dir_okay=False))
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.option("--verbose", "-v", is_flag=True, help="List fields that were replaced by defaults")
@click.pass_context
def import_backup(ctx, path: str, yes: bool, verbose: bool):
    """Add the items of a JSON backup to the database.

    Items are added next to the existing ones; importing the same file twice
    stores everything twice.
    """
    service = BackupService(ctx.obj["db"])

    try:
        data = Path(path).read_bytes()
    except FileNotFoundError:
        click.echo(f"Error: Backup file not found: {path}", err=True)
        ctx.exit(1)
    except OSError as e:
        handle_domain_error(ctx, e)

    try:
        snapshot, _ = service.decode_snapshot(data)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not yes and not click.confirm(
        f"Import {len(snapshot.subscriptions)} subscription(s), {len(snapshot.assets)} asset(s) "
        f"with {snapshot.value_change_count} value change(s) and "
        f"{len(snapshot.warranties)} warranty(ies)?"
    ):
        click.echo("Import cancelled.")
        return

    try:
        result = service.import_snapshot(data)
    except (DomainError, PersistenceError) as e:
        handle_domain_error(ctx, e)

    click.echo("\nImport complete:")
    click.echo(f"  Subscriptions: {result.subscriptions}")
    click.echo(f"  Assets: {result.assets} ({result.value_changes} value changes)")
    click.echo(f"  Warranties: {result.warranties}")
    if result.coerced:
        click.echo(f"  Defaulted fields: {len(result.coerced)}")
        if verbose:
            for item in result.coerced:
                click.echo(f"    {item.path}: {item.value!r} -> {item.replacement}")


def register_commands(cli):
    """Register backup commands with main CLI."""
    cli.add_command(backup_group, name="backup")
