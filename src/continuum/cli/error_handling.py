"""CLI error handling helpers."""

from typing import NoReturn

import click

from continuum.domain.errors import DomainError, PersistenceError


def handle_domain_error(
    ctx: click.Context, error: DomainError | PersistenceError | OSError
) -> NoReturn:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
