"""CLI commands for the local database."""

from __future__ import annotations

from pathlib import Path

import click

from marketplace.infrastructure.bootstrap import init_db, seed_from_file


@click.command("init")
def db_init() -> None:
    """Create all tables (existing tables are left alone)."""
    init_db()
    click.echo("Database initialized.")


@click.command("seed")
@click.argument("fixture", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def db_seed(fixture: Path) -> None:
    """Load users, shops, items, addresses and carts from a JSON FIXTURE."""
    init_db()
    counts = seed_from_file(fixture)
    for section, count in counts.items():
        click.echo(f"  {section:<12} {count:>5}")
