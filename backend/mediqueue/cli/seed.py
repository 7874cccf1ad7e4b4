"""``flask seed``: demo data and admin provisioning."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Callable

import click
from flask import current_app
from flask.cli import with_appcontext

from mediqueue.core.extensions import db
from mediqueue.seeds import seed_data
from mediqueue.services._shared.errors import ServiceError

LOGGER = logging.getLogger(__name__)

VERBOSE_KEY = "mediqueue.seed.verbose"


def _report(tally: Counter[str]) -> None:
    click.echo(f"identities: created={tally['created']} existing={tally['existing']}")


def _run(seeder: Callable[..., Counter[str]], verbose: bool, failure: str) -> None:
    try:
        tally = seeder(verbose=verbose)
    except ServiceError as exc:
        raise click.ClickException(f"{failure}: {exc}") from exc
    _report(tally)


@click.group("seed")
@click.option("--verbose", is_flag=True, help="Log every seeded record.")
@click.pass_context
def seed_cli(ctx: click.Context, verbose: bool) -> None:
    """Seed the database."""
    ctx.meta[VERBOSE_KEY] = verbose
    if verbose:
        logging.getLogger(seed_data.__name__).setLevel(logging.DEBUG)


@seed_cli.command("run")
@click.pass_context
@with_appcontext
def run_command(ctx: click.Context) -> None:
    """Create demo patients, doctors and the configured admin (idempotent)."""
    _run(seed_data.run_all, ctx.meta[VERBOSE_KEY], "Seeding failed")


@seed_cli.command("admin")
@click.pass_context
@with_appcontext
def admin_command(ctx: click.Context) -> None:
    """Provision only the admin from ADMIN_EMAIL / ADMIN_PASSWORD."""
    config = current_app.config
    if not config.get("ADMIN_EMAIL") or not config.get("ADMIN_PASSWORD"):
        raise click.UsageError("ADMIN_EMAIL and ADMIN_PASSWORD must be set.")
    _run(seed_data.seed_admin, ctx.meta[VERBOSE_KEY], "Admin provisioning failed")


@seed_cli.command("fresh")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation.")
@click.pass_context
@with_appcontext
def fresh_command(ctx: click.Context, yes: bool) -> None:
    """Drop and recreate every table, then seed. Refused in production."""
    config = current_app.config
    if not (config.get("TESTING") or config.get("DEBUG")):
        raise click.UsageError("'flask seed fresh' only runs with TESTING or DEBUG enabled.")
    if not yes:
        click.confirm("Drop ALL tables and recreate them?", abort=True)
    LOGGER.warning("seed.fresh.dropping_schema")
    db.session.remove()
    db.drop_all()
    db.create_all()
    _run(seed_data.run_all, ctx.meta[VERBOSE_KEY], "Fresh seed failed")
