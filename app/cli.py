import os
import click
from flask import current_app
from flask.cli import with_appcontext
from flask_migrate import upgrade as alembic_upgrade, stamp as alembic_stamp, migrate as alembic_migrate
from app.services.catalog import ProductValidationError, create_product
from app.utils import transactional

SAMPLE_CATALOG = [
    {
        "title": "Programming Ruby 1.9",
        "description": "Ruby is the fastest growing and most exciting dynamic language out there.",
        "image_url": "ruby.png",
        "price": "49.50",
    },
    {
        "title": "Agile Web Development with Rails",
        "description": "Rails just keeps on changing. This edition covers Rails 3 and Ruby 1.9.",
        "image_url": "rails.png",
        "price": "43.75",
    },
    {
        "title": "Debug It!",
        "description": "Professional programmers develop a knack of unerringly zeroing in on the root cause of a bug.",
        "image_url": "debug.jpg",
        "price": "34.95",
    },
]


def _assert_safe_for_upgrade():
    # Prevent accidental prod upgrades unless explicitly allowed
    env = (current_app.config.get("ENV") or "").lower()
    app_env = (os.getenv("APP_ENV") or "").lower()
    if app_env == "production" or env == "production":
        if (os.getenv("ALLOW_DB_MIGRATIONS") or "").lower() not in ("1", "true", "yes"):
            raise click.ClickException("Refusing to run DB migration in production without ALLOW_DB_MIGRATIONS=true")


@click.command("db-migrate-safe")
@click.option("-m", "--message", default="auto migration", help="Migration message")
@with_appcontext
def db_migrate_safe(message):
    """Generate a new migration script from current models."""
    alembic_migrate(message=message)
    click.echo("Migration script generated.")


@click.command("db-upgrade-safe")
@with_appcontext
def db_upgrade_safe():
    """Apply migrations to the configured database."""
    _assert_safe_for_upgrade()
    alembic_upgrade()
    click.echo("Database upgraded.")


@click.command("db-stamp-safe")
@click.option("--revision", default="head", help="Revision to stamp, default 'head'")
@with_appcontext
def db_stamp_safe(revision):
    """Mark the database at a given revision without running migrations."""
    _assert_safe_for_upgrade()
    alembic_stamp(revision)
    click.echo(f"Database stamped at {revision}.")


@click.command("seed-catalog")
@with_appcontext
def seed_catalog():
    """Load a few sample products into the catalog."""
    try:
        with transactional("Failed to seed catalog", expected=(ProductValidationError,)):
            for attrs in SAMPLE_CATALOG:
                create_product(attrs)
    except ProductValidationError as e:
        raise click.ClickException(f"Invalid sample product: {e.errors}")
    click.echo(f"Seeded {len(SAMPLE_CATALOG)} products.")


def register_cli(app):
    app.cli.add_command(db_migrate_safe)
    app.cli.add_command(db_upgrade_safe)
    app.cli.add_command(db_stamp_safe)
    app.cli.add_command(seed_catalog)
