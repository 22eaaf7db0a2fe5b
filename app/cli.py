import os
import click
from flask import current_app
from flask.cli import with_appcontext
from flask_migrate import upgrade as alembic_upgrade, stamp as alembic_stamp, migrate as alembic_migrate
from models import db
from models.user import Admin
from app.services.identity import ensure_identity_for_role
from app.utils.db import transactional
from app.utils.phone import clean_phone, is_ten_digit_phone


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


@click.command("create-admin")
@click.option("--phone", required=True, help="10-digit phone the admin signs in with")
@click.option("--name", default="", help="Display name")
@click.option("--email", default=None, help="Optional contact email")
@with_appcontext
def create_admin(phone, name, email):
    """Seed an admin identity (idempotent per phone)."""
    phone = clean_phone(phone)
    if not is_ten_digit_phone(phone):
        raise click.BadParameter("phone must be 10 digits", param_hint="--phone")
    with transactional("Failed to create admin"):
        admin = Admin.query.filter_by(phone=phone).first()
        if admin is None:
            admin = Admin(phone=phone)
            db.session.add(admin)
        admin.name = name or admin.name
        admin.email = email or admin.email
        user_id = ensure_identity_for_role(phone, "admin", email=email, names=(name,))
    click.echo(f"Admin identity {user_id} ready for {phone}.")


def register_cli(app):
    app.cli.add_command(db_migrate_safe)
    app.cli.add_command(db_upgrade_safe)
    app.cli.add_command(db_stamp_safe)
    app.cli.add_command(create_admin)

