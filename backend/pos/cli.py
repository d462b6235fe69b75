# Overview: Flask CLI command groups for bootstrap, seeding, and inspection.

# backend/pos/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to wsgi.py (PowerShell: $env:FLASK_APP="wsgi.py").
# - Use: python -m flask <group> <command> [options]
#
# Database bootstrap:
# - python -m flask catalog init-db
#   Create all tables that do not exist yet.
# - python -m flask catalog seed
#   Load sample categories, products and coupons (skipped if categories exist).
# - python -m flask catalog reset-db --yes
#   DEV/TEST only: drop and recreate all tables (deletes all data).
# - python -m flask catalog wipe --yes
#   Delete all rows but keep the schema.
#
# Sales inspection:
# - python -m flask sales list [--date 2025-01-31]
#   List stored transactions, optionally for one day.
# - python -m flask sales remove 12 --yes
#   Reverse transaction 12 (restores inventory).
#
# Schema migrations are handled by Flask-Migrate: python -m flask db upgrade

from datetime import timedelta
from decimal import Decimal

import click
from flask.cli import with_appcontext

from .extensions import db
from .errors import ApiError
from .models import Category, Product, Coupon, Transaction, TransactionContents
from .services import transaction_service
from .time_utils import utcnow


SEED_CATEGORIES = ["Cafe", "Hamburguesas", "Pizzas", "Donas", "Galletas"]

# (name, price, inventory, category index, image)
SEED_PRODUCTS = [
    ("Cafe Caramel con Chocolate", Decimal("59.90"), 25, 0, "cafe_01.jpg"),
    ("Cafe Frio con Chocolate", Decimal("49.90"), 20, 0, "cafe_02.jpg"),
    ("Hamburguesa Sencilla", Decimal("79.90"), 15, 1, "hamburguesas_01.jpg"),
    ("Hamburguesa de Pollo", Decimal("89.90"), 10, 1, "hamburguesas_02.jpg"),
    ("Pizza Spicy con Doble Queso", Decimal("149.90"), 8, 2, "pizzas_01.jpg"),
    ("Pizza Jamon y Queso", Decimal("139.90"), 8, 2, "pizzas_02.jpg"),
    ("Dona de Fresa", Decimal("29.90"), 30, 3, "donas_01.jpg"),
    ("Galletas de Chocolate", Decimal("19.90"), 40, 4, "galletas_01.jpg"),
]

# (name, percentage, days until expiration)
SEED_COUPONS = [
    ("NAVIDAD", 20, 30),
    ("BIENVENIDA", 10, 365),
]


@click.group('catalog')
def catalog_group():
    """Database bootstrap and catalog seeding."""
    pass


@catalog_group.command('init-db')
@with_appcontext
def init_db():
    """Create all tables (existing tables are left untouched)."""
    db.create_all()
    click.echo("PASS Tables created.")


@catalog_group.command('seed')
@with_appcontext
def seed():
    """Load sample categories, products and coupons."""
    if db.session.query(Category).count() > 0:
        click.echo("WARN  Categories already exist, skipping seed.")
        return

    categories = [Category(name=name) for name in SEED_CATEGORIES]
    db.session.add_all(categories)
    db.session.flush()

    for name, price, inventory, category_index, image in SEED_PRODUCTS:
        db.session.add(Product(
            name=name,
            price=price,
            inventory=inventory,
            image=image,
            category_id=categories[category_index].id,
        ))

    today = utcnow().date()
    for name, percentage, days in SEED_COUPONS:
        if db.session.query(Coupon).filter_by(name=name).first():
            click.echo(f"WARN  Coupon '{name}' already exists, skipping...")
            continue
        db.session.add(Coupon(
            name=name,
            percentage=percentage,
            expiration_date=today + timedelta(days=days),
        ))

    db.session.commit()
    click.echo(
        f"PASS Seeded {len(SEED_CATEGORIES)} categories, "
        f"{len(SEED_PRODUCTS)} products, {len(SEED_COUPONS)} coupons"
    )


@catalog_group.command('reset-db')
@click.option('--yes', is_flag=True, help='Skip confirmation')
@with_appcontext
def reset_db(yes):
    """
    DANGER: Drop all tables and recreate schema.

    This will DELETE ALL DATA!
    """
    if not yes:
        click.confirm("WARN This will DELETE ALL DATA. Are you sure?", abort=True)

    click.echo("DELETE  Dropping all tables...")
    db.drop_all()

    click.echo("BUILD  Creating all tables...")
    db.create_all()

    click.echo("PASS Database reset complete. Run 'python -m flask catalog seed' to load sample data.")


@catalog_group.command('wipe')
@click.option('--yes', is_flag=True, help='Skip confirmation')
@with_appcontext
def wipe_data(yes):
    """Delete every row (children first) while keeping the schema."""
    if not yes:
        click.confirm("WARN This will DELETE all data. Are you sure?", abort=True)

    for model in (TransactionContents, Transaction, Product, Category, Coupon):
        deleted = db.session.query(model).delete()
        click.echo(f"DELETE  {model.__tablename__}: {deleted} rows")
    db.session.commit()
    click.echo("PASS Wipe complete.")


@click.group('sales')
def sales_group():
    """Inspect and reverse stored transactions."""
    pass


@sales_group.command('list')
@click.option('--date', 'transaction_date', default=None, help='Only sales made that day (YYYY-MM-DD)')
@with_appcontext
def list_sales(transaction_date):
    """List transactions."""
    try:
        transactions = transaction_service.find_all(transaction_date)
    except ApiError as e:
        raise click.ClickException(str(e))

    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo("\n" + "="*80)
    click.echo(f"{'ID':<6} {'Date':<22} {'Lines':<6} {'Coupon':<12} {'Discount':>10} {'Total':>12}")
    click.echo("="*80)
    for t in transactions:
        click.echo(
            f"{t.id:<6} {t.transaction_date:%Y-%m-%d %H:%M:%S}   {len(t.contents):<6} "
            f"{t.coupon or '-':<12} {t.discount:>10} {t.total:>12}"
        )
    click.echo("="*80 + "\n")


@sales_group.command('remove')
@click.argument('transaction_id', type=int)
@click.option('--yes', is_flag=True, help='Skip confirmation')
@with_appcontext
def remove_sale(transaction_id, yes):
    """Reverse a transaction and restore its inventory."""
    if not yes:
        click.confirm(f"WARN Reverse transaction {transaction_id}?", abort=True)
    try:
        result = transaction_service.remove_transaction(transaction_id)
    except ApiError as e:
        raise click.ClickException(str(e))
    click.echo(f"PASS {result['message']} ({utcnow():%Y-%m-%d %H:%M:%S} UTC)")


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(catalog_group)
    app.cli.add_command(sales_group)
