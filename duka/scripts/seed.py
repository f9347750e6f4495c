"""Seed the database with a demo operator, products, customers and suppliers.

Usage:
    python -m duka.scripts.seed
"""

from __future__ import annotations

from duka.app.core.database import SessionLocal
from duka.app.core.security import get_password_hash
from duka.app.models.customer import Customer
from duka.app.models.product import Product
from duka.app.models.supplier import Supplier
from duka.app.models.user import User
from duka.app.services.validation import parse_optional_cost, parse_price, parse_quantity, require_text

DEMO_EMAIL = "demo@duka.local"
DEMO_PASSWORD = "Duka2026demo"

# name, price, cost, quantity, barcode
PRODUCTS: list[tuple[str, str, str, int, str]] = [
    ("Soap", "2500", "1800", 50, "6201000000011"),
    ("Sugar 1kg", "3200", "2700", 40, "6201000000028"),
    ("Rice 5kg", "14500", "12000", 20, "6201000000035"),
    ("Cooking Oil 1L", "6000", "5000", 30, "6201000000042"),
    ("Maize Flour 2kg", "4200", "3500", 35, "6201000000059"),
    ("Tea Leaves 250g", "2800", "2100", 25, "6201000000066"),
    ("Matches (10 pack)", "1000", "700", 60, "6201000000073"),
]

# name, phone, email, loyalty points
CUSTOMERS: list[tuple[str, str, str | None, int]] = [
    ("Amina Juma", "+255712000001", "amina@example.com", 1250),
    ("Baraka Mushi", "+255713000002", None, 340),
    ("Fatuma Said", "+255714000003", "fatuma@example.com", 0),
]

# name, contact person, phone
SUPPLIERS: list[tuple[str, str, str]] = [
    ("Kariakoo Wholesale", "Hassan Ali", "+255222000100"),
    ("Mwanza Distributors", "Grace Mollel", "+255282000200"),
]


def seed() -> None:
    db = SessionLocal()
    try:
        # ── Demo operator ──────────────────────────────────────────────
        user = db.query(User).filter_by(email=DEMO_EMAIL).first()
        if user:
            user.hashed_password = get_password_hash(DEMO_PASSWORD)
            print("Updated demo user password.")
        else:
            db.add(User(email=DEMO_EMAIL, hashed_password=get_password_hash(DEMO_PASSWORD)))
            print(f"Created demo user {DEMO_EMAIL}.")

        # ── Catalog ────────────────────────────────────────────────────
        for name, price, cost, quantity, barcode in PRODUCTS:
            if db.query(Product).filter_by(barcode=barcode).first():
                continue
            db.add(
                Product(
                    name=require_text(name, "name"),
                    price=parse_price(price),
                    cost=parse_optional_cost(cost),
                    quantity=parse_quantity(quantity),
                    barcode=barcode,
                )
            )
            print(f"Created product {name}")

        for name, phone, email, points in CUSTOMERS:
            if db.query(Customer).filter_by(name=name).first():
                continue
            db.add(Customer(name=name, phone=phone, email=email, loyalty_points=points))
            print(f"Created customer {name}")

        for name, contact, phone in SUPPLIERS:
            if db.query(Supplier).filter_by(name=name).first():
                continue
            db.add(Supplier(name=name, contact_person=contact, phone=phone))
            print(f"Created supplier {name}")

        db.commit()
        print("Seed complete.")
    finally:
        db.close()


if __name__ == "__main__":
    seed()
