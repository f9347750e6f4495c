from __future__ import annotations

from sqlalchemy import or_

from duka.app.models.customer import Customer
from duka.app.services.repository import Repository, store_call

POINTS_PER_PERCENT = 100
MAX_LOYALTY_DISCOUNT_PERCENT = 10


def loyalty_discount_percent(points: int | None) -> int:
    """Whole-percent checkout discount earned by *points*, capped at 10."""
    if not points or points <= 0:
        return 0
    return min(points // POINTS_PER_PERCENT, MAX_LOYALTY_DISCOUNT_PERCENT)


class CustomerRepository(Repository[Customer]):
    model = Customer
    entity = "customer"

    def search(self, term: str) -> list[Customer]:
        like = f"%{term}%"
        with store_call(self.db, "search customer"):
            return (
                self.db.query(Customer)
                .filter(
                    or_(
                        Customer.name.ilike(like),
                        Customer.phone.ilike(like),
                        Customer.email.ilike(like),
                    )
                )
                .order_by(Customer.name)
                .all()
            )
