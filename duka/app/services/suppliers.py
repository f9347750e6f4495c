from __future__ import annotations

from sqlalchemy import or_

from duka.app.models.supplier import Supplier
from duka.app.services.repository import Repository, store_call


class SupplierRepository(Repository[Supplier]):
    model = Supplier
    entity = "supplier"

    def search(self, term: str) -> list[Supplier]:
        like = f"%{term}%"
        with store_call(self.db, "search supplier"):
            return (
                self.db.query(Supplier)
                .filter(
                    or_(
                        Supplier.name.ilike(like),
                        Supplier.contact_person.ilike(like),
                        Supplier.phone.ilike(like),
                    )
                )
                .order_by(Supplier.name)
                .all()
            )
