from __future__ import annotations

from sqlalchemy import or_

from duka.app.models.product import Product
from duka.app.services.repository import Repository, store_call


class ProductRepository(Repository[Product]):
    model = Product
    entity = "product"

    def search(self, term: str) -> list[Product]:
        """Case-insensitive match on name, or exact barcode."""
        like = f"%{term}%"
        with store_call(self.db, "search product"):
            return (
                self.db.query(Product)
                .filter(or_(Product.name.ilike(like), Product.barcode == term))
                .order_by(Product.name)
                .all()
            )

    def find_by_barcode(self, barcode: str) -> Product | None:
        with store_call(self.db, "scan product"):
            return self.db.query(Product).filter(Product.barcode == barcode).first()
