"""Purchase orders raised against suppliers."""
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any
from uuid import UUID

from sqlalchemy.orm import selectinload

from duka.app.core.database import utcnow
from duka.app.core.errors import NotFoundError, ValidationError
from duka.app.models.product import Product
from duka.app.models.supplier import POStatus, PurchaseOrder, PurchaseOrderItem, Supplier
from duka.app.schemas.supplier import PurchaseOrderCreate
from duka.app.services.repository import Repository, store_call

logger = logging.getLogger(__name__)

DEFAULT_DELIVERY_DAYS = 7


class PurchaseOrderRepository(Repository[PurchaseOrder]):
    model = PurchaseOrder
    entity = "purchase order"

    def _order_by(self) -> list[Any]:
        return [PurchaseOrder.created_at.desc()]

    def list(self) -> list[PurchaseOrder]:
        with store_call(self.db, "list purchase order"):
            return (
                self.db.query(PurchaseOrder)
                .options(selectinload(PurchaseOrder.items))
                .order_by(*self._order_by())
                .all()
            )

    def create(self, data: PurchaseOrderCreate) -> PurchaseOrder:  # type: ignore[override]
        with store_call(self.db, "load purchase order references"):
            supplier = self.db.get(Supplier, data.supplier_id)
            products = {
                item.product_id: self.db.get(Product, item.product_id) for item in data.items
            }
        if supplier is None:
            raise NotFoundError("Supplier not found", key="errors.not_found", entity="supplier")

        order_date = utcnow()
        po = PurchaseOrder(
            supplier_id=supplier.id,
            supplier_name=supplier.name,
            order_date=order_date,
            expected_delivery_date=_expected_delivery(order_date, data.expected_delivery_date),
            status=POStatus.PENDING,
        )
        total = Decimal("0")
        for position, item in enumerate(data.items):
            product = products[item.product_id]
            if product is None:
                raise NotFoundError(
                    f"Product {item.product_id} not found",
                    key="errors.not_found",
                    entity="product",
                )
            unit_price = item.unit_price
            if unit_price is None:
                unit_price = Decimal(str(product.cost or product.price))
            po.items.append(
                PurchaseOrderItem(
                    product_id=product.id,
                    product_name=product.name,
                    position=position,
                    quantity=item.quantity,
                    unit_price=unit_price,
                )
            )
            total += unit_price * item.quantity
        po.total_amount = total

        with store_call(self.db, "create purchase order"):
            self.db.add(po)
            self.db.commit()
            self.db.refresh(po)
        logger.info("Created purchase order %s for %s", po.id, supplier.name)
        return po

    def update_item_quantity(self, po_id: UUID, item_id: UUID, quantity: int) -> PurchaseOrder:
        if quantity < 1:
            raise ValidationError("Quantity must be at least one", key="validation.invalid_quantity", field="quantity")
        po = self._pending(po_id)
        item = next((i for i in po.items if i.id == item_id), None)
        if item is None:
            raise NotFoundError("Order item not found", key="errors.not_found", entity="order item")
        with store_call(self.db, "update purchase order item"):
            item.quantity = quantity
            po.total_amount = sum(
                (Decimal(str(i.unit_price)) * i.quantity for i in po.items), Decimal("0")
            )
            self.db.commit()
            self.db.refresh(po)
        return po

    def receive(self, po_id: UUID) -> PurchaseOrder:
        """Mark a pending order received and add its quantities to stock."""
        po = self._pending(po_id)
        with store_call(self.db, "receive purchase order"):
            for item in po.items:
                if item.product_id is None:
                    continue
                product = self.db.get(Product, item.product_id)
                if product is not None:
                    product.quantity += item.quantity
            po.status = POStatus.RECEIVED
            self.db.commit()
            self.db.refresh(po)
        logger.info("Received purchase order %s", po.id)
        return po

    def cancel(self, po_id: UUID) -> PurchaseOrder:
        po = self._pending(po_id)
        with store_call(self.db, "cancel purchase order"):
            po.status = POStatus.CANCELLED
            self.db.commit()
            self.db.refresh(po)
        return po

    def _pending(self, po_id: UUID) -> PurchaseOrder:
        po = self.get(po_id)
        if po.status != POStatus.PENDING:
            raise ValidationError(
                f"Cannot change a purchase order with status {po.status.value}",
                key="purchase.not_pending",
                status=po.status.value,
            )
        return po


def _expected_delivery(order_date: datetime, requested: datetime | None) -> datetime:
    if requested is not None:
        return requested
    return order_date + timedelta(days=DEFAULT_DELIVERY_DAYS)
