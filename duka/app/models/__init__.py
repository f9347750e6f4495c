"""Import every model so ``Base.metadata`` knows all tables."""

from duka.app.models.audit import AuditLog
from duka.app.models.customer import Customer
from duka.app.models.product import Product
from duka.app.models.supplier import POStatus, PurchaseOrder, PurchaseOrderItem, Supplier
from duka.app.models.transaction import (
    WALK_IN_CUSTOMER,
    PaymentMethod,
    Transaction,
    TransactionItem,
)
from duka.app.models.user import User

__all__ = [
    "AuditLog",
    "Customer",
    "POStatus",
    "PaymentMethod",
    "Product",
    "PurchaseOrder",
    "PurchaseOrderItem",
    "Supplier",
    "Transaction",
    "TransactionItem",
    "User",
    "WALK_IN_CUSTOMER",
]
