from fastapi import APIRouter

from duka.app.api.v1.endpoints import (
    auth,
    customers,
    i18n,
    products,
    purchase_orders,
    reports,
    session,
    suppliers,
    transactions,
)

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(products.router, prefix="/products", tags=["products"])
api_router.include_router(customers.router, prefix="/customers", tags=["customers"])
api_router.include_router(suppliers.router, prefix="/suppliers", tags=["suppliers"])
api_router.include_router(purchase_orders.router, prefix="/purchase-orders", tags=["purchase-orders"])
api_router.include_router(transactions.router, prefix="/transactions", tags=["transactions"])
api_router.include_router(reports.router, prefix="/reports", tags=["reports"])
api_router.include_router(session.router, prefix="/session", tags=["session"])
api_router.include_router(i18n.router, prefix="/i18n", tags=["i18n"])
