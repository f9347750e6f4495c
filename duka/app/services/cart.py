"""Sales cart and checkout.

The cart lives with the operator's screen; only checkout touches the
store, and only after the cart has been checked.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from uuid import UUID

from duka.app.core.errors import ValidationError
from duka.app.models.customer import Customer
from duka.app.models.product import Product
from duka.app.models.transaction import WALK_IN_CUSTOMER, PaymentMethod, Transaction
from duka.app.schemas.transaction import TransactionCreate, TransactionItemIn
from duka.app.services.customers import loyalty_discount_percent
from duka.app.services.transactions import TransactionRepository
from duka.app.services.validation import HUNDRED, check_discount_percent

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


@dataclass
class CartLine:
    product_id: UUID
    name: str
    unit_price: Decimal
    quantity: int = 1

    @property
    def total(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass
class Cart:
    lines: list[CartLine] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def _line(self, product_id: UUID) -> CartLine | None:
        return next((line for line in self.lines if line.product_id == product_id), None)

    def add(self, product: Product, quantity: int = 1) -> CartLine:
        """Add *product*; a product already in the cart gets its quantity bumped."""
        if quantity < 1:
            raise ValidationError("Quantity must be at least one", key="validation.invalid_quantity", field="quantity")
        line = self._line(product.id)
        if line is None:
            line = CartLine(
                product_id=product.id,
                name=product.name,
                unit_price=Decimal(str(product.price)),
                quantity=quantity,
            )
            self.lines.append(line)
        else:
            line.quantity += quantity
        return line

    def update_quantity(self, product_id: UUID, change: int) -> None:
        """Shift a line's quantity by *change*, never below one."""
        line = self._line(product_id)
        if line is not None:
            line.quantity = max(1, line.quantity + change)

    def remove(self, product_id: UUID) -> None:
        self.lines = [line for line in self.lines if line.product_id != product_id]

    def clear(self) -> None:
        self.lines = []

    @property
    def total(self) -> Decimal:
        return sum((line.total for line in self.lines), ZERO)

    def discount_amount(self, percent: Decimal = ZERO) -> Decimal:
        check_discount_percent(percent)
        return percent / HUNDRED * self.total

    def final_amount(self, percent: Decimal = ZERO) -> Decimal:
        return self.total - self.discount_amount(percent)

    def change(self, amount_received: Decimal, percent: Decimal = ZERO) -> Decimal:
        return amount_received - self.final_amount(percent)


@dataclass
class CheckoutResult:
    transaction: Transaction
    subtotal: Decimal
    discount_percent: Decimal
    discount_amount: Decimal
    final_amount: Decimal
    change: Decimal | None


def resolve_discount(customer: Customer | None, requested: Decimal | None) -> Decimal:
    """An explicit percentage wins; otherwise the customer's loyalty discount applies."""
    if requested is not None:
        return check_discount_percent(requested)
    if customer is None:
        return ZERO
    return Decimal(loyalty_discount_percent(customer.loyalty_points))


def checkout(
    cart: Cart,
    transactions: TransactionRepository,
    *,
    customer: Customer | None = None,
    discount_percent: Decimal | None = None,
    payment_method: PaymentMethod = PaymentMethod.CASH,
    amount_received: Decimal | None = None,
) -> CheckoutResult:
    """Turn the cart into a stored transaction.

    An empty cart is rejected here, before the repository is called.
    """
    if cart.is_empty:
        raise ValidationError("Cart is empty", key="sales.cart_empty")

    percent = resolve_discount(customer, discount_percent)
    subtotal = cart.total
    discount = cart.discount_amount(percent)
    final = subtotal - discount

    header = TransactionCreate(
        customer_id=customer.id if customer else None,
        customer_name=customer.name if customer else WALK_IN_CUSTOMER,
        total_amount=final,
        discount_amount=discount,
        tax_amount=ZERO,
        payment_method=payment_method,
        status="completed",
        items=[
            TransactionItemIn(product_id=line.product_id, quantity=line.quantity, price=line.unit_price)
            for line in cart.lines
        ],
    )
    transaction = transactions.create(header)
    logger.info("Checkout %s: %s items, final %s", transaction.id, len(cart), final)
    return CheckoutResult(
        transaction=transaction,
        subtotal=subtotal,
        discount_percent=percent,
        discount_amount=discount,
        final_amount=final,
        change=amount_received - final if amount_received is not None else None,
    )
