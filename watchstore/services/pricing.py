"""
Order pricing - subtotal, tax, shipping and grand total for a set of line items.

All amounts are Decimals in the store's single currency. Only the tax is
rounded (to cents, half-up); the total is the exact sum of its parts.
"""
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Protocol, Union

from watchstore.core.errors import InvalidItemError, ValidationError

TAX_RATE = Decimal("0.12")
FREE_SHIPPING_THRESHOLD = Decimal("500000")
FLAT_SHIPPING_COST = Decimal("5000")

# Largest amount a Numeric(12, 2) column holds
MAX_AMOUNT = Decimal("9999999999.99")

CENT = Decimal("0.01")

Number = Union[Decimal, int, float, str]


class PricedItem(Protocol):
    """Anything with a unit price and a quantity."""

    price: Decimal
    quantity: int


@dataclass(frozen=True)
class LineAmount:
    """A (unit price, quantity) pair fed to the calculator."""

    price: Decimal
    quantity: int


@dataclass(frozen=True)
class OrderTotals:
    """Derived monetary fields of an order, always produced together."""

    subtotal: Decimal
    tax: Decimal
    shipping_cost: Decimal
    total_price: Decimal


def to_money(value: Number) -> Decimal:
    """Convert a raw amount to a Decimal without going through binary floats."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def calculate_tax(subtotal: Decimal) -> Decimal:
    return (subtotal * TAX_RATE).quantize(CENT, rounding=ROUND_HALF_UP)


def calculate_shipping(subtotal: Decimal) -> Decimal:
    """Free shipping strictly above the threshold, flat rate otherwise."""
    if subtotal > FREE_SHIPPING_THRESHOLD:
        return Decimal("0")
    return FLAT_SHIPPING_COST


def calculate_totals(items: Iterable[PricedItem]) -> OrderTotals:
    """
    Price a list of line items.

    Args:
        items: Ordered line items, each exposing `price` and `quantity`.

    Returns:
        OrderTotals with subtotal, tax, shipping cost and total price.

    Raises:
        ValidationError: If there are no items, or the total is too large to store.
        InvalidItemError: If an item has quantity <= 0 or a negative price.
    """
    subtotal = Decimal("0")
    count = 0
    for item in items:
        price = to_money(item.price)
        if item.quantity <= 0:
            raise InvalidItemError(f"Quantity must be positive, got {item.quantity}")
        if price < 0:
            raise InvalidItemError(f"Unit price cannot be negative, got {price}")
        subtotal += price * item.quantity
        count += 1

    if count == 0:
        raise ValidationError("An order needs at least one item")

    tax = calculate_tax(subtotal)
    shipping_cost = calculate_shipping(subtotal)
    total_price = subtotal + tax + shipping_cost
    if total_price > MAX_AMOUNT:
        raise ValidationError(f"Order total {total_price} exceeds the maximum of {MAX_AMOUNT}")

    return OrderTotals(
        subtotal=subtotal,
        tax=tax,
        shipping_cost=shipping_cost,
        total_price=total_price,
    )
