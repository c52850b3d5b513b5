# app/domain/order_status.py
from enum import Enum

from app.domain.errors import InvalidStatus, InvalidTransition


class OrderStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


# delivered i cancelled sa koncowe
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED, OrderStatus.CANCELLED},
    OrderStatus.CONFIRMED: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED, OrderStatus.CANCELLED},
    OrderStatus.DELIVERED: set(),
    OrderStatus.CANCELLED: set(),
}


def parse_status(value) -> OrderStatus:
    """Zamienia surowy string na OrderStatus albo rzuca InvalidStatus."""
    if isinstance(value, OrderStatus):
        return value
    try:
        return OrderStatus(value)
    except ValueError:
        raise InvalidStatus(str(value)) from None


def check_transition(current: OrderStatus, target: OrderStatus, strict: bool = True) -> None:
    # tryb nie-strict: kazdy znany status z kazdego (stare zachowanie sklepu)
    if not strict:
        return
    if target not in _VALID_TRANSITIONS[current]:
        raise InvalidTransition(current.value, target.value)
