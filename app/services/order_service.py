# app/services/order_service.py
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from sqlalchemy.orm import Session

from app.data.models.order import OrderModel, OrderItemModel
from app.domain.errors import EmptyCart, ProductUnavailable, NotFound, Unauthorized
from app.domain.identity import Identity
from app.domain.order_status import OrderStatus, parse_status, check_transition
from app.domain.schemas import Address, CustomerInfo
from app.repos.cart_repo import CartRepo
from app.repos.order_repo import OrderRepo
from app.repos.product_repo import ProductRepo
from app.services.lock_service import LockService
from app.services.notification_service import (
    Notifier,
    order_event,
    ORDER_CREATED,
    ORDER_STATUS_UPDATED,
)
from app.utils.settings import ORDER_STATUS_STRICT_TRANSITIONS
from app.utils.logging import get_logger

logger = get_logger(__name__)

CENT = Decimal("0.01")


class OrderService:
    """
    Serwis odpowiedzialny za domenę zamówień.
    Koszyk -> zamowienie jest atomowe: albo jest zamowienie z pozycjami i pusty koszyk,
    albo nic sie nie zmienilo.
    """

    def __init__(
        self,
        db: Session,
        lock_service: LockService,
        notifier: Notifier,
        strict_transitions: bool = ORDER_STATUS_STRICT_TRANSITIONS,
    ):
        self.repo = OrderRepo(db)
        self.cart_repo = CartRepo(db)
        self.catalog = ProductRepo(db)
        self.lock_service = lock_service
        self.notifier = notifier
        self.strict_transitions = strict_transitions

    # =====================================================
    # COMMANDS
    # =====================================================
    def place_order(
        self,
        session_id: str,
        user_id: Optional[int],
        customer: CustomerInfo,
        shipping: Address,
        billing: Optional[Address] = None,
        notes: Optional[str] = None,
    ) -> OrderModel:
        """
        Use Case: Tworzenie zamówienia z koszyka sesji.

        1. Czyta linie koszyka (pusty -> EmptyCart)
        2. Bierze aktualne ceny z katalogu (brak produktu -> ProductUnavailable)
        3. Liczy total, zaokraglenie half-up do groszy
        4. Billing domyslnie = shipping
        5. Zapisuje zamowienie + pozycje z zamrozonymi cenami
        6. Czysci koszyk
        7. Wysyla powiadomienie (best-effort, po commicie)

        Kroki 1-6 pod lockiem sesji i w jednej transakcji.
        Przegrany rownolegly checkout czeka na lock i widzi juz pusty koszyk.
        """
        if user_id is None:
            raise Unauthorized("Sign in to place an order")

        if billing is None:
            billing = shipping.model_copy()

        with self.lock_service.session_lock(session_id):
            try:
                lines = self.cart_repo.get_lines(session_id, for_update=True)
                if not lines:
                    raise EmptyCart()

                products = self.catalog.resolve_many(line.product_id for line in lines)

                items = []
                total = Decimal("0.00")
                for line in lines:
                    product = products.get(line.product_id)
                    if product is None:
                        raise ProductUnavailable(line.product_id)

                    # snapshot ceny - OrderItem nie trzyma referencji do ceny katalogowej
                    unit_price = Decimal(product.price)
                    total += unit_price * line.quantity
                    items.append(
                        OrderItemModel(
                            product_id=line.product_id,
                            quantity=line.quantity,
                            price=unit_price,
                        )
                    )

                order = OrderModel(
                    user_id=user_id,
                    session_id=session_id,
                    status=OrderStatus.PENDING.value,
                    total_amount=total.quantize(CENT, rounding=ROUND_HALF_UP),
                    customer_name=customer.name,
                    customer_email=customer.email,
                    customer_phone=customer.phone,
                    shipping_address=shipping.address,
                    shipping_city=shipping.city,
                    shipping_state=shipping.state,
                    shipping_country=shipping.country,
                    shipping_zip_code=shipping.zip_code,
                    billing_address=billing.address,
                    billing_city=billing.city,
                    billing_state=billing.state,
                    billing_country=billing.country,
                    billing_zip_code=billing.zip_code,
                    notes=notes,
                )

                self.repo.add_order(order, items)
                self.cart_repo.delete_session_lines(session_id)
                self.repo.commit()
            except Exception:
                self.repo.rollback()
                raise

        self.repo.refresh(order)
        logger.info(
            f"Order {order.id} created from cart {session_id} for user {user_id}, "
            f"{len(order.items)} items, total {order.total_amount}"
        )

        self._notify(ORDER_CREATED, order)
        return order

    def update_status(self, order_id: int, new_status: str) -> OrderModel:
        target = parse_status(new_status)

        order = self.repo.get_order(order_id)
        if not order:
            raise NotFound(f"Order {order_id} not found")

        current = parse_status(order.status)
        check_transition(current, target, strict=self.strict_transitions)

        order = self.repo.update_order_status(order_id, target.value)
        if order is None:
            # usuniete w miedzyczasie
            raise NotFound(f"Order {order_id} not found")
        logger.info(f"Order {order_id} status {current.value} -> {target.value}")

        self._notify(ORDER_STATUS_UPDATED, order)
        return order

    # =====================================================
    # QUERY
    # =====================================================
    def list_orders(self, requester: Identity) -> list[OrderModel]:
        """Admin widzi wszystko, klient tylko swoje. Filtr jest tutaj, nie w routerze."""
        requester.check_authenticated()

        if requester.is_admin:
            return self.repo.list_orders()
        return self.repo.list_orders(user_id=requester.user_id)

    def get_order(self, requester: Identity, order_id: int) -> OrderModel:
        requester.check_authenticated()

        order = self.repo.get_order(order_id)

        # cudze zamowienie = 404, nie zdradzamy ze istnieje
        if not order or (order.user_id != requester.user_id and not requester.is_admin):
            raise NotFound(f"Order {order_id} not found")
        return order

    def _notify(self, event_type: str, order: OrderModel) -> None:
        try:
            self.notifier.notify(order_event(event_type, order))
        except Exception as e:
            logger.warning(f"Failed to send {event_type} for order {getattr(order, 'id', None)}: {e}")
