from decimal import Decimal, ROUND_HALF_UP

from sqlalchemy.orm import Session

from app.data.models.cart_item import CartItemModel
from app.domain.errors import InvalidInput, NotFound
from app.repos.cart_repo import CartRepo
from app.repos.product_repo import ProductRepo
from app.services.lock_service import LockService
from app.utils.settings import CART_MAX_LINE_QUANTITY
from app.utils.logging import get_logger

logger = get_logger(__name__)

CENT = Decimal("0.01")


def _check_max(quantity: int) -> None:
    if quantity > CART_MAX_LINE_QUANTITY:
        raise InvalidInput(f"Quantity cannot exceed {CART_MAX_LINE_QUANTITY}")


class CartService:
    """
    Use case'y koszyka sesji.
    Komendy (add, update, remove, clear) ida pod lockiem sesji,
    zapytania (get, total) tylko czytaja.
    """

    def __init__(self, db: Session, lock_service: LockService):
        self.repo = CartRepo(db)
        self.catalog = ProductRepo(db)
        self.lock_service = lock_service

    # =====================================================
    # QUERY
    # =====================================================
    def get_lines(self, session_id: str) -> list[CartItemModel]:
        return self.repo.get_lines(session_id)

    def total(self, session_id: str) -> Decimal:
        """Suma po aktualnych cenach katalogu (zamowienia jeszcze nie ma, nic nie zamrazamy)."""
        lines = self.repo.get_lines(session_id)
        products = self.catalog.resolve_many(line.product_id for line in lines)

        total = sum(
            (products[line.product_id].price * line.quantity for line in lines if line.product_id in products),
            Decimal("0.00"),
        )
        return total.quantize(CENT, rounding=ROUND_HALF_UP)

    # =====================================================
    # COMMANDS
    # =====================================================
    def add_line(self, session_id: str, product_id: int, quantity: int) -> CartItemModel:
        if quantity < 1:
            raise InvalidInput("Quantity must be at least 1")
        _check_max(quantity)

        with self.lock_service.session_lock(session_id):
            product = self.catalog.resolve(product_id)
            if product is None:
                raise InvalidInput(f"Product {product_id} does not exist")

            try:
                line = self.repo.get_line_for_product(session_id, product_id)

                if line:
                    _check_max(line.quantity + quantity)
                    logger.info(
                        f"Product {product_id} already in cart {session_id}, "
                        f"quantity {line.quantity} -> {line.quantity + quantity}"
                    )
                    line.quantity += quantity
                else:
                    line = self.repo.add_line(
                        CartItemModel(
                            session_id=session_id,
                            product_id=product_id,
                            quantity=quantity,
                        )
                    )
                    logger.info(f"Added product {product_id} to cart {session_id}")

                self.repo.commit()
            except Exception:
                self.repo.rollback()
                raise

        self.repo.refresh(line)
        return line

    def update_quantity(self, session_id: str, line_id: int, quantity: int) -> CartItemModel:
        # 0 i mniej to nie "usun" - do tego jest remove_line
        if quantity < 1:
            raise InvalidInput("Quantity must be at least 1, use remove to delete a line")
        _check_max(quantity)

        with self.lock_service.session_lock(session_id):
            line = self._owned_line(session_id, line_id)
            line.quantity = quantity
            self.repo.commit()

        logger.info(f"Cart line {line_id} in {session_id} set to quantity {quantity}")
        self.repo.refresh(line)
        return line

    def remove_line(self, session_id: str, line_id: int) -> bool:
        with self.lock_service.session_lock(session_id):
            line = self._owned_line(session_id, line_id)
            self.repo.delete_line(line)
            self.repo.commit()

        logger.info(f"Removed cart line {line_id} from {session_id}")
        return True

    def clear(self, session_id: str) -> int:
        with self.lock_service.session_lock(session_id):
            removed = self.repo.delete_session_lines(session_id)
            self.repo.commit()

        logger.info(f"Cleared cart {session_id} ({removed} lines)")
        return removed

    def _owned_line(self, session_id: str, line_id: int) -> CartItemModel:
        line = self.repo.get_line(line_id)
        # cudza linia wyglada dokladnie jak brak linii
        if line is None or line.session_id != session_id:
            raise NotFound(f"Cart item {line_id} not found")
        return line
