# app/repos/order_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.data.models.order import OrderModel, OrderItemModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def add_order(self, order: OrderModel, items: list[OrderItemModel]) -> OrderModel:
        # bez commita - zamowienie, pozycje i czyszczenie koszyka ida w jednej transakcji
        for item in items:
            order.items.append(item)
        self.db.add(order)
        self.db.flush()
        return order

    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def list_orders(self, user_id: int | None = None) -> list[OrderModel]:
        stmt = select(OrderModel)
        if user_id is not None:
            stmt = stmt.where(OrderModel.user_id == user_id)
        stmt = stmt.order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
        return list(self.db.execute(stmt).scalars().all())

    def update_order_status(self, order_id: int, status: str) -> OrderModel | None:
        order = self.get_order(order_id)
        if order:
            order.status = status
            self.db.commit()
            self.db.refresh(order)
        return order

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()

    def refresh(self, order: OrderModel):
        self.db.refresh(order)
