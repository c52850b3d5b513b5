from sqlalchemy import Column, Integer, ForeignKey, String, Text, DateTime, Numeric, CheckConstraint
from sqlalchemy.orm import relationship
from datetime import datetime, timezone

from app.data.database import Base


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    # tozsamosc przychodzi z zewnatrz, nie trzymamy tabeli users
    user_id = Column(Integer, nullable=False, index=True)
    session_id = Column(String(255), nullable=False)

    status = Column(String(20), nullable=False, default="pending")  # pending, confirmed, shipped, delivered, cancelled
    total_amount = Column(Numeric(10, 2), nullable=False)

    customer_name = Column(String(255), nullable=False)
    customer_email = Column(String(255), nullable=False)
    customer_phone = Column(String(50), nullable=True)

    shipping_address = Column(String(500), nullable=False)
    shipping_city = Column(String(100), nullable=False)
    shipping_state = Column(String(100), nullable=False)
    shipping_country = Column(String(100), nullable=False)
    shipping_zip_code = Column(String(20), nullable=False)

    billing_address = Column(String(500), nullable=False)
    billing_city = Column(String(100), nullable=False)
    billing_state = Column(String(100), nullable=False)
    billing_country = Column(String(100), nullable=False)
    billing_zip_code = Column(String(20), nullable=False)

    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    items = relationship(
        "OrderItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItemModel.id",
        lazy="selectin",
    )


class OrderItemModel(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)

    quantity = Column(Integer, CheckConstraint("quantity >= 1"), nullable=False)
    # cena z katalogu w chwili zamowienia, nie aktualizujemy jej nigdy
    price = Column(Numeric(10, 2), nullable=False)

    order = relationship("OrderModel", back_populates="items")
    product = relationship("ProductModel", lazy="joined")
