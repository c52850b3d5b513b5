from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, Numeric, CheckConstraint

from app.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)

    price = Column(Numeric(10, 2), CheckConstraint("price >= 0"), nullable=False)
    inventory = Column(Integer, CheckConstraint("inventory >= 0"), nullable=False, default=0)
    section = Column(String(20), nullable=False, index=True)  # retail, wholesale

    is_new = Column(Boolean, nullable=False, default=False)
    is_bestseller = Column(Boolean, nullable=False, default=False)
    # "usuniecie" produktu to is_active=False, historia zamowien zostaje
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
