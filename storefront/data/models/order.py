from sqlalchemy import Column, Integer, ForeignKey, String, DateTime, Numeric, JSON, UniqueConstraint
from datetime import datetime, timezone

from storefront.data.database import Base


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    #snapshot pozycji koszyka: [{"product_id", "quantity", "price"}]
    cart_items = Column(JSON, nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)
    address = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    #jedno zamowienie na usera, ostatnia linia obrony przy wyscigu
    __table_args__ = (UniqueConstraint("user_id", name="uq_orders_user"),)
