from sqlalchemy import Column, Integer, ForeignKey, Numeric, UniqueConstraint, CheckConstraint

from storefront.data.database import Base


class CartLineModel(Base):
    __tablename__ = "cart_lines"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    #produkt zyje w product-service, bez FK
    product_id = Column(Integer, nullable=False)

    quantity = Column(Integer, nullable=False)
    #cena jednostkowa * quantity w momencie ostatniego zapisu
    price = Column(Numeric(10, 2), nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "product_id", name="uq_cart_lines_user_product"),
        CheckConstraint("quantity >= 1", name="ck_cart_lines_quantity_positive"),
    )
