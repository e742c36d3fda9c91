# storefront/repos/cart_repo.py
from typing import List

from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from storefront.data.models.cart_line import CartLineModel


class CartRepo:
    """Dostep do tabeli cart_lines. Commit/rollback steruje serwis."""

    def __init__(self, db: Session):
        self.db = db

    def get_line(self, user_id: int, line_id: int) -> CartLineModel | None:
        return self.db.execute(
            select(CartLineModel).where(
                CartLineModel.id == line_id,
                CartLineModel.user_id == user_id,
            )
        ).scalar_one_or_none()

    def get_line_by_product(self, user_id: int, product_id: int) -> CartLineModel | None:
        return self.db.execute(
            select(CartLineModel).where(
                CartLineModel.user_id == user_id,
                CartLineModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def list_lines(self, user_id: int) -> List[CartLineModel]:
        #kolejnosc dodawania = rosnace id
        return list(
            self.db.execute(
                select(CartLineModel)
                .where(CartLineModel.user_id == user_id)
                .order_by(CartLineModel.id)
            ).scalars().all()
        )

    def add_line(self, line: CartLineModel) -> CartLineModel:
        self.db.add(line)
        self.db.flush()
        return line

    def delete_line(self, line: CartLineModel) -> None:
        self.db.delete(line)
        self.db.flush()

    def delete_lines_for_user(self, user_id: int) -> int:
        result = self.db.execute(
            delete(CartLineModel).where(CartLineModel.user_id == user_id)
        )
        return result.rowcount

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()

    def refresh(self, line: CartLineModel) -> CartLineModel:
        self.db.refresh(line)
        return line
