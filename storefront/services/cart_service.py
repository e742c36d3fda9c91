from decimal import Decimal
from typing import Dict, Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.database import is_constraint_violation
from storefront.data.models.cart_line import CartLineModel
from storefront.domain.errors import ConflictError, NotFoundError, ValidationError
from storefront.repos.cart_repo import CartRepo
from storefront.services.product_client import ProductClient
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

CENT = Decimal("0.01")


def line_price(unit_price: Any, quantity: int) -> Decimal:
    #float z jsona -> str -> Decimal, bez smieci binarnych
    return (Decimal(str(unit_price)) * quantity).quantize(CENT)


class CartService:
    """
    Use case'y koszyka usera: jedna pozycja na produkt, cena = cena jednostkowa * ilosc.
    commands (add, update, remove) modyfikuja stan
    query (list) tylko odczyt
    """

    def __init__(self, db: Session, product_client: ProductClient):
        self.repo = CartRepo(db)
        self.product_client = product_client

    @staticmethod
    def _line_to_dict(line: CartLineModel, product: dict | None) -> Dict[str, Any]:
        return {
            "id": line.id,
            "user_id": line.user_id,
            "product_id": line.product_id,
            "quantity": line.quantity,
            "price": line.price,
            "product": product,
        }

    @staticmethod
    def _check_quantity(quantity: int) -> None:
        if quantity is None or quantity < 1:
            raise ValidationError("Quantity must be at least 1")

    #query - odczyt
    def list_lines(self, user_id: int) -> Dict[str, Any]:
        lines = self.repo.list_lines(user_id)

        items = []
        for line in lines:
            try:
                product = self.product_client.fetch_product(line.product_id)
            except NotFoundError:
                #produkt zniknal z katalogu, pozycja zostaje ze swoim snapshotem
                logger.warning(f"Product {line.product_id} in cart line {line.id} no longer exists")
                product = None
            items.append(self._line_to_dict(line, product))

        total = sum((line.price for line in lines), Decimal("0.00"))

        return {
            "user_id": user_id,
            "items": items,
            "total": total,
        }

    #commands
    def add_line(self, user_id: int, product_id: int, quantity: int) -> Dict[str, Any]:
        """
        Use Case: dodanie produktu do koszyka.

        - quantity >= 1
        - produkt istnieje w product-service
        - produkt jeszcze nie jest w koszyku (odrzucamy, nie sumujemy ilosci)
        """
        self._check_quantity(quantity)

        logger.info(f"Fetching product {product_id} from product-service")
        product = self.product_client.fetch_product(product_id)

        if self.repo.get_line_by_product(user_id, product_id):
            raise ConflictError(f"Product {product_id} is already in the cart")

        line = CartLineModel(
            user_id=user_id,
            product_id=product_id,
            quantity=quantity,
            price=line_price(product["price"], quantity),
        )

        try:
            self.repo.add_line(line)
            self.repo.commit()
        except IntegrityError as e:
            self.repo.rollback()
            #rownolegle dodanie tego samego produktu, zlapane przez unique (user_id, product_id)
            if is_constraint_violation(e, "uq_cart_lines_user_product", "cart_lines.user_id, cart_lines.product_id"):
                raise ConflictError(f"Product {product_id} is already in the cart")
            raise

        self.repo.refresh(line)
        logger.info(f"Added product {product_id} x{quantity} to cart of user {user_id} (line {line.id})")

        return self._line_to_dict(line, product)

    def update_line(self, user_id: int, line_id: int, quantity: int) -> Dict[str, Any]:
        """
        Use Case: zmiana ilosci. Cena liczona od AKTUALNEJ ceny produktu,
        nie od poprzedniego snapshotu.
        """
        self._check_quantity(quantity)

        line = self.repo.get_line(user_id, line_id)
        if not line:
            raise NotFoundError(f"Cart line {line_id} not found")

        product = self.product_client.fetch_product(line.product_id)

        line.quantity = quantity
        line.price = line_price(product["price"], quantity)
        self.repo.commit()
        self.repo.refresh(line)

        logger.info(f"Cart line {line.id} of user {user_id} updated to quantity {quantity}")

        return self._line_to_dict(line, product)

    def remove_line(self, user_id: int, line_id: int) -> None:
        line = self.repo.get_line(user_id, line_id)
        if not line:
            raise NotFoundError(f"Cart line {line_id} not found")

        self.repo.delete_line(line)
        self.repo.commit()

        logger.info(f"Cart line {line_id} removed from cart of user {user_id}")
