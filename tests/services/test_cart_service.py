"""Cart use cases: one line per product, price snapshot = unit price x quantity."""

from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from storefront.domain.errors import ConflictError, NotFoundError, ValidationError
from storefront.repos.cart_repo import CartRepo
from storefront.services.cart_service import CartService, line_price


@pytest.fixture()
def svc(db, product_client):
    return CartService(db, product_client)


class TestLinePrice:
    def test_float_price_is_converted_without_binary_noise(self):
        assert line_price(49.5, 3) == Decimal("148.50")

    def test_result_is_rounded_to_cents(self):
        assert line_price("0.333", 3) == Decimal("1.00")


class TestAddLine:
    def test_price_is_unit_price_times_quantity(self, svc, customer):
        line = svc.add_line(customer.id, product_id=1, quantity=2)

        assert line["product_id"] == 1
        assert line["quantity"] == 2
        assert line["price"] == Decimal("20.00")
        assert line["product"]["title"] == "Keyboard"

    def test_zero_quantity_is_rejected_before_anything_is_stored(self, svc, db, customer, product_client):
        with pytest.raises(ValidationError):
            svc.add_line(customer.id, product_id=1, quantity=0)

        assert CartRepo(db).list_lines(customer.id) == []
        assert product_client.calls == []

    def test_unknown_product(self, svc, db, customer):
        with pytest.raises(NotFoundError):
            svc.add_line(customer.id, product_id=999, quantity=1)

        assert CartRepo(db).list_lines(customer.id) == []

    def test_same_product_twice_is_rejected_not_merged(self, svc, db, customer):
        svc.add_line(customer.id, product_id=1, quantity=2)

        with pytest.raises(ConflictError):
            svc.add_line(customer.id, product_id=1, quantity=5)

        lines = CartRepo(db).list_lines(customer.id)
        assert len(lines) == 1
        assert lines[0].quantity == 2

    def test_concurrent_duplicate_is_stopped_by_unique_constraint(self, svc, db, customer, monkeypatch):
        svc.add_line(customer.id, product_id=1, quantity=1)

        # second caller passed the application check before the first one committed
        monkeypatch.setattr(svc.repo, "get_line_by_product", lambda user_id, product_id: None)

        with pytest.raises(ConflictError):
            svc.add_line(customer.id, product_id=1, quantity=1)

        assert len(CartRepo(db).list_lines(customer.id)) == 1

    def test_other_integrity_errors_are_not_reported_as_duplicates(self, svc, db, customer, monkeypatch):
        class ForeignKeyViolation(Exception):
            class diag:
                constraint_name = "cart_lines_user_id_fkey"

        def failing_add(line):
            raise IntegrityError("INSERT INTO cart_lines ...", {}, ForeignKeyViolation("violates foreign key constraint"))

        monkeypatch.setattr(svc.repo, "add_line", failing_add)

        with pytest.raises(IntegrityError):
            svc.add_line(customer.id, product_id=1, quantity=1)

        assert CartRepo(db).list_lines(customer.id) == []

    def test_same_product_in_different_carts(self, svc, customer, other_customer):
        svc.add_line(customer.id, product_id=1, quantity=1)
        line = svc.add_line(other_customer.id, product_id=1, quantity=3)

        assert line["price"] == Decimal("30.00")


class TestUpdateLine:
    def test_uses_current_catalog_price(self, svc, customer, product_client):
        line = svc.add_line(customer.id, product_id=1, quantity=1)
        product_client.set_price(1, 12.50)

        updated = svc.update_line(customer.id, line["id"], quantity=3)

        assert updated["quantity"] == 3
        assert updated["price"] == Decimal("37.50")

    def test_missing_line(self, svc, customer):
        with pytest.raises(NotFoundError):
            svc.update_line(customer.id, 12345, quantity=1)

    def test_line_of_another_user_is_not_found(self, svc, customer, other_customer):
        line = svc.add_line(customer.id, product_id=1, quantity=1)

        with pytest.raises(NotFoundError):
            svc.update_line(other_customer.id, line["id"], quantity=4)

    def test_quantity_below_one(self, svc, db, customer):
        line = svc.add_line(customer.id, product_id=1, quantity=2)

        with pytest.raises(ValidationError):
            svc.update_line(customer.id, line["id"], quantity=0)

        assert CartRepo(db).list_lines(customer.id)[0].quantity == 2

    def test_product_removed_from_catalog(self, svc, customer, product_client):
        line = svc.add_line(customer.id, product_id=2, quantity=1)
        del product_client.products[2]

        with pytest.raises(NotFoundError):
            svc.update_line(customer.id, line["id"], quantity=2)


class TestRemoveLine:
    def test_remove_then_remove_again(self, svc, db, customer):
        line = svc.add_line(customer.id, product_id=1, quantity=1)

        svc.remove_line(customer.id, line["id"])
        assert CartRepo(db).list_lines(customer.id) == []

        with pytest.raises(NotFoundError):
            svc.remove_line(customer.id, line["id"])

    def test_cannot_remove_line_of_another_user(self, svc, db, customer, other_customer):
        line = svc.add_line(customer.id, product_id=1, quantity=1)

        with pytest.raises(NotFoundError):
            svc.remove_line(other_customer.id, line["id"])

        assert len(CartRepo(db).list_lines(customer.id)) == 1


class TestListLines:
    def test_empty_cart(self, svc, customer):
        cart = svc.list_lines(customer.id)

        assert cart["items"] == []
        assert cart["total"] == Decimal("0.00")

    def test_insertion_order_with_product_details(self, svc, customer):
        svc.add_line(customer.id, product_id=3, quantity=1)
        svc.add_line(customer.id, product_id=1, quantity=2)
        svc.add_line(customer.id, product_id=2, quantity=1)

        cart = svc.list_lines(customer.id)

        assert [i["product_id"] for i in cart["items"]] == [3, 1, 2]
        assert [i["product"]["title"] for i in cart["items"]] == ["Monitor", "Keyboard", "Mouse"]
        assert cart["total"] == Decimal("84.50")

    def test_no_duplicate_products(self, svc, customer):
        svc.add_line(customer.id, product_id=1, quantity=1)
        svc.add_line(customer.id, product_id=3, quantity=1)
        with pytest.raises(ConflictError):
            svc.add_line(customer.id, product_id=1, quantity=1)

        product_ids = [i["product_id"] for i in svc.list_lines(customer.id)["items"]]
        assert len(product_ids) == len(set(product_ids))

    def test_only_own_lines(self, svc, customer, other_customer):
        svc.add_line(customer.id, product_id=1, quantity=1)
        svc.add_line(other_customer.id, product_id=2, quantity=1)

        cart = svc.list_lines(customer.id)
        assert [i["product_id"] for i in cart["items"]] == [1]

    def test_line_keeps_snapshot_when_product_disappears(self, svc, customer, product_client):
        svc.add_line(customer.id, product_id=2, quantity=2)
        del product_client.products[2]

        cart = svc.list_lines(customer.id)

        assert cart["items"][0]["product"] is None
        assert cart["items"][0]["price"] == Decimal("99.00")
