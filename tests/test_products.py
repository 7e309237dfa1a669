import pytest

from pinifast.core.exceptions import EntityNotFoundException, ValidationException
from pinifast.domain.schemas.product import ProductCreate, ProductUpdate


def make_product(product_service, sku="MUG-1", quantity=0, category="kitchen"):
    return product_service.create(ProductCreate(
        name="Mug",
        description="Ceramic mug",
        price=7.5,
        category=category,
        sku=sku,
        stock_quantity=quantity,
    ))


def test_in_stock_follows_quantity_on_create(product_service):
    assert make_product(product_service, sku="A", quantity=0).in_stock is False
    assert make_product(product_service, sku="B", quantity=4).in_stock is True


def test_in_stock_follows_quantity_on_update(product_service):
    product = make_product(product_service, quantity=2)

    updated = product_service.update(product.id, ProductUpdate(stock_quantity=0))
    assert updated.in_stock is False

    updated = product_service.update_stock(product.id, 9)
    assert updated.in_stock is True
    assert updated.stock_quantity == 9


def test_update_without_quantity_keeps_stock_flag(product_service):
    product = make_product(product_service, quantity=2)

    updated = product_service.update(product.id, ProductUpdate(price=9.99))

    assert updated.price == 9.99
    assert updated.in_stock is True


def test_stock_flag_cannot_be_set_directly(product_service):
    product = make_product(product_service, quantity=0)

    data = ProductUpdate.model_validate({"inStock": True, "price": 10})
    updated = product_service.update(product.id, data)

    assert updated.price == 10
    assert updated.in_stock is False
    with pytest.raises(ValueError):
        ProductUpdate.model_validate({"inStock": True})


def test_negative_stock_is_rejected(product_service):
    product = make_product(product_service, quantity=2)

    with pytest.raises(ValidationException, match="cannot be negative"):
        product_service.update_stock(product.id, -1)


def test_reduce_stock_floors_at_zero(product_service):
    product = make_product(product_service, quantity=3)

    assert product_service.reduce_stock(product.id, 2).stock_quantity == 1
    reduced = product_service.reduce_stock(product.id, 5)
    assert reduced.stock_quantity == 0
    assert reduced.in_stock is False


def test_duplicate_sku(product_service):
    make_product(product_service, sku="MUG-1")
    other = make_product(product_service, sku="MUG-2")

    with pytest.raises(ValidationException, match="SKU already exists"):
        make_product(product_service, sku="MUG-1")
    with pytest.raises(ValidationException, match="SKU already exists"):
        product_service.update(other.id, ProductUpdate(sku="MUG-1"))


def test_queries(product_service):
    make_product(product_service, sku="A", quantity=0, category="kitchen")
    make_product(product_service, sku="B", quantity=1, category="kitchen")
    make_product(product_service, sku="C", quantity=1, category="garden")

    assert len(product_service.find_all()) == 3
    assert {p.sku for p in product_service.find_by_category("kitchen")} == {"A", "B"}
    assert {p.sku for p in product_service.find_in_stock()} == {"B", "C"}
    assert product_service.find_by_sku("C").category == "garden"


def test_missing_product(product_service):
    with pytest.raises(EntityNotFoundException):
        product_service.update_stock("missing", 1)
    with pytest.raises(EntityNotFoundException):
        product_service.delete("missing")


def test_delete(product_service):
    product = make_product(product_service)

    assert product_service.delete(product.id) is True
    assert product_service.find_by_id(product.id) is None
