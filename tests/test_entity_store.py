from datetime import datetime

import pytest

from pinifast.core.exceptions import ValidationException
from pinifast.infrastructure.repositories.product_repository import SQLAlchemyProductRepository
from pinifast.infrastructure.repositories.role_repository import SQLAlchemyRoleRepository

PRODUCT = {
    "name": "Desk Lamp",
    "description": "LED lamp",
    "price": 19.5,
    "category": "lighting",
    "sku": "LAMP-1",
    "in_stock": True,
    "stock_quantity": 3,
}


@pytest.fixture
def products(db):
    return SQLAlchemyProductRepository(db)


def test_create_assigns_id_and_timestamps(products):
    product = products.create(PRODUCT)

    assert product.id
    assert isinstance(product.created_at, datetime)
    assert product.created_at.tzinfo is not None
    assert product.created_at == product.updated_at


def test_create_ignores_caller_supplied_managed_fields(products):
    product = products.create({**PRODUCT, "id": "chosen"})
    assert product.id != "chosen"


def test_ids_are_unique(products):
    ids = {products.create({**PRODUCT, "sku": f"SKU-{i}"}).id for i in range(20)}
    assert len(ids) == 20


def test_round_trip_preserves_values(db, products):
    created = products.create(PRODUCT)
    db.expunge_all()

    loaded = products.find_by_id(created.id)

    assert loaded is not None
    assert loaded.name == PRODUCT["name"]
    assert loaded.price == PRODUCT["price"]
    assert loaded.in_stock is True
    assert loaded.stock_quantity == 3
    assert loaded.created_at == created.created_at


def test_find_by_query_and_count(products):
    products.create(PRODUCT)
    products.create({**PRODUCT, "sku": "LAMP-2", "category": "desk"})

    assert len(products.find_by_query(category="lighting")) == 1
    assert products.count() == 2
    assert products.count(category="desk") == 1
    assert products.find_one(sku="LAMP-2").category == "desk"
    assert products.find_one(sku="missing") is None


def test_unknown_field_is_rejected(products):
    with pytest.raises(ValidationException):
        products.find_one(colour="red")

    with pytest.raises(ValidationException):
        products.create({**PRODUCT, "colour": "red"})


def test_update_merges_fields_and_refreshes_updated_at(products):
    product = products.create(PRODUCT)
    created_at = product.created_at

    updated = products.update(product.id, {"price": 25.0})

    assert updated.price == 25.0
    assert updated.name == PRODUCT["name"]
    assert updated.created_at == created_at
    assert updated.updated_at >= created_at


def test_update_and_delete_missing_rows(products):
    assert products.update("nope", {"price": 1.0}) is None
    assert products.delete("nope") is False


def test_delete_removes_row(products):
    product = products.create(PRODUCT)

    assert products.delete(product.id) is True
    assert products.find_by_id(product.id) is None


def test_unique_constraint_violation_is_a_validation_error(db):
    roles = SQLAlchemyRoleRepository(db)
    roles.create({"name": "auditor", "description": "Reads everything"})

    with pytest.raises(ValidationException):
        roles.create({"name": "auditor", "description": "Second copy"})

    assert roles.count() == 1
