"""Products API routes — public catalog reads, admin writes."""

from typing import List

from fastapi import APIRouter, Depends, status

from pinifast.application.services.product_service import ProductService
from pinifast.domain.schemas.auth import CurrentUser
from pinifast.domain.schemas.common import ApiResponse, ok
from pinifast.domain.schemas.product import ProductCreate, ProductRead, ProductUpdate, StockUpdate
from pinifast.interfaces.api.deps import require_admin
from pinifast.interfaces.deps import get_product_service

router = APIRouter(prefix="/api/products", tags=["Products"])


def _read_all(products) -> List[ProductRead]:
    return [ProductRead.model_validate(p) for p in products]


@router.get("", response_model=ApiResponse[List[ProductRead]])
def list_products(service: ProductService = Depends(get_product_service)):
    return ok(_read_all(service.find_all()), "Products retrieved successfully")


@router.get("/stock/available", response_model=ApiResponse[List[ProductRead]])
def in_stock_products(service: ProductService = Depends(get_product_service)):
    return ok(_read_all(service.find_in_stock()), "In-stock products retrieved successfully")


@router.get("/category/{category}", response_model=ApiResponse[List[ProductRead]])
def products_by_category(category: str, service: ProductService = Depends(get_product_service)):
    products = _read_all(service.find_by_category(category))
    return ok(products, f"Products in category '{category}' retrieved successfully")


@router.get("/{product_id}", response_model=ApiResponse[ProductRead])
def get_product(product_id: str, service: ProductService = Depends(get_product_service)):
    return ok(ProductRead.model_validate(service.get_by_id(product_id)), "Product retrieved successfully")


@router.post("", response_model=ApiResponse[ProductRead], status_code=status.HTTP_201_CREATED)
def create_product(
    body: ProductCreate,
    admin: CurrentUser = Depends(require_admin),
    service: ProductService = Depends(get_product_service),
):
    product = service.create(body)
    return ok(ProductRead.model_validate(product), "Product created successfully", status.HTTP_201_CREATED)


@router.put("/{product_id}", response_model=ApiResponse[ProductRead])
def update_product(
    product_id: str,
    body: ProductUpdate,
    admin: CurrentUser = Depends(require_admin),
    service: ProductService = Depends(get_product_service),
):
    product = service.update(product_id, body)
    return ok(ProductRead.model_validate(product), "Product updated successfully")


@router.delete("/{product_id}", response_model=ApiResponse[None])
def delete_product(
    product_id: str,
    admin: CurrentUser = Depends(require_admin),
    service: ProductService = Depends(get_product_service),
):
    service.delete(product_id)
    return ok(message="Product deleted successfully")


@router.patch("/{product_id}/stock", response_model=ApiResponse[ProductRead])
def update_stock(
    product_id: str,
    body: StockUpdate,
    admin: CurrentUser = Depends(require_admin),
    service: ProductService = Depends(get_product_service),
):
    product = service.update_stock(product_id, body.quantity)
    return ok(ProductRead.model_validate(product), "Product stock updated successfully")
