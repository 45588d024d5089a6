# app/routers/product.py
from __future__ import annotations

from fastapi import APIRouter, Body, Depends, Form, Path, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from app.auth.dependencies import get_current_user
from app.core import responses
from app.core.errors import DuplicateProductError, NotFoundError, ValidationError
from app.database import get_db
from app.schemas.common import DeletedData, ResponseEnvelope, ResultData, UpdatedData
from app.schemas.product import (
    PaginationResult,
    ProductCreate,
    ProductRead,
    ProductUpdate,
)
from app.services.product_service import ProductService

NOT_FOUND_MSG = "Product not found!"

router = APIRouter(
    prefix="/products",
    tags=["products"],
    dependencies=[Depends(get_current_user)],
)


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    return ProductService(db)


@router.get(
    "/{skip}/{page_size}",
    response_model=ResponseEnvelope[ResultData[PaginationResult[ProductRead]]],
    summary="List products (offset pagination, id ascending)",
)
def list_products(
    skip: int = Path(..., ge=0, description="Rânduri sărite"),
    page_size: int = Path(..., gt=0, description="Mărimea paginii"),
    service: ProductService = Depends(get_product_service),
):
    result = service.list_page(skip, page_size)
    # Header util pentru UI-uri/tabele
    return responses.ok(
        {"result": result},
        "Products retrieved successfully!",
        headers={"X-Total-Count": str(result.records_total)},
    )


@router.get(
    "/{product_id}",
    response_model=ResponseEnvelope[ResultData[ProductRead]],
    summary="Get a product by id",
)
def get_product(product_id: int, service: ProductService = Depends(get_product_service)):
    obj = service.get_by_id(product_id)
    if obj is None:
        raise NotFoundError(NOT_FOUND_MSG)
    return responses.ok({"result": ProductRead.model_validate(obj)}, "Product retrieved successfully!")


@router.post(
    "",
    response_model=ResponseEnvelope[ResultData[ProductRead]],
    status_code=status.HTTP_201_CREATED,
    summary="Create a product (form-encoded)",
)
def create_product(
    product_id: int = Form(0, alias="id", ge=0),
    stock_no: str = Form(..., alias="stockNo", max_length=20),
    stock_name: str = Form(..., alias="stockName", max_length=200),
    price: float = Form(..., ge=0),
    category: str = Form(..., max_length=200),
    service: ProductService = Depends(get_product_service),
):
    try:
        payload = ProductCreate(
            id=product_id, stock_no=stock_no, stock_name=stock_name, price=price, category=category
        )
    except PydanticValidationError as e:
        raise RequestValidationError(e.errors(include_url=False, include_context=False))

    # verificare rapidă; unicitatea reală e garantată de PK la INSERT (tot DuplicateProductError)
    if payload.id and service.get_by_id(payload.id) is not None:
        raise DuplicateProductError()
    obj = service.create(payload)

    return responses.created(
        f"/products/{obj.id}",
        {"result": ProductRead.model_validate(obj)},
        "Product has been added successfully!",
    )


@router.put(
    "/{product_id}",
    response_model=ResponseEnvelope[UpdatedData],
    summary="Replace a product (all fields)",
)
def update_product(
    product_id: int,
    payload: ProductUpdate = Body(...),
    service: ProductService = Depends(get_product_service),
):
    if product_id != payload.id:
        raise ValidationError("Product id must be same!")

    updated = service.update(payload)
    if not updated:
        raise NotFoundError(NOT_FOUND_MSG)
    return responses.ok({"updated": updated}, "Product updated successfully!")


@router.delete(
    "/{product_id}",
    response_model=ResponseEnvelope[DeletedData],
    summary="Delete a product",
)
def delete_product(product_id: int, service: ProductService = Depends(get_product_service)):
    deleted = service.delete(product_id)
    if not deleted:
        raise NotFoundError(NOT_FOUND_MSG)
    return responses.ok({"deleted": deleted}, "Product deleted successfully!")
