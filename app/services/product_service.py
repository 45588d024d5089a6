from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.crud import product as crud
from app.models.product import Product
from app.schemas.product import PaginationResult, ProductCreate, ProductRead, ProductUpdate

logger = logging.getLogger(__name__)


class ProductService:
    """
    Logica de catalog peste store: paginare, verificări de existență, update complet.

    Contract:
      - "nu există" e un rezultat normal (None / False), nu o excepție;
      - erorile de store (I/O, DB căzut) se propagă neschimbate, nu devin "not found";
      - fiecare mutație reușită e comisă înainte de return.
    """

    def __init__(self, db: Session):
        self.db = db

    def list_page(self, skip: int, page_size: int) -> PaginationResult[ProductRead]:
        if skip < 0:
            raise ValueError("skip must be >= 0")
        if page_size <= 0:
            raise ValueError("page_size must be > 0")

        total = crud.count(self.db)
        if skip >= total:
            rows = []
        else:
            # limita nu depășește totalul; valori uriașe nu ajung în SQL (LIMIT e int64)
            rows = crud.list_slice(self.db, offset=skip, limit=min(page_size, total - skip))
        return PaginationResult[ProductRead](
            records_total=total,
            records=[ProductRead.model_validate(r) for r in rows],
        )

    def get_by_id(self, product_id: int) -> Optional[Product]:
        return crud.get(self.db, product_id)

    def create(self, data: ProductCreate) -> Product:
        """Duplicatele de id sunt detectate la INSERT (DuplicateProductError)."""
        obj = crud.create(self.db, data.model_dump())
        logger.info("Product created: %r", obj)
        return obj

    def update(self, data: ProductUpdate) -> bool:
        obj = crud.get(self.db, data.id)
        if obj is None:
            return False
        crud.replace(self.db, obj, data.model_dump())
        logger.info("Product updated: %r", obj)
        return True

    def delete(self, product_id: int) -> bool:
        obj = crud.get(self.db, product_id)
        if obj is None:
            return False
        crud.delete(self.db, obj)
        logger.info("Product deleted: id=%s", product_id)
        return True
