from __future__ import annotations

from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import FlushError

from app.core.errors import DuplicateProductError
from app.models.product import Product

# Câmpurile suprascrise la update (tot în afară de id)
MUTABLE_FIELDS = ("stock_no", "stock_name", "price", "category")


def count(db: Session) -> int:
    """Numărul total de produse (fără paginare)."""
    return int(db.scalar(select(func.count(Product.id))) or 0)


def list_slice(db: Session, *, offset: int, limit: int) -> List[Product]:
    """
    Felie din tabel în ordinea naturală a store-ului: id crescător.
    Offset peste numărul de rânduri → listă goală.
    """
    stmt = select(Product).order_by(Product.id.asc()).offset(offset).limit(limit)
    return list(db.execute(stmt).scalars().all())


def get(db: Session, product_id: int) -> Optional[Product]:
    """Returnează produsul după ID (sau None)."""
    return db.get(Product, product_id)


def create(db: Session, values: dict) -> Product:
    """
    Inserează produsul; ridică DuplicateProductError pe conflict de PK.
    `id` lipsă/0 → alocat de DB.
    """
    obj = Product(**{k: values[k] for k in MUTABLE_FIELDS})
    if values.get("id"):
        obj.id = int(values["id"])
    db.add(obj)
    try:
        db.commit()
    except (IntegrityError, FlushError) as e:
        # FlushError: același PK e deja în identity map-ul sesiunii
        db.rollback()
        # PK duplicat → conflict; alte constrângeri (CHECK pe preț) rămân erori de store
        if obj.id and get(db, obj.id) is not None:
            raise DuplicateProductError() from e
        raise
    db.refresh(obj)
    return obj


def replace(db: Session, obj: Product, values: dict) -> Product:
    """Suprascrie necondiționat toate câmpurile mutabile (nu e merge)."""
    for k in MUTABLE_FIELDS:
        setattr(obj, k, values[k])
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(obj)
    return obj


def delete(db: Session, obj: Product) -> None:
    """Șterge un produs existent."""
    db.delete(obj)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
