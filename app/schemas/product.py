from __future__ import annotations

from typing import Generic, List, TypeVar

from pydantic import BaseModel, Field, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

T = TypeVar("T")


def _not_blank(v: str, field: str) -> str:
    # valoarea se păstrează exact cum a venit; doar cea numai din spații e respinsă
    if not v.strip():
        raise ValueError(f"{field} must not be empty")
    return v


class ProductBase(BaseModel):
    """Câmpuri comune pentru produs. JSON în camelCase (stockNo, stockName)."""
    stock_no: str = Field(..., min_length=1, max_length=20)
    stock_name: str = Field(..., min_length=1, max_length=200)
    price: float = Field(..., ge=0, allow_inf_nan=False)
    category: str = Field(..., min_length=1, max_length=200)

    # --- Validators ---
    @field_validator("stock_no")
    @classmethod
    def _stock_no_not_blank(cls, v: str) -> str:
        return _not_blank(v, "stockNo")

    @field_validator("stock_name")
    @classmethod
    def _stock_name_not_blank(cls, v: str) -> str:
        return _not_blank(v, "stockName")

    @field_validator("category")
    @classmethod
    def _category_not_blank(cls, v: str) -> str:
        return _not_blank(v, "category")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        # oferă exemple utile în OpenAPI
        json_schema_extra={
            "examples": [
                {
                    "stockNo": "S001",
                    "stockName": "Wireless mouse",
                    "price": 49.9,
                    "category": "Peripherals",
                }
            ]
        },
    )


class ProductCreate(ProductBase):
    """
    Payload pentru creare produs.
    `id` = 0 (sau lipsă) → id-ul e alocat de store; id > 0 → folosit ca PK.
    """
    id: int = Field(0, ge=0)


class ProductUpdate(ProductBase):
    """Payload pentru update: înlocuire completă a celor patru câmpuri (nu merge)."""
    id: int


class ProductRead(ProductBase):
    """Răspuns pentru produs."""
    id: int
    model_config = ConfigDict(from_attributes=True)


class PaginationResult(BaseModel, Generic[T]):
    """
    Pagina curentă + totalul nefiltrat.
    `records_total` numără toate produsele, indiferent de skip/page_size.
    """
    records_total: int = Field(..., ge=0)
    records: List[T]

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
