from __future__ import annotations

from sqlalchemy import CheckConstraint, Float, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Product(Base):
    """
    Produsul din catalog (singura entitate).

    Note:
    - `id` e PK autoincrement; se poate trimite explicit la creare (id > 0),
      unicitatea rămâne garantată de PRIMARY KEY la INSERT.
    - `price` NOT NULL și >= 0 (CHECK la nivel DB, pe lângă validarea din schema).
    - Lungimile coloanelor sunt aceleași ca în schema Pydantic.
    """
    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("price >= 0", name="price_nonnegative"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    stock_no: Mapped[str] = mapped_column(String(20), nullable=False)
    stock_name: Mapped[str] = mapped_column(String(200), nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    category: Mapped[str] = mapped_column(String(200), nullable=False)

    def __repr__(self) -> str:
        # scurtează numele în repr pentru loguri mai curate
        name = self.stock_name
        name_preview = (name[:32] + "…") if name and len(name) > 33 else name
        return f"<Product id={self.id!r} stock_no={self.stock_no!r} name={name_preview!r}>"
