# tests/test_product_service.py
from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from app.core.errors import DuplicateProductError
from app.crud import product as crud
from app.schemas.product import ProductCreate, ProductUpdate
from app.services.product_service import ProductService


def _new(stock_no: str = "S001", name: str = "Test1", price: float = 50, category: str = "A", **kw) -> ProductCreate:
    return ProductCreate(stock_no=stock_no, stock_name=name, price=price, category=category, **kw)


def _seed(service: ProductService, n: int) -> list[int]:
    return [service.create(_new(f"S{i:03d}", f"Test{i}", 10 + i, "A")).id for i in range(1, n + 1)]


# --- list_page ----------------------------------------------------------------
@pytest.mark.timeout(5)
def test_list_page_two_products_scenario(service: ProductService):
    service.create(_new("S001", "Test1", 50, "A"))
    service.create(_new("S002", "Test2", 60, "B"))

    page = service.list_page(0, 10)

    assert page.records_total == 2
    assert [p.stock_no for p in page.records] == ["S001", "S002"]
    # ordinea e stabilă între apeluri
    assert [p.id for p in service.list_page(0, 10).records] == [p.id for p in page.records]


@pytest.mark.timeout(5)
@pytest.mark.parametrize("skip,page_size", [(0, 1), (0, 3), (2, 2), (4, 10), (5, 1), (100, 5)])
def test_list_page_bounds_and_total(service: ProductService, skip: int, page_size: int):
    _seed(service, 5)

    page = service.list_page(skip, page_size)

    assert page.records_total == 5
    assert len(page.records) <= page_size
    assert len(page.records) == max(0, min(page_size, 5 - skip))


@pytest.mark.timeout(5)
def test_list_page_is_id_ascending_with_explicit_ids(service: ProductService):
    service.create(_new("S030", id=30))
    service.create(_new("S010", id=10))
    service.create(_new("S020", id=20))

    ids = [p.id for p in service.list_page(0, 10).records]
    assert ids == [10, 20, 30]
    assert [p.id for p in service.list_page(1, 1).records] == [20]


@pytest.mark.timeout(5)
def test_list_page_huge_page_size_returns_everything(service: ProductService):
    _seed(service, 3)

    page = service.list_page(1, 2**70)

    assert page.records_total == 3
    assert [p.stock_no for p in page.records] == ["S002", "S003"]


@pytest.mark.timeout(5)
def test_list_page_empty_store(service: ProductService):
    page = service.list_page(0, 10)
    assert page.records_total == 0
    assert page.records == []


@pytest.mark.parametrize("skip,page_size", [(-1, 10), (0, 0), (0, -5)])
def test_list_page_rejects_invalid_range(service: ProductService, skip: int, page_size: int):
    with pytest.raises(ValueError):
        service.list_page(skip, page_size)


# --- get / create ---------------------------------------------------------------
def test_create_then_get_matches_input(service: ProductService):
    data = _new("S100", "Keyboard", 99.5, "Peripherals")

    created = service.create(data)
    fetched = service.get_by_id(created.id)

    assert created.id > 0
    assert fetched is not None
    assert (fetched.stock_no, fetched.stock_name, fetched.price, fetched.category) == (
        "S100", "Keyboard", 99.5, "Peripherals",
    )


def test_create_keeps_surrounding_whitespace(service: ProductService):
    created = service.create(_new(" S001 ", "  Mouse", 1, "A  "))
    fetched = service.get_by_id(created.id)

    assert (fetched.stock_no, fetched.stock_name, fetched.category) == (" S001 ", "  Mouse", "A  ")


@pytest.mark.parametrize("price", [float("inf"), float("-inf"), float("nan")])
def test_create_rejects_non_finite_price(price: float):
    with pytest.raises(PydanticValidationError):
        _new(price=price)


def test_get_missing_returns_none(service: ProductService):
    assert service.get_by_id(12345) is None


def test_create_honors_explicit_id(service: ProductService):
    created = service.create(_new("S007", id=7))
    assert created.id == 7
    assert service.get_by_id(7) is not None


def test_create_duplicate_id_raises_conflict_and_keeps_first(service: ProductService):
    service.create(_new("S001", "First", id=5))

    with pytest.raises(DuplicateProductError):
        service.create(_new("S999", "Intruder", id=5))

    kept = service.get_by_id(5)
    assert kept is not None and kept.stock_name == "First"
    assert service.list_page(0, 10).records_total == 1


# --- update -----------------------------------------------------------------------
def test_update_id_zero_returns_false(service: ProductService):
    _seed(service, 1)
    assert service.update(ProductUpdate(id=0, stock_no="S", stock_name="N", price=1, category="A")) is False


def test_update_missing_on_empty_store_returns_false(service: ProductService):
    ok = service.update(ProductUpdate(id=99, stock_no="X", stock_name="Y", price=1, category="Z"))
    assert ok is False
    assert service.list_page(0, 10).records_total == 0


def test_update_missing_leaves_store_unchanged(service: ProductService):
    pid = service.create(_new("S001", "Keep", 10, "A")).id

    assert service.update(ProductUpdate(id=pid + 100, stock_no="X", stock_name="Y", price=1, category="Z")) is False

    p = service.get_by_id(pid)
    assert (p.stock_no, p.stock_name, p.price, p.category) == ("S001", "Keep", 10, "A")


def test_update_overwrites_all_fields_and_keeps_id(service: ProductService):
    pid = service.create(_new("S001", "Old", 10, "A")).id

    ok = service.update(ProductUpdate(id=pid, stock_no="S002", stock_name="New", price=0, category="B"))

    assert ok is True
    p = service.get_by_id(pid)
    assert p.id == pid
    assert (p.stock_no, p.stock_name, p.price, p.category) == ("S002", "New", 0, "B")


# --- delete -----------------------------------------------------------------------
def test_delete_twice_second_returns_false(service: ProductService):
    pid = service.create(_new()).id

    assert service.delete(pid) is True
    assert service.get_by_id(pid) is None
    assert service.delete(pid) is False


def test_delete_missing_returns_false(service: ProductService):
    assert service.delete(1) is False


# --- store faults -------------------------------------------------------------------
def test_store_fault_propagates_instead_of_not_found(service: ProductService, db_session: Session, monkeypatch):
    def _boom(db, product_id):
        raise OperationalError("SELECT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(crud, "get", _boom)

    with pytest.raises(OperationalError):
        service.get_by_id(1)
    with pytest.raises(OperationalError):
        service.delete(1)
