"""Unit tests for the InventoryService domain service.

Uses the in-memory fake repository — no file I/O.
"""

from datetime import datetime, timedelta, timezone

import pytest

from stock_control.domain.exceptions import (
    DuplicateSKUError,
    InsufficientStockError,
    ProductNotFoundError,
    StorageReadError,
    StorageWriteError,
    ValidationError,
)
from stock_control.domain.model.product import Product
from stock_control.domain.model.transaction import Transaction, TransactionType
from stock_control.domain.service.inventory_service import InventoryService
from tests.fakes import FakeClock, FakeInventoryRepository, SequentialIds

T0 = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


def _setup(
    products: list[Product] | None = None,
    transactions: list[Transaction] | None = None,
) -> tuple[InventoryService, FakeInventoryRepository, FakeClock]:
    repo = FakeInventoryRepository(products, transactions)
    clock = FakeClock(start=T0)
    service = InventoryService(repo, clock=clock, id_factory=SequentialIds())
    return service, repo, clock


def _with_widget(quantity: int = 100, reorder_point: int = 20):
    service, repo, clock = _setup()
    service.add_product("SKU001", "Widget", "useful", quantity, reorder_point)
    return service, repo, clock


class TestConstruction:

    def test_empty_store_gives_empty_state(self):
        service, repo, _ = _setup()
        assert service.list_products() == []
        assert service.get_transactions("SKU001") == []
        assert repo.save_count == 0

    def test_loads_existing_state(self):
        product = Product("p-1", "SKU001", "Widget", "", 7, 2)
        txn = Transaction("t-1", "SKU001", TransactionType.ADDITION, 7, T0)
        service, _, _ = _setup([product], [txn])

        assert service.get_product("SKU001") == product
        assert service.get_transactions("SKU001") == [txn]

    def test_load_failure_propagates(self):
        repo = FakeInventoryRepository()
        repo.fail_loads = True
        with pytest.raises(StorageReadError):
            InventoryService(repo)


class TestAddProduct:

    def test_creates_product(self):
        service, repo, _ = _setup()
        product = service.add_product("SKU001", "Widget", "useful", 100, 20)

        assert product.sku == "SKU001"
        assert product.name == "Widget"
        assert product.description == "useful"
        assert product.quantity == 100
        assert product.reorder_point == 20
        assert product.id == "id-1"
        assert service.get_product("SKU001") == product

    def test_persists_catalog(self):
        service, repo, _ = _setup()
        service.add_product("SKU001", "Widget", "", 1, 0)
        assert repo.product_saves == 1
        assert repo.transaction_saves == 0
        assert repo.product("SKU001").quantity == 1

    def test_assigns_distinct_ids_by_default(self):
        repo = FakeInventoryRepository()
        service = InventoryService(repo)
        a = service.add_product("A", "a", "", 0, 0)
        b = service.add_product("B", "b", "", 0, 0)
        assert a.id and b.id and a.id != b.id

    def test_zero_quantity_and_reorder_point_allowed(self):
        service, _, _ = _setup()
        product = service.add_product("SKU001", "Widget", "", 0, 0)
        assert product.quantity == 0

    def test_duplicate_sku_rejected(self):
        service, repo, _ = _with_widget()
        with pytest.raises(DuplicateSKUError, match="SKU001") as exc_info:
            service.add_product("SKU001", "Other", "", 1, 1)
        assert exc_info.value.sku == "SKU001"
        assert repo.product_saves == 1
        assert len(service.list_products()) == 1

    @pytest.mark.parametrize("sku", ["", "   ", "\t"])
    def test_blank_sku_rejected(self, sku):
        service, repo, _ = _setup()
        with pytest.raises(ValidationError, match="SKU cannot be empty"):
            service.add_product(sku, "Widget", "", 1, 1)
        assert repo.save_count == 0

    @pytest.mark.parametrize("name", ["", "  "])
    def test_blank_name_rejected(self, name):
        service, repo, _ = _setup()
        with pytest.raises(ValidationError, match="Name cannot be empty"):
            service.add_product("SKU001", name, "", 1, 1)
        assert repo.save_count == 0
        assert service.list_products() == []

    def test_negative_quantity_rejected(self):
        service, repo, _ = _setup()
        with pytest.raises(ValidationError, match="cannot be negative"):
            service.add_product("SKU001", "Widget", "", -1, 0)
        assert repo.save_count == 0

    def test_returned_product_is_a_copy(self):
        service, _, _ = _setup()
        product = service.add_product("SKU001", "Widget", "", 5, 1)
        product.quantity = 999
        assert service.get_product("SKU001").quantity == 5


class TestUpdateProduct:

    def test_updates_supplied_fields_only(self):
        service, _, _ = _with_widget()
        updated = service.update_product("SKU001", name="Gizmo", reorder_point=30)

        assert updated.name == "Gizmo"
        assert updated.reorder_point == 30
        assert updated.description == "useful"
        assert updated.quantity == 100

    def test_updates_description(self):
        service, _, _ = _with_widget()
        assert service.update_product("SKU001", description="").description == ""

    def test_persists(self):
        service, repo, _ = _with_widget()
        service.update_product("SKU001", name="Gizmo")
        assert repo.product_saves == 2
        assert repo.product("SKU001").name == "Gizmo"

    def test_no_fields_is_noop_on_content(self):
        service, _, _ = _with_widget()
        before = service.list_products()
        service.update_product("SKU001")
        assert service.list_products() == before

    def test_unknown_sku_rejected(self):
        service, repo, _ = _setup()
        with pytest.raises(ProductNotFoundError, match="NOPE") as exc_info:
            service.update_product("NOPE", name="x")
        assert exc_info.value.sku == "NOPE"
        assert repo.save_count == 0

    def test_blank_name_rejected_before_any_change(self):
        service, repo, _ = _with_widget()
        with pytest.raises(ValidationError, match="Name cannot be empty"):
            service.update_product(
                "SKU001", name="  ", description="changed", reorder_point=1
            )
        product = service.get_product("SKU001")
        assert product.description == "useful"
        assert product.reorder_point == 20
        assert repo.product_saves == 1


class TestAddStock:

    def test_increments_quantity_and_records_addition(self):
        service, _, _ = _with_widget(quantity=10)
        txn = service.add_stock("SKU001", 5, "Received shipment")

        assert service.get_product("SKU001").quantity == 15
        assert txn.transaction_type is TransactionType.ADDITION
        assert txn.quantity == 5
        assert txn.product_sku == "SKU001"
        assert txn.notes == "Received shipment"
        assert txn.timestamp == T0
        assert service.get_transactions("SKU001") == [txn]

    def test_saves_products_then_transactions(self):
        service, repo, _ = _with_widget()
        service.add_stock("SKU001", 5)
        assert repo.product_saves == 2
        assert repo.transaction_saves == 1
        assert repo.product("SKU001").quantity == 105
        assert len(repo.transactions) == 1

    def test_zero_quantity_rejected(self):
        service, repo, _ = _with_widget()
        with pytest.raises(ValidationError, match="must be positive"):
            service.add_stock("SKU001", 0)
        assert service.get_transactions("SKU001") == []
        assert repo.save_count == 1

    def test_zero_quantity_checked_before_existence(self):
        service, _, _ = _setup()
        with pytest.raises(ValidationError):
            service.add_stock("NOPE", 0)

    def test_unknown_sku_rejected(self):
        service, repo, _ = _setup()
        with pytest.raises(ProductNotFoundError):
            service.add_stock("NOPE", 3)
        assert repo.save_count == 0


class TestRemoveStock:

    def test_decrements_quantity_and_records_removal(self):
        service, _, _ = _with_widget(quantity=10, reorder_point=5)
        txn = service.remove_stock("SKU001", 8)

        product = service.get_product("SKU001")
        assert product.quantity == 2
        assert product.is_low_stock
        assert txn.transaction_type is TransactionType.REMOVAL
        assert txn.quantity == 8
        assert txn.notes is None

    def test_remove_everything(self):
        service, _, _ = _with_widget(quantity=10)
        service.remove_stock("SKU001", 10)
        assert service.get_product("SKU001").quantity == 0

    def test_insufficient_stock_rejected(self):
        service, repo, _ = _with_widget(quantity=5, reorder_point=0)
        with pytest.raises(InsufficientStockError) as exc_info:
            service.remove_stock("SKU001", 10)

        err = exc_info.value
        assert (err.sku, err.requested, err.available) == ("SKU001", 10, 5)
        assert service.get_product("SKU001").quantity == 5
        assert service.get_transactions("SKU001") == []
        assert repo.save_count == 1

    def test_zero_quantity_rejected(self):
        service, _, _ = _with_widget()
        with pytest.raises(ValidationError, match="must be positive"):
            service.remove_stock("SKU001", 0)

    def test_unknown_sku_rejected(self):
        service, _, _ = _setup()
        with pytest.raises(ProductNotFoundError):
            service.remove_stock("NOPE", 1)


class TestQueries:

    def test_get_unknown_product(self):
        service, _, _ = _setup()
        with pytest.raises(ProductNotFoundError):
            service.get_product("NOPE")

    def test_list_products(self):
        service, _, _ = _setup()
        service.add_product("A", "a", "", 1, 0)
        service.add_product("B", "b", "", 2, 0)
        assert sorted(p.sku for p in service.list_products()) == ["A", "B"]

    def test_list_low_stock(self):
        service, _, _ = _setup()
        service.add_product("A", "a", "", 3, 10)
        service.add_product("B", "b", "", 100, 10)
        service.add_product("C", "c", "", 10, 10)
        assert sorted(p.sku for p in service.list_low_stock()) == ["A", "C"]

    def test_reads_do_not_save(self):
        service, repo, _ = _with_widget()
        service.get_product("SKU001")
        service.list_products()
        service.list_low_stock()
        service.get_transactions("SKU001")
        assert repo.save_count == 1


class TestTransactionHistory:

    def test_filters_by_sku(self):
        service, _, _ = _setup()
        service.add_product("A", "a", "", 10, 0)
        service.add_product("B", "b", "", 10, 0)
        service.add_stock("A", 1)
        service.add_stock("B", 2)
        service.remove_stock("A", 3)

        history = service.get_transactions("A")
        assert [t.quantity for t in history] == [1, 3]
        assert all(t.product_sku == "A" for t in history)

    def test_unknown_sku_gives_empty_history(self):
        service, _, _ = _setup()
        assert service.get_transactions("NOPE") == []

    def test_sorted_by_timestamp(self):
        late = Transaction("t-1", "A", TransactionType.ADDITION, 1, T0 + timedelta(hours=2))
        early = Transaction("t-2", "A", TransactionType.ADDITION, 2, T0)
        middle = Transaction("t-3", "A", TransactionType.REMOVAL, 1, T0 + timedelta(hours=1))
        service, _, _ = _setup(
            [Product("p", "A", "a", "", 2, 0)], [late, early, middle]
        )
        assert service.get_transactions("A") == [early, middle, late]

    def test_equal_timestamps_keep_insertion_order(self):
        service, _, clock = _with_widget()
        clock.step = timedelta(0)
        first = service.add_stock("SKU001", 1)
        second = service.remove_stock("SKU001", 2)
        third = service.add_stock("SKU001", 3)
        assert service.get_transactions("SKU001") == [first, second, third]

    def test_range_is_inclusive(self):
        service, _, _ = _with_widget()
        txns = [service.add_stock("SKU001", n) for n in (1, 2, 3, 4)]
        # FakeClock steps one minute per call: T0, T0+1m, T0+2m, T0+3m
        window = service.get_transactions_in_range(
            "SKU001", T0 + timedelta(minutes=1), T0 + timedelta(minutes=2)
        )
        assert window == txns[1:3]

    def test_range_excluding_everything(self):
        service, _, _ = _with_widget()
        service.add_stock("SKU001", 1)
        assert service.get_transactions_in_range(
            "SKU001", T0 + timedelta(days=1), T0 + timedelta(days=2)
        ) == []

    def test_range_with_naive_bounds_reads_utc(self):
        service, _, _ = _with_widget()
        txn = service.add_stock("SKU001", 1)
        window = service.get_transactions_in_range(
            "SKU001", datetime(2025, 1, 1, 12, 0), datetime(2025, 1, 1, 12, 0)
        )
        assert window == [txn]


class TestDeleteProduct:

    def test_removes_product_and_its_transactions(self):
        service, repo, _ = _setup()
        service.add_product("X", "x", "", 5, 0)
        service.add_product("Y", "y", "", 5, 0)
        service.add_stock("X", 10)
        service.add_stock("Y", 1)

        service.delete_product("X")

        with pytest.raises(ProductNotFoundError):
            service.get_product("X")
        assert service.get_transactions("X") == []
        assert len(service.get_transactions("Y")) == 1
        assert repo.product("X") is None
        assert all(t.product_sku != "X" for t in repo.transactions)

    def test_allowed_with_stock_on_hand(self):
        service, _, _ = _with_widget(quantity=100)
        service.delete_product("SKU001")
        assert service.list_products() == []

    def test_saves_both_collections(self):
        service, repo, _ = _with_widget()
        service.delete_product("SKU001")
        assert repo.product_saves == 2
        assert repo.transaction_saves == 1

    def test_unknown_sku_rejected(self):
        service, repo, _ = _setup()
        with pytest.raises(ProductNotFoundError):
            service.delete_product("NOPE")
        assert repo.save_count == 0

    def test_sku_can_be_reused_after_delete(self):
        service, _, _ = _with_widget()
        service.delete_product("SKU001")
        product = service.add_product("SKU001", "Widget 2", "", 1, 0)
        assert product.name == "Widget 2"


class TestPersistenceFailures:
    """Storage errors surface after the in-memory mutation, without rollback."""

    def test_add_product_save_failure_keeps_memory_state(self):
        service, repo, _ = _setup()
        repo.fail_product_saves = True
        with pytest.raises(StorageWriteError):
            service.add_product("SKU001", "Widget", "", 1, 0)
        assert service.get_product("SKU001").quantity == 1

    def test_split_save_leaves_products_written(self):
        service, repo, _ = _with_widget(quantity=10)
        repo.fail_transaction_saves = True
        with pytest.raises(StorageWriteError):
            service.add_stock("SKU001", 5)

        assert service.get_product("SKU001").quantity == 15
        assert len(service.get_transactions("SKU001")) == 1
        # products were saved, the ledger was not
        assert repo.product("SKU001").quantity == 15
        assert repo.transactions == []

    def test_products_save_failure_skips_transactions_save(self):
        service, repo, _ = _with_widget(quantity=10)
        repo.fail_product_saves = True
        with pytest.raises(StorageWriteError):
            service.remove_stock("SKU001", 5)
        assert repo.transaction_saves == 0
        assert service.get_product("SKU001").quantity == 5
