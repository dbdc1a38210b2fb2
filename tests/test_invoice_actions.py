"""Tests for the invoice create/update/delete actions."""

from datetime import date
from decimal import Decimal

import threading

import pytest
from sqlalchemy import func, select

import dashboard.actions.invoices as invoice_actions
from dashboard.actions.invoices import (
    create_invoice,
    delete_invoice,
    to_minor_units,
    update_invoice,
)
from dashboard.actions.results import ExecutionFailure, State, Success, ValidationFailure
from dashboard.cache import CUSTOMERS_PATH, INVOICES_PATH, PageCache
from dashboard.db.queries import fetch_customers
from dashboard.db.schema import invoices

from tests.conftest import DELBA_ID, LEE_ID


class RecordingCache(PageCache):
    def __init__(self):
        super().__init__()
        self.revalidated = []

    def revalidate_path(self, path):
        self.revalidated.append(path)
        super().revalidate_path(path)


def count_invoices(engine):
    with engine.connect() as conn:
        return conn.execute(select(func.count()).select_from(invoices)).scalar_one()


def get_invoice(engine, id):
    with engine.connect() as conn:
        return conn.execute(select(invoices).where(invoices.c.id == id)).mappings().first()


@pytest.fixture
def fixed_today(monkeypatch):
    today = date(2026, 10, 18)
    monkeypatch.setattr(invoice_actions, "current_date", lambda: today)
    return today


class TestMinorUnits:
    @pytest.mark.parametrize(
        "amount, cents",
        [
            ("19.99", 1999),
            ("100", 10000),
            ("0.5", 50),
            ("19.999", 1999),
            ("0.019", 1),
        ],
    )
    def test_conversion_truncates_to_cents(self, amount, cents):
        assert to_minor_units(Decimal(amount)) == cents


class TestCreateInvoice:
    def test_create_stores_row_and_redirects(self, seeded, fixed_today):
        cache = RecordingCache()
        cache.get_or_render(INVOICES_PATH, lambda: "stale listing")

        result = create_invoice(
            State(),
            {"customerId": LEE_ID, "amount": "19.99", "status": "paid"},
            engine=seeded,
            cache=cache,
        )

        assert result == Success(next_path="/dashboard/invoices")
        assert cache.revalidated == [INVOICES_PATH, CUSTOMERS_PATH]
        assert not cache.is_cached(INVOICES_PATH)

        with seeded.connect() as conn:
            row = conn.execute(
                select(invoices).where(invoices.c.customer_id == LEE_ID)
            ).mappings().one()
        assert row["amount"] == 1999
        assert row["status"] == "paid"
        assert row["date"].isoformat() == "2026-10-18"
        assert row["id"]

    def test_date_is_stamped_without_time(self, seeded):
        create_invoice(
            None,
            {"customerId": LEE_ID, "amount": "1", "status": "pending"},
            engine=seeded,
            cache=PageCache(),
        )

        with seeded.connect() as conn:
            row = conn.execute(
                select(invoices.c.date).where(invoices.c.customer_id == LEE_ID)
            ).one()
        assert len(row.date.isoformat()) == len("YYYY-MM-DD")

    @pytest.mark.parametrize(
        "amount", ["0", "-10", "ten", "", "0.001", "0.009", "1e30", "21474836.48"]
    )
    def test_invalid_amount_writes_nothing(self, seeded, amount):
        cache = RecordingCache()

        result = create_invoice(
            None,
            {"customerId": LEE_ID, "amount": amount, "status": "pending"},
            engine=seeded,
            cache=cache,
        )

        assert isinstance(result, ValidationFailure)
        assert result.errors == {"amount": ["Please enter an amount greater than $0."]}
        assert result.message == "Missing Fields. Failed to Create Invoice."
        assert count_invoices(seeded) == 1
        assert cache.revalidated == []

    def test_largest_amount_fits_column(self, seeded):
        result = create_invoice(
            None,
            {"customerId": LEE_ID, "amount": "21474836.47", "status": "pending"},
            engine=seeded,
            cache=PageCache(),
        )

        assert isinstance(result, Success)
        with seeded.connect() as conn:
            amount = conn.execute(
                select(invoices.c.amount).where(invoices.c.customer_id == LEE_ID)
            ).scalar_one()
        assert amount == 2147483647

    def test_customers_listing_sees_new_invoice(self, seeded):
        cache = PageCache()

        def render():
            return fetch_customers(engine=seeded)

        before = {c["id"]: c for c in cache.get_or_render(CUSTOMERS_PATH, render)}
        assert before[LEE_ID]["total_invoices"] == 0

        create_invoice(
            None,
            {"customerId": LEE_ID, "amount": "5", "status": "pending"},
            engine=seeded,
            cache=cache,
        )

        after = {c["id"]: c for c in cache.get_or_render(CUSTOMERS_PATH, render)}
        assert after[LEE_ID]["total_invoices"] == 1
        assert after[LEE_ID]["total_pending"] == Decimal("5.00")

    def test_invalid_status(self, seeded):
        result = create_invoice(
            None,
            {"customerId": LEE_ID, "amount": "10", "status": "overdue"},
            engine=seeded,
            cache=PageCache(),
        )

        assert result.errors == {"status": ["Please select an invoice status."]}
        assert result.to_state() == State(
            errors={"status": ["Please select an invoice status."]},
            message="Missing Fields. Failed to Create Invoice.",
        )

    def test_unknown_customer_is_rejected_by_store(self, seeded):
        cache = RecordingCache()

        result = create_invoice(
            None,
            {"customerId": "no-such-customer", "amount": "10", "status": "pending"},
            engine=seeded,
            cache=cache,
        )

        assert result == ExecutionFailure("Database Error: Failed to Create Invoice.")
        assert result.to_state() == State(message="Database Error: Failed to Create Invoice.")
        assert count_invoices(seeded) == 1
        assert cache.revalidated == []

    def test_store_failure(self, broken_engine):
        result = create_invoice(
            None,
            {"customerId": LEE_ID, "amount": "10", "status": "pending"},
            engine=broken_engine,
            cache=PageCache(),
        )

        assert result == ExecutionFailure("Database Error: Failed to Create Invoice.")


class TestUpdateInvoice:
    def test_update_overwrites_row_and_keeps_date(self, seeded):
        cache = RecordingCache()

        result = update_invoice(
            "inv-1",
            None,
            {"customerId": LEE_ID, "amount": "42.10", "status": "paid"},
            engine=seeded,
            cache=cache,
        )

        assert result == Success(next_path=INVOICES_PATH)
        assert cache.revalidated == [INVOICES_PATH, CUSTOMERS_PATH]
        row = get_invoice(seeded, "inv-1")
        assert row["customer_id"] == LEE_ID
        assert row["amount"] == 4210
        assert row["status"] == "paid"
        assert row["date"] == date(2022, 12, 6)

    def test_validation_failure_leaves_row_untouched(self, seeded):
        result = update_invoice(
            "inv-1",
            None,
            {"customerId": "", "amount": "-1", "status": "paid"},
            engine=seeded,
            cache=PageCache(),
        )

        assert isinstance(result, ValidationFailure)
        assert set(result.errors) == {"customerId", "amount"}
        assert result.message == "Missing Fields. Failed to Update Invoice."
        assert get_invoice(seeded, "inv-1")["amount"] == 15795

    def test_concurrent_updates_last_write_wins(self, file_engine):
        writes = [
            {"customerId": DELBA_ID, "amount": "10", "status": "pending"},
            {"customerId": LEE_ID, "amount": "20", "status": "paid"},
        ]
        barrier = threading.Barrier(len(writes))
        results = []

        def write(form_data):
            barrier.wait()
            results.append(
                update_invoice("inv-1", None, form_data, engine=file_engine, cache=PageCache())
            )

        threads = [threading.Thread(target=write, args=(data,)) for data in writes]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == 2
        assert all(isinstance(r, Success) for r in results)
        row = get_invoice(file_engine, "inv-1")
        assert (row["customer_id"], row["amount"], row["status"]) in {
            (DELBA_ID, 1000, "pending"),
            (LEE_ID, 2000, "paid"),
        }

    def test_store_failure(self, broken_engine):
        result = update_invoice(
            "inv-1",
            None,
            {"customerId": LEE_ID, "amount": "10", "status": "pending"},
            engine=broken_engine,
            cache=PageCache(),
        )

        assert result == ExecutionFailure("Database Error: Failed to Update Invoice.")


class TestDeleteInvoice:
    def test_delete_removes_row(self, seeded):
        cache = RecordingCache()

        result = delete_invoice("inv-1", engine=seeded, cache=cache)

        assert result == Success(next_path=INVOICES_PATH, message="Deleted Invoice.")
        assert cache.revalidated == [INVOICES_PATH, CUSTOMERS_PATH]
        assert get_invoice(seeded, "inv-1") is None

    def test_delete_missing_id_is_noop(self, seeded):
        result = delete_invoice("does-not-exist", engine=seeded, cache=PageCache())

        assert isinstance(result, Success)
        assert count_invoices(seeded) == 1

    def test_delete_store_failure(self, broken_engine):
        cache = RecordingCache()

        result = delete_invoice("does-not-exist", engine=broken_engine, cache=cache)

        assert result == ExecutionFailure("Database Error: Failed to Delete Invoice.")
        assert cache.revalidated == []


    def test_delete_drops_cached_customers_listing(self, seeded):
        cache = PageCache()
        cache.get_or_render(CUSTOMERS_PATH, lambda: fetch_customers(engine=seeded))

        delete_invoice("inv-1", engine=seeded, cache=cache)

        assert not cache.is_cached(CUSTOMERS_PATH)
        delba = next(c for c in fetch_customers(engine=seeded) if c["id"] == DELBA_ID)
        assert delba["total_invoices"] == 0
