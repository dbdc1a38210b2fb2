# dashboard/db/queries.py
"""Read queries backing the dashboard pages."""

from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import String, case, cast, func, or_, select
from sqlalchemy.engine import Engine

from dashboard.db.engine import get_engine
from dashboard.db.schema import customers, invoices


CENT = Decimal("0.01")


def from_minor_units(amount: Optional[int]) -> Decimal:
    return (Decimal(amount or 0) / 100).quantize(CENT)


def _invoice_search(query: str):
    pattern = f"%{query}%"
    return or_(
        customers.c.name.ilike(pattern),
        customers.c.email.ilike(pattern),
        cast(invoices.c.amount, String).ilike(pattern),
        cast(invoices.c.date, String).ilike(pattern),
        invoices.c.status.ilike(pattern),
    )


def fetch_invoices(
    query: str = "",
    page: int = 1,
    page_size: int = 6,
    engine: Optional[Engine] = None,
) -> Dict[str, Any]:
    """
    Invoices joined with their customer, newest first, filtered by `query`
    and paged by `page_size`.
    """
    engine = engine or get_engine()
    page = max(page, 1)
    where = _invoice_search(query)

    with engine.connect() as conn:
        total = conn.execute(
            select(func.count())
            .select_from(invoices.join(customers))
            .where(where)
        ).scalar_one()

        stmt = (
            select(
                invoices.c.id,
                invoices.c.customer_id,
                customers.c.name,
                customers.c.email,
                customers.c.image_url,
                invoices.c.amount,
                invoices.c.status,
                invoices.c.date,
            )
            .select_from(invoices.join(customers))
            .where(where)
            .order_by(invoices.c.date.desc(), invoices.c.id)
            .limit(page_size)
            .offset((page - 1) * page_size)
        )
        rows = conn.execute(stmt).mappings().all()

    items = []
    for row in rows:
        item = dict(row)
        item["amount"] = from_minor_units(row["amount"])
        items.append(item)

    return {
        "items": items,
        "total": total,
        "page": page,
        "total_pages": (total + page_size - 1) // page_size,
        "query": query,
    }


def fetch_invoice_by_id(id: str, engine: Optional[Engine] = None) -> Optional[Dict[str, Any]]:
    engine = engine or get_engine()

    with engine.connect() as conn:
        row = conn.execute(
            select(
                invoices.c.id,
                invoices.c.customer_id,
                invoices.c.amount,
                invoices.c.status,
            ).where(invoices.c.id == id)
        ).mappings().first()

    if row is None:
        return None

    invoice = dict(row)
    invoice["amount"] = from_minor_units(row["amount"])
    return invoice


def fetch_customer_choices(engine: Optional[Engine] = None) -> List[Dict[str, Any]]:
    """id/name pairs for the customer select of the invoice forms."""
    engine = engine or get_engine()

    with engine.connect() as conn:
        rows = conn.execute(
            select(customers.c.id, customers.c.name).order_by(customers.c.name)
        ).mappings().all()

    return [dict(row) for row in rows]


def fetch_customers(query: str = "", engine: Optional[Engine] = None) -> List[Dict[str, Any]]:
    """Customers with invoice counts and pending/paid totals."""
    engine = engine or get_engine()
    pattern = f"%{query}%"

    total_pending = func.coalesce(
        func.sum(case((invoices.c.status == "pending", invoices.c.amount), else_=0)), 0
    )
    total_paid = func.coalesce(
        func.sum(case((invoices.c.status == "paid", invoices.c.amount), else_=0)), 0
    )

    with engine.connect() as conn:
        stmt = (
            select(
                customers.c.id,
                customers.c.name,
                customers.c.email,
                customers.c.image_url,
                func.count(invoices.c.id).label("total_invoices"),
                total_pending.label("total_pending"),
                total_paid.label("total_paid"),
            )
            .select_from(customers.outerjoin(invoices))
            .where(or_(customers.c.name.ilike(pattern), customers.c.email.ilike(pattern)))
            .group_by(
                customers.c.id,
                customers.c.name,
                customers.c.email,
                customers.c.image_url,
            )
            .order_by(customers.c.name)
        )
        rows = conn.execute(stmt).mappings().all()

    result = []
    for row in rows:
        customer = dict(row)
        customer["total_pending"] = from_minor_units(row["total_pending"])
        customer["total_paid"] = from_minor_units(row["total_paid"])
        result.append(customer)
    return result


def fetch_customer_by_id(id: str, engine: Optional[Engine] = None) -> Optional[Dict[str, Any]]:
    engine = engine or get_engine()

    with engine.connect() as conn:
        row = conn.execute(
            select(
                customers.c.id,
                customers.c.name,
                customers.c.email,
                customers.c.image_url,
            ).where(customers.c.id == id)
        ).mappings().first()

    return dict(row) if row is not None else None
