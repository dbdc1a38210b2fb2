# dashboard/actions/invoices.py

from datetime import date, datetime, timezone
from typing import Any, Dict, Mapping, Optional

from sqlalchemy.engine import Engine

from dashboard.actions.base import execute_statement, revalidate_and_redirect
from dashboard.actions.results import ActionResult, State, ValidationFailure
from dashboard.cache import CUSTOMERS_PATH, INVOICES_PATH, PageCache
from dashboard.db.schema import invoices
from dashboard.models.forms import InvoiceForm, parse_form, to_minor_units


def current_date() -> date:
    return datetime.now(timezone.utc).date()


def _invoice_fields(form_data: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "customerId": form_data.get("customerId"),
        "amount": form_data.get("amount"),
        "status": form_data.get("status"),
    }


def create_invoice(
    prev_state: Optional[State],
    form_data: Mapping[str, Any],
    *,
    engine: Optional[Engine] = None,
    cache: Optional[PageCache] = None,
) -> ActionResult:
    record, errors = parse_form(InvoiceForm, _invoice_fields(form_data))
    if errors:
        return ValidationFailure(
            errors=errors,
            message="Missing Fields. Failed to Create Invoice.",
        )

    stmt = invoices.insert().values(
        customer_id=record.customer_id,
        amount=to_minor_units(record.amount),
        status=record.status,
        date=current_date(),
    )
    failure = execute_statement(
        stmt,
        operation="create_invoice",
        failure_message="Database Error: Failed to Create Invoice.",
        engine=engine,
    )
    if failure:
        return failure

    return revalidate_and_redirect(INVOICES_PATH, also=(CUSTOMERS_PATH,), cache=cache)


def update_invoice(
    id: str,
    prev_state: Optional[State],
    form_data: Mapping[str, Any],
    *,
    engine: Optional[Engine] = None,
    cache: Optional[PageCache] = None,
) -> ActionResult:
    """Overwrite customer, amount and status of invoice `id`. The date is kept."""
    record, errors = parse_form(InvoiceForm, _invoice_fields(form_data))
    if errors:
        return ValidationFailure(
            errors=errors,
            message="Missing Fields. Failed to Update Invoice.",
        )

    stmt = (
        invoices.update()
        .where(invoices.c.id == id)
        .values(
            customer_id=record.customer_id,
            amount=to_minor_units(record.amount),
            status=record.status,
        )
    )
    failure = execute_statement(
        stmt,
        operation="update_invoice",
        failure_message="Database Error: Failed to Update Invoice.",
        engine=engine,
    )
    if failure:
        return failure

    return revalidate_and_redirect(INVOICES_PATH, also=(CUSTOMERS_PATH,), cache=cache)


def delete_invoice(
    id: str,
    *,
    engine: Optional[Engine] = None,
    cache: Optional[PageCache] = None,
) -> ActionResult:
    # Deleting an id that does not exist is a no-op.
    failure = execute_statement(
        invoices.delete().where(invoices.c.id == id),
        operation="delete_invoice",
        failure_message="Database Error: Failed to Delete Invoice.",
        engine=engine,
    )
    if failure:
        return failure

    return revalidate_and_redirect(
        INVOICES_PATH, also=(CUSTOMERS_PATH,), cache=cache, message="Deleted Invoice."
    )
