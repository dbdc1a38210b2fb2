# dashboard/actions/customers.py

from typing import Any, Dict, Mapping, Optional

from sqlalchemy.engine import Engine

from dashboard.actions.base import execute_statement, revalidate_and_redirect
from dashboard.actions.results import ActionResult, State, ValidationFailure
from dashboard.cache import CUSTOMERS_PATH, INVOICES_PATH, PageCache
from dashboard.config import Settings, get_settings
from dashboard.db.schema import customers
from dashboard.models.forms import CustomerForm, parse_form


def _customer_fields(form_data: Mapping[str, Any]) -> Dict[str, Any]:
    # browser field names -> form schema names
    return {
        "customerName": form_data.get("name"),
        "customerEmail": form_data.get("email"),
        "customerImageUrl": form_data.get("image_url"),
    }


def _parse(form_data: Mapping[str, Any], settings: Optional[Settings]):
    settings = settings or get_settings()
    return parse_form(
        CustomerForm,
        _customer_fields(form_data),
        image_url_policy=settings.image_url_policy,
    )


def create_customer(
    prev_state: Optional[State],
    form_data: Mapping[str, Any],
    *,
    engine: Optional[Engine] = None,
    cache: Optional[PageCache] = None,
    settings: Optional[Settings] = None,
) -> ActionResult:
    record, errors = _parse(form_data, settings)
    if errors:
        return ValidationFailure(
            errors=errors,
            message="Missing Fields. Failed to Create Customer.",
        )

    stmt = customers.insert().values(
        name=record.customer_name,
        email=record.customer_email,
        image_url=record.customer_image_url,
    )
    failure = execute_statement(
        stmt,
        operation="create_customer",
        failure_message="Database Error: Failed to Create Customer.",
        engine=engine,
    )
    if failure:
        return failure

    return revalidate_and_redirect(CUSTOMERS_PATH, cache=cache)


def update_customer(
    id: str,
    prev_state: Optional[State],
    form_data: Mapping[str, Any],
    *,
    engine: Optional[Engine] = None,
    cache: Optional[PageCache] = None,
    settings: Optional[Settings] = None,
) -> ActionResult:
    record, errors = _parse(form_data, settings)
    if errors:
        return ValidationFailure(
            errors=errors,
            message="Missing Fields. Failed to Update Customer.",
        )

    stmt = (
        customers.update()
        .where(customers.c.id == id)
        .values(
            name=record.customer_name,
            email=record.customer_email,
            image_url=record.customer_image_url,
        )
    )
    failure = execute_statement(
        stmt,
        operation="update_customer",
        failure_message="Database Error: Failed to Update Customer.",
        engine=engine,
    )
    if failure:
        return failure

    # the invoices listing shows customer name, email and image
    return revalidate_and_redirect(CUSTOMERS_PATH, also=(INVOICES_PATH,), cache=cache)


def delete_customer(
    id: str,
    *,
    engine: Optional[Engine] = None,
    cache: Optional[PageCache] = None,
) -> ActionResult:
    # Fails with a database error while invoices still reference the customer.
    failure = execute_statement(
        customers.delete().where(customers.c.id == id),
        operation="delete_customer",
        failure_message="Database Error: Failed to Delete Customer.",
        engine=engine,
    )
    if failure:
        return failure

    return revalidate_and_redirect(CUSTOMERS_PATH, cache=cache, message="Deleted Customer.")
