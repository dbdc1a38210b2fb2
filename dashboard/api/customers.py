# dashboard/api/customers.py

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.engine import Engine
from starlette.concurrency import run_in_threadpool

from dashboard.actions.customers import create_customer, delete_customer, update_customer
from dashboard.api.deps import cache_dep, engine_dep, result_response, settings_dep
from dashboard.cache import CUSTOMERS_PATH, PageCache, listing_variant
from dashboard.config import Settings
from dashboard.db.queries import fetch_customer_by_id, fetch_customers
from dashboard.models.customers import (
    CustomerFormPage,
    CustomerOut,
    CustomersPage,
    CustomerSummary,
)

router = APIRouter(prefix=CUSTOMERS_PATH, tags=["customers"])


@router.get("", response_model=CustomersPage)
def list_customers(
    query: str = Query("", description="Matches customer name or email"),
    engine: Engine = Depends(engine_dep),
    cache: PageCache = Depends(cache_dep),
) -> CustomersPage:
    """
    Return all customers with their invoice totals.
    """
    rows = cache.get_or_render(
        CUSTOMERS_PATH,
        lambda: fetch_customers(query, engine=engine),
        variant=listing_variant(query=query),
    )
    return CustomersPage(
        items=[CustomerSummary(**row) for row in rows],
        total=len(rows),
        query=query,
    )


@router.get("/create", response_model=CustomerFormPage)
def create_page() -> CustomerFormPage:
    return CustomerFormPage()


@router.post("/create")
async def create(
    request: Request,
    engine: Engine = Depends(engine_dep),
    cache: PageCache = Depends(cache_dep),
    settings: Settings = Depends(settings_dep),
):
    form = await request.form()
    result = await run_in_threadpool(
        create_customer, None, form, engine=engine, cache=cache, settings=settings
    )
    return result_response(result)


@router.get("/{customer_id}/edit", response_model=CustomerFormPage)
def edit_page(customer_id: str, engine: Engine = Depends(engine_dep)) -> CustomerFormPage:
    customer = fetch_customer_by_id(customer_id, engine=engine)
    if customer is None:
        raise HTTPException(status_code=404, detail="Customer not found")

    return CustomerFormPage(customer=CustomerOut(**customer))


@router.post("/{customer_id}/edit")
async def edit(
    customer_id: str,
    request: Request,
    engine: Engine = Depends(engine_dep),
    cache: PageCache = Depends(cache_dep),
    settings: Settings = Depends(settings_dep),
):
    form = await request.form()
    result = await run_in_threadpool(
        update_customer,
        customer_id,
        None,
        form,
        engine=engine,
        cache=cache,
        settings=settings,
    )
    return result_response(result)


@router.post("/{customer_id}/delete")
def delete(
    customer_id: str,
    engine: Engine = Depends(engine_dep),
    cache: PageCache = Depends(cache_dep),
):
    return result_response(delete_customer(customer_id, engine=engine, cache=cache))
