# dashboard/api/invoices.py

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.engine import Engine
from starlette.concurrency import run_in_threadpool

from dashboard.actions.invoices import create_invoice, delete_invoice, update_invoice
from dashboard.api.deps import cache_dep, engine_dep, result_response, settings_dep
from dashboard.cache import INVOICES_PATH, PageCache, listing_variant
from dashboard.config import Settings
from dashboard.db.queries import fetch_customer_choices, fetch_invoice_by_id, fetch_invoices
from dashboard.models.invoices import (
    CustomerField,
    InvoiceEditPage,
    InvoiceFormValues,
    InvoiceOut,
    InvoicesPage,
)

router = APIRouter(prefix=INVOICES_PATH, tags=["invoices"])


@router.get("", response_model=InvoicesPage)
def list_invoices(
    query: str = Query("", description="Matches customer name/email, amount, date or status"),
    page: int = Query(1, ge=1),
    engine: Engine = Depends(engine_dep),
    cache: PageCache = Depends(cache_dep),
    settings: Settings = Depends(settings_dep),
) -> InvoicesPage:
    """
    Paged invoice listing. Served from the page cache until an invoice
    mutation revalidates it.
    """
    data = cache.get_or_render(
        INVOICES_PATH,
        lambda: fetch_invoices(query, page, settings.invoices_page_size, engine=engine),
        variant=listing_variant(query=query, page=page),
    )
    return InvoicesPage(
        items=[InvoiceOut(**item) for item in data["items"]],
        total=data["total"],
        page=data["page"],
        total_pages=data["total_pages"],
        query=data["query"],
    )


@router.post("/create")
async def create(
    request: Request,
    engine: Engine = Depends(engine_dep),
    cache: PageCache = Depends(cache_dep),
):
    form = await request.form()
    result = await run_in_threadpool(create_invoice, None, form, engine=engine, cache=cache)
    return result_response(result)


@router.get("/{invoice_id}/edit", response_model=InvoiceEditPage)
def edit_page(invoice_id: str, engine: Engine = Depends(engine_dep)) -> InvoiceEditPage:
    invoice = fetch_invoice_by_id(invoice_id, engine=engine)
    if invoice is None:
        raise HTTPException(status_code=404, detail="Invoice not found")

    return InvoiceEditPage(
        invoice=InvoiceFormValues(**invoice),
        customers=[CustomerField(**c) for c in fetch_customer_choices(engine=engine)],
    )


@router.post("/{invoice_id}/edit")
async def edit(
    invoice_id: str,
    request: Request,
    engine: Engine = Depends(engine_dep),
    cache: PageCache = Depends(cache_dep),
):
    form = await request.form()
    result = await run_in_threadpool(
        update_invoice, invoice_id, None, form, engine=engine, cache=cache
    )
    return result_response(result)


@router.post("/{invoice_id}/delete")
def delete(
    invoice_id: str,
    engine: Engine = Depends(engine_dep),
    cache: PageCache = Depends(cache_dep),
):
    return result_response(delete_invoice(invoice_id, engine=engine, cache=cache))
