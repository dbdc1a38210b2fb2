# dashboard/models/invoices.py

from datetime import date
from decimal import Decimal
from typing import List, Literal

from pydantic import BaseModel, ConfigDict


class InvoiceOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    customer_id: str
    name: str
    email: str
    image_url: str
    # major units (dollars)
    amount: Decimal
    status: Literal["pending", "paid"]
    date: date


class InvoicesPage(BaseModel):
    items: List[InvoiceOut]
    total: int
    page: int
    total_pages: int
    query: str


class CustomerField(BaseModel):
    id: str
    name: str


class InvoiceFormValues(BaseModel):
    """Values the invoice edit form is pre-filled with."""

    id: str
    customer_id: str
    amount: Decimal
    status: Literal["pending", "paid"]


class InvoiceEditPage(BaseModel):
    invoice: InvoiceFormValues
    customers: List[CustomerField]
