# dashboard/models/customers.py

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class CustomerOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    image_url: str


class CustomerSummary(CustomerOut):
    total_invoices: int
    # major units (dollars)
    total_pending: Decimal
    total_paid: Decimal


class CustomersPage(BaseModel):
    items: List[CustomerSummary]
    total: int
    query: str


class CustomerFormPage(BaseModel):
    """Field names and current values of a customer form."""

    fields: List[str] = ["name", "email", "image_url"]
    customer: Optional[CustomerOut] = None
