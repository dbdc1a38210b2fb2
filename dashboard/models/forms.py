# dashboard/models/forms.py
"""
Form schemas for the dashboard mutations.

Each browser form is parsed into a pydantic model. Every field is validated
independently, so one submission reports all of its invalid fields at once.
Failures are flattened into a field error map: field name -> list of messages,
using the fixed message of the field.
"""

import re
from decimal import Decimal, ROUND_DOWN
from typing import Annotated, Any, Dict, List, Literal, Mapping, Optional, Tuple, Type, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    HttpUrl,
    StringConstraints,
    TypeAdapter,
    ValidationError,
    ValidationInfo,
    field_validator,
)

FieldErrors = Dict[str, List[str]]

FIELD_MESSAGES: Dict[str, str] = {
    "customerId": "Please select a customer.",
    "amount": "Please enter an amount greater than $0.",
    "status": "Please select an invoice status.",
    "customerName": "Please enter a customer name.",
    "customerEmail": "Please enter a valid email address.",
    "customerImageUrl": "Please enter a valid URL or leave it empty.",
}

INVOICE_STATUSES = ("pending", "paid")

# largest amount whose cent value fits a 32-bit INTEGER column
MAX_AMOUNT = Decimal("21474836.47")

IMAGE_EXTENSIONS = ("png", "jpg", "jpeg", "gif", "svg")
IMAGE_PATH_RE = re.compile(
    r"^(/[\w-]+)+\.(%s)$" % "|".join(IMAGE_EXTENSIONS),
    re.IGNORECASE | re.ASCII,
)

_http_url = TypeAdapter(HttpUrl)


def to_minor_units(amount: Decimal) -> int:
    """Dollars -> cents, truncating anything below a cent: 19.999 -> 1999."""
    return int((amount * 100).to_integral_value(rounding=ROUND_DOWN))


def is_valid_image_url(value: str, policy: str = "path") -> bool:
    """
    '' always passes. Under the 'path' policy the value must be an absolute
    path ending in an image extension; under 'url' it must be an http(s) URL.
    """
    if value == "":
        return True
    if policy == "url":
        try:
            _http_url.validate_python(value)
        except ValidationError:
            return False
        return True
    return IMAGE_PATH_RE.match(value) is not None


class InvoiceForm(BaseModel):
    """Fields of the invoice create/update forms."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    customer_id: Annotated[str, StringConstraints(min_length=1)] = Field(alias="customerId")
    amount: Decimal = Field(gt=0, le=MAX_AMOUNT, allow_inf_nan=False)
    status: Literal["pending", "paid"]

    @field_validator("amount")
    @classmethod
    def _check_whole_cents(cls, value: Decimal) -> Decimal:
        if to_minor_units(value) <= 0:
            raise ValueError(FIELD_MESSAGES["amount"])
        return value


class CustomerForm(BaseModel):
    """Fields of the customer create/update forms."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    customer_name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)] = Field(
        alias="customerName"
    )
    customer_email: EmailStr = Field(alias="customerEmail")
    customer_image_url: str = Field(alias="customerImageUrl")

    @field_validator("customer_image_url")
    @classmethod
    def _check_image_url(cls, value: str, info: ValidationInfo) -> str:
        policy = (info.context or {}).get("image_url_policy", "path")
        if not is_valid_image_url(value, policy):
            raise ValueError(FIELD_MESSAGES["customerImageUrl"])
        return value


FormT = TypeVar("FormT", bound=BaseModel)


def flatten_errors(exc: ValidationError) -> FieldErrors:
    errors: FieldErrors = {}
    for err in exc.errors():
        field = str(err["loc"][0]) if err["loc"] else "form"
        message = FIELD_MESSAGES.get(field, err["msg"])
        messages = errors.setdefault(field, [])
        if message not in messages:
            messages.append(message)
    return errors


def parse_form(
    form_cls: Type[FormT],
    data: Mapping[str, Any],
    image_url_policy: str = "path",
) -> Tuple[Optional[FormT], Optional[FieldErrors]]:
    """
    Validate `data` against `form_cls`.

    Returns (record, None) on success and (None, field_errors) on failure.
    """
    try:
        record = form_cls.model_validate(
            dict(data),
            context={"image_url_policy": image_url_policy},
        )
    except ValidationError as e:
        return None, flatten_errors(e)
    return record, None
