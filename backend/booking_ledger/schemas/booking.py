"""
Pydantic schemas for bookings.

Field names on the wire (storage slot, export file, HTTP) are camelCase;
Python code uses the snake_case attribute names.
"""

from typing import Any, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator
from pydantic.alias_generators import to_camel

from booking_ledger.services.amounts import (
    format_amount,
    format_display_date,
    json_number,
    parse_amount,
    payment_status,
    remaining_amount,
)

REQUIRED_FIELDS = ("date", "location", "phone")

AmountInput = Union[str, float, None]


class Booking(BaseModel):
    """
    A stored booking. Immutable: edits replace the record in the store.

    Amounts must be real JSON numbers and the required text fields
    non-empty; stored and imported data is not coerced.
    """

    id: str = Field(min_length=1)
    date: str = Field(min_length=1)
    location: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    total_price: float = Field(default=0.0, strict=True, allow_inf_nan=False)
    paid_amount: float = Field(default=0.0, strict=True, allow_inf_nan=False)
    remaining_amount: float = Field(default=0.0, strict=True, allow_inf_nan=False)
    details: str = ""
    created_at: str = Field(min_length=1)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    @field_validator("total_price", "paid_amount", "remaining_amount", mode="before")
    @classmethod
    def reject_booleans(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("amount must be a number, not a boolean")
        return value

    @model_validator(mode="after")
    def derive_remaining_amount(self) -> "Booking":
        # remainingAmount is never taken from input; frozen, so bypass __setattr__
        object.__setattr__(
            self, "remaining_amount", remaining_amount(self.total_price, self.paid_amount)
        )
        return self

    @field_serializer("total_price", "paid_amount", "remaining_amount")
    def serialize_amount(self, value: float):
        return json_number(value)

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, date={self.date}, location={self.location})>"


class BookingInput(BaseModel):
    """Form data for creating or editing a booking."""

    date: Optional[str] = ""
    location: Optional[str] = ""
    phone: Optional[str] = ""
    total_price: AmountInput = None
    paid_amount: AmountInput = None
    details: Optional[str] = ""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def missing_fields(self) -> list[str]:
        return [name for name in REQUIRED_FIELDS if not getattr(self, name)]

    @property
    def parsed_total_price(self) -> float:
        return parse_amount(self.total_price)

    @property
    def parsed_paid_amount(self) -> float:
        return parse_amount(self.paid_amount)


class BookingStats(BaseModel):
    total: int = 0
    total_revenue: float = 0.0
    total_paid: float = 0.0
    total_remaining: float = 0.0

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_serializer("total_revenue", "total_paid", "total_remaining")
    def serialize_amount(self, value: float):
        return json_number(value)


class BookingResponse(Booking):
    """A booking as shown in the bookings table."""

    payment_status: str = "settled"
    display_date: str = ""

    @classmethod
    def from_booking(cls, booking: Booking) -> "BookingResponse":
        return cls(
            **booking.model_dump(),
            payment_status=payment_status(booking.remaining_amount),
            display_date=format_display_date(booking.date),
        )


class AmountPreviewRequest(BaseModel):
    total_price: AmountInput = None
    paid_amount: AmountInput = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AmountPreviewResponse(BaseModel):
    remaining_amount: float
    display: str

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_serializer("remaining_amount")
    def serialize_amount(self, value: float):
        return json_number(value)

    @classmethod
    def for_amounts(cls, total_price: AmountInput, paid_amount: AmountInput) -> "AmountPreviewResponse":
        remaining = remaining_amount(parse_amount(total_price), parse_amount(paid_amount))
        return cls(remaining_amount=remaining, display=format_amount(remaining))


class ImportResponse(BaseModel):
    message: str
    total: int


class DeleteResponse(BaseModel):
    message: str
    booking_id: str
