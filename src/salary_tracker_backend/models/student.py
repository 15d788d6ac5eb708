'''
Pydantic models for student records.
Fields are snake_case in Python and camelCase on the wire (teacherId,
classesConducted, ...).
'''
from datetime import datetime, timezone
from decimal import Decimal
from typing import Annotated, Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, field_validator
from pydantic.alias_generators import to_camel

from ..database.db_enums import PaymentStatus


# Upper bounds of the storage columns: Integer and Numeric(12, 2).
INT_COLUMN_MAX = 2**31 - 1

# Money is written to JSON as a number, as clients add these fields up.
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _blank_to_zero(value: Any) -> Any:
    """
    Numeric fallback policy: an absent, null or empty value means 0.
    Anything else must parse as a number or validation fails.
    """
    if value is None:
        return 0
    if isinstance(value, str) and not value.strip():
        return 0
    return value


class StudentCreate(CamelModel):
    """
    Validates the JSON payload when ADDING a student.
    Payment-cycle fields are not accepted here; the core sets them.
    """
    name: str = Field(..., min_length=1, max_length=255)
    teacher_id: str = Field(..., min_length=1, max_length=255)
    teaching_days: int = Field(0, ge=0, le=INT_COLUMN_MAX)
    salary: Decimal = Field(Decimal("0"), ge=0, max_digits=12, decimal_places=2)
    transport_cost: Decimal = Field(Decimal("0"), ge=0, max_digits=12, decimal_places=2)

    @field_validator("name", "teacher_id")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("teaching_days", "salary", "transport_cost", mode="before")
    @classmethod
    def numeric_fallback(cls, value: Any) -> Any:
        return _blank_to_zero(value)


class StudentRead(CamelModel):
    """
    Formats a student record when READING it from the API.
    """
    id: UUID
    teacher_id: str
    name: str
    teaching_days: int
    salary: Money
    transport_cost: Money
    classes_conducted: int
    payment_status: PaymentStatus
    last_paid_date: Optional[datetime] = None
    carry_over_classes: int

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    @field_validator("last_paid_date")
    @classmethod
    def as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        """SQLite hands timestamps back without a zone; they are stored as UTC."""
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class StudentCreated(CamelModel):
    message: str
    inserted_id: UUID


class StudentTransitionResult(BaseModel):
    message: str
    student: StudentRead


class SalaryTrackingRead(CamelModel):
    """Per-teacher salary totals split by payment status."""
    total_salary: Money
    total_paid: Money
    total_unpaid: Money
    paid_students: list[StudentRead]
    unpaid_students: list[StudentRead]

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)
