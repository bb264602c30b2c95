"""Core schemas and shared field types for the application."""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Annotated, Any, ClassVar, Dict, List, Optional, Tuple

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

CENT = Decimal("0.01")


def quantize_money(value: Decimal) -> Decimal:
    """Round a decimal amount to whole cents."""
    return Decimal(value).quantize(CENT)


def to_naive_utc(value: datetime) -> datetime:
    """Normalize an instant to naive UTC, the form every backend stores."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


# Monetary amounts: Numeric(10, 2), always carried as Decimal
Money = Annotated[Decimal, Field(max_digits=10, decimal_places=2), AfterValidator(quantize_money)]
Rate = Annotated[Decimal, Field(max_digits=5, decimal_places=2), AfterValidator(quantize_money)]
UtcDateTime = Annotated[datetime, AfterValidator(to_naive_utc)]


class CamelModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PartialModel(CamelModel):
    """Partial update: only the fields sent by the client are applied."""
    not_nullable: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_nulls(self):
        for name in self.not_nullable:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} cannot be null")
        return self

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class HealthCheck(BaseModel):
    """Schema for health check response."""
    service_name: str
    status: str


class FieldError(BaseModel):
    """One field-level validation problem."""
    field: str
    message: str
    type: str


class ErrorResponse(BaseModel):
    """Error envelope returned by every failing request."""
    message: str
    errors: Optional[List[FieldError]] = None
