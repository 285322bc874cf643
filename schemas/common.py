from datetime import date, datetime, time
from decimal import Decimal, ROUND_HALF_UP
from typing import Annotated, Any, ClassVar, Dict, Tuple

from pydantic import AfterValidator, BaseModel, BeforeValidator, Field, PlainSerializer, model_validator

CENT = Decimal("0.01")


def to_cents(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def format_money(value: Decimal) -> str:
    return f"{to_cents(value):.2f}"


def _parse_when(value: Any) -> Any:
    # "2025-04-10" -> midnight of that day; full timestamps are left to pydantic
    if isinstance(value, str) and len(value.strip()) == 10:
        return datetime.combine(date.fromisoformat(value.strip()), time.min)
    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime.combine(value, time.min)
    return value


def _naive_local(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


# Amounts travel as "1500.00" strings in JSON and stay Decimal in Python.
# Bounds match the Numeric(10, 2) columns.
Money = Annotated[
    Decimal,
    Field(ge=0, max_digits=10, decimal_places=2),
    AfterValidator(to_cents),
    PlainSerializer(format_money, return_type=str, when_used="json"),
]

Percentage = Annotated[
    Decimal,
    AfterValidator(to_cents),
    PlainSerializer(format_money, return_type=str, when_used="json"),
]

# Local, naive timestamps; date-only input becomes midnight
When = Annotated[datetime, BeforeValidator(_parse_when), AfterValidator(_naive_local)]


class PatchModel(BaseModel):
    """
    Base for partial update bodies.

    Only fields the client actually sent end up in changes(); fields named in
    not_null_fields may be omitted but not set to null.
    """

    not_null_fields: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="after")
    def _reject_nulls(self):
        nulled = [
            name for name in self.not_null_fields
            if name in self.model_fields_set and getattr(self, name) is None
        ]
        if nulled:
            raise ValueError(f"{', '.join(nulled)} may not be null")
        return self

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)
