# models/base.py

from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def to_naive_local(value: datetime) -> datetime:
    """Stored timestamps are naive local time; convert aware inputs."""
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


# Timestamps accepted from clients (ISO strings, with or without offset)
LocalDateTime = Annotated[datetime, AfterValidator(to_naive_local)]

# Currency as sent by clients
Money = Annotated[Decimal, Field(ge=0, max_digits=10, decimal_places=2)]
PositiveMoney = Annotated[Decimal, Field(gt=0, max_digits=10, decimal_places=2)]

FOUR_DIGITS = r"^\d{4}$"


class CamelModel(BaseModel):
    """
    API schema base: snake_case in Python, camelCase on the wire.
    Either spelling is accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True,
    )


class SuccessResponse(CamelModel):
    success: bool = True
