"""Shared schema types: identifier wire format, blank handling, pagination."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Annotated, Any, Generic, TypeVar

from pydantic import BaseModel, BeforeValidator, Field, PlainSerializer

MAX_IDENTIFIER = 2**63 - 1


def parse_identifier(value: Any) -> int:
	"""Coerce a wire identifier (decimal string or integer) to a BIGINT key."""
	if isinstance(value, bool):
		raise ValueError("must be a decimal identifier")
	if isinstance(value, int):
		candidate = value
	elif isinstance(value, str) and value.strip().isascii() and value.strip().isdigit():
		candidate = int(value.strip())
	else:
		raise ValueError("must be a decimal identifier")
	if not 0 < candidate <= MAX_IDENTIFIER:
		raise ValueError("identifier is out of range")
	return candidate


def _blank_to_none(value: Any) -> Any:
	if isinstance(value, str) and not value.strip():
		return None
	return value


# Every response schema types its keys as Identifier so BIGINT values leave
# the API as decimal strings, whichever entity they belong to.
Identifier = Annotated[int, PlainSerializer(str, return_type=str, when_used="json")]

IdentifierInput = Annotated[int, BeforeValidator(parse_identifier)]

NonNegativeDecimal = Annotated[Decimal, Field(ge=0)]

BoundedText = Annotated[str, Field(max_length=255)]

OptionalText = Annotated[BoundedText | None, BeforeValidator(_blank_to_none)]
OptionalDate = Annotated[date | None, BeforeValidator(_blank_to_none)]
OptionalDecimal = Annotated[NonNegativeDecimal | None, BeforeValidator(_blank_to_none)]

RequiredText = Annotated[str, Field(min_length=1, max_length=255)]

ItemT = TypeVar("ItemT")


class Page(BaseModel, Generic[ItemT]):
	items: list[ItemT]
	total_count: int = Field(serialization_alias="totalCount")
	page: int
	limit: int


class MessageRead(BaseModel):
	message: str
