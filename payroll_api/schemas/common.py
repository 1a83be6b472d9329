from decimal import Decimal
from typing import Annotated, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")

# Matches the Numeric(18, 2) money columns, so stored parts always sum to stored totals.
Money = Annotated[Decimal, Field(max_digits=18, decimal_places=2)]


def strip_text(value: Optional[str]) -> Optional[str]:
    return value.strip() if isinstance(value, str) else value


class PagedResult(BaseModel, Generic[T]):
    items: List[T]
    total_count: int
    page_number: int
    page_size: int
    total_pages: int
    has_previous_page: bool
    has_next_page: bool
