from typing import Annotated, List, Generic, TypeVar
from pydantic import BaseModel, Field

T = TypeVar("T")

# Integer columns are 32-bit; anything wider is rejected as malformed input
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

Int32 = Annotated[int, Field(ge=INT32_MIN, le=INT32_MAX)]


# Paginated response wrapper: used by catalog list endpoints
class PaginatedResponse(BaseModel, Generic[T]):
    data: List[T]
    total: int
    page: int
    limit: int
    total_pages: int
