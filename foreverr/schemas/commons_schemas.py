"""
Common schemas shared across APIs
"""

from typing import Any, Dict, Generic, List, Optional, TypeVar
from pydantic import BaseModel

T = TypeVar("T")

# offset-paged list, next_cursor is None on the last page
class Page(BaseModel, Generic[T]):
    data: List[T]
    next_cursor: Optional[int] = None


def paginate(items: List[Any], offset: int, limit: int) -> Dict[str, Any]:
    return {
        "data": items,
        "next_cursor": offset + limit if len(items) == limit else None
    }
