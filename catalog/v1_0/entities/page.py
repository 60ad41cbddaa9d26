from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True, frozen=True)
class PaginationQuery:
    """Cursor request: opaque token from the previous page plus desired size."""
    page_token: Optional[str] = None
    page_size: Optional[int] = None


@dataclass(slots=True, frozen=True)
class PaginationPolicy:
    default_size: int = 100
    max_size: int = 1000

    def page_size(self, requested: Optional[int]) -> int:
        if requested is None:
            return min(self.default_size, self.max_size)
        return max(1, min(int(requested), self.max_size))
