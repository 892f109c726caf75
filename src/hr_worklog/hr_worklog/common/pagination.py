from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic, Optional, Sequence, TypeVar

from ..core.constants import DEFAULT_PER_PAGE, MAX_PER_PAGE, MIN_PER_PAGE
from ..core.exceptions import ValidationError

T = TypeVar("T")


@dataclass(frozen=True)
class PerPagePolicy:
    default: int = DEFAULT_PER_PAGE
    minimum: int = MIN_PER_PAGE
    maximum: int = MAX_PER_PAGE

    def clamp(self, per_page: Optional[int]) -> int:
        if per_page is None:
            return self.default
        return max(self.minimum, min(int(per_page), self.maximum))


@dataclass(frozen=True)
class Page(Generic[T]):
    items: Sequence[T]
    page: int
    per_page: int
    total: int

    @property
    def last_page(self) -> int:
        return max(1, math.ceil(self.total / self.per_page))

    def meta(self) -> dict:
        return {
            "current_page": self.page,
            "per_page": self.per_page,
            "total": self.total,
            "last_page": self.last_page,
        }


def require_page(page: Optional[int]) -> int:
    if page is None:
        return 1
    if int(page) < 1:
        raise ValidationError("Page number must be at least 1")
    return int(page)
