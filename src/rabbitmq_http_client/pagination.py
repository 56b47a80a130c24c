"""
Pagination parameters for list endpoints that support ``page``/``page_size``.
"""

from dataclasses import dataclass, replace
from typing import Dict, Optional, Sized

MAX_PAGE_SIZE = 500
DEFAULT_PAGE_SIZE = 100


@dataclass(frozen=True)
class PaginationParams:
    """
    Page (1-indexed) and page size. The size is clamped to 500 and
    defaults to 100 when only a page is given.

    Examples:
        >>> PaginationParams.first_page(50).to_query_string()
        'page=1&page_size=50'
        >>> PaginationParams(page=2, page_size=9000).to_query_string()
        'page=2&page_size=500'
    """
    page: Optional[int] = None
    page_size: Optional[int] = None

    def __post_init__(self):
        if self.page is not None and self.page < 1:
            raise ValueError("page is 1-indexed and must be >= 1")
        if self.page_size is not None:
            if self.page_size < 1:
                raise ValueError("page_size must be >= 1")
            if self.page_size > MAX_PAGE_SIZE:
                object.__setattr__(self, 'page_size', MAX_PAGE_SIZE)

    @classmethod
    def first_page(cls, page_size: int = DEFAULT_PAGE_SIZE) -> "PaginationParams":
        return cls(page=1, page_size=page_size)

    @property
    def effective_page_size(self) -> int:
        return self.page_size if self.page_size is not None else DEFAULT_PAGE_SIZE

    def to_query_string(self) -> Optional[str]:
        """``page=N&page_size=M``, or None when no page was requested."""
        if self.page is None:
            return None
        return f"page={self.page}&page_size={self.effective_page_size}"

    def to_query_params(self) -> Optional[Dict[str, int]]:
        """Same as :meth:`to_query_string`, as a mapping for the HTTP client."""
        if self.page is None:
            return None
        return {"page": self.page, "page_size": self.effective_page_size}

    def next_page(self) -> "PaginationParams":
        return replace(self, page=(self.page or 1) + 1, page_size=self.effective_page_size)

    def is_last_page(self, items: Sized) -> bool:
        """True when the page came back empty or short."""
        return len(items) == 0 or len(items) < self.effective_page_size
