"""
Application common module.

Contains shared types for the application layer:
- Pagination: offset/limit window for list queries
- PaginatedResult: a page of items plus the total count
"""

from .pagination import MAX_PAGE_SIZE, PaginatedResult, Pagination

__all__ = [
    "MAX_PAGE_SIZE",
    "PaginatedResult",
    "Pagination",
]
