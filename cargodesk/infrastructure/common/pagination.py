from typing import Annotated

from fastapi import Depends, Query

from cargodesk.application.common.pagination import MAX_PAGE_SIZE, Pagination


def get_pagination(
    offset: Annotated[int, Query(ge=0, description="Number of items to skip")] = 0,
    limit: Annotated[
        int, Query(ge=1, le=MAX_PAGE_SIZE, description="Maximum number of items")
    ] = 20,
) -> Pagination:
    return Pagination(offset=offset, limit=limit)


PaginationParams = Annotated[Pagination, Depends(get_pagination)]
