# querykit/params.py
from typing import List, Optional

from fastapi import HTTPException, Query
from pydantic import BaseModel, Field, PrivateAttr

from .exceptions import QueryKitError
from .filters import FilterGroup, parse_filter_group_json
from .query import Criteria, cap_page_size, parse_sort


class ListParams(BaseModel):
    """
    Decoded list-endpoint parameters: paging, sorting, search, structured
    filters (JSON-encoded filter group) and an optional ID set.
    """
    limit: int = 0
    offset: int = Field(default=0, ge=0)
    sort: List[str] = Field(default_factory=list)
    q: str = ""
    filters: Optional[str] = None
    ids: List[str] = Field(default_factory=list)

    _filter_group: Optional[FilterGroup] = PrivateAttr(default=None)

    def filter_group(self) -> FilterGroup:
        # decoded once per request
        if self._filter_group is None:
            if self.filters:
                self._filter_group = parse_filter_group_json(self.filters)
            else:
                self._filter_group = FilterGroup()
        return self._filter_group

    def sort_criteria(self) -> List[Criteria]:
        return parse_sort(self.sort)


def list_params(
    limit: int = Query(0, description="Page size; 0 uses the configured default."),
    offset: int = Query(0, ge=0, description="Number of records to skip."),
    sort: List[str] = Query([], description="e.g. -created_at, email:asc, name desc"),
    q: str = Query("", description="Whitespace-separated search terms."),
    filters: Optional[str] = Query(None, description="JSON filter group."),
    ids: List[str] = Query([], alias="id", description="Restrict to these IDs."),
) -> ListParams:
    """
    FastAPI dependency:

        @router.get("/users")
        def list_users(params: ListParams = Depends(list_params)): ...
    """
    params = ListParams(
        limit=cap_page_size(limit),
        offset=offset,
        sort=sort,
        q=q,
        filters=filters,
        ids=ids,
    )
    # malformed filter payloads are rejected here
    filter_group_or_400(params)
    return params


def filter_group_or_400(params: ListParams) -> FilterGroup:
    try:
        return params.filter_group()
    except QueryKitError as e:
        raise HTTPException(status_code=400, detail=str(e))


__all__ = ["ListParams", "list_params", "filter_group_or_400"]
