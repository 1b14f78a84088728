"""Paginated query construction — turns a base SELECT into a data + count pair.

Pure functions only: nothing here touches a connection. The returned
statements are SQLAlchemy Core constructs, so every user-supplied value
(search term, limit, offset) is sent as a bound parameter and the sort
column is resolved against an allow-list, never spliced in as text.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy import Select, func, or_, select, text
from sqlalchemy.sql.elements import ColumnClause, ColumnElement
from sqlalchemy.sql.expression import column
from sqlalchemy.sql.selectable import Subquery

from app.core.exceptions import QueryBuildError, ValidationError
from app.core.pagination import PaginationRequest

_BASE_ALIAS = "page_base"

# OFFSET is sent as a signed 64-bit integer.
_MAX_OFFSET = 2**63 - 1

# One SELECT ... FROM ... statement, nothing after it.
_BASE_QUERY_RE = re.compile(r"^\s*select\s+.+?\s+from\s+\S.*$", re.IGNORECASE | re.DOTALL)


@dataclass(frozen=True)
class PageQuery:
    """A bounded SELECT and the COUNT that shares its search filter."""

    select: Select
    count: Select
    offset: int
    limit: int


def _column_clauses(columns: Sequence[str | ColumnClause]) -> list[ColumnClause]:
    clauses = []
    for col in columns:
        if isinstance(col, str):
            clauses.append(column(col))
        else:
            clauses.append(column(col.name, col.type))
    if not clauses:
        raise QueryBuildError("base query must declare at least one column")
    return clauses


def _base_subquery(base_query: str, columns: Sequence[str | ColumnClause]) -> Subquery:
    if not base_query or not base_query.strip():
        raise QueryBuildError("base query is empty")
    if ";" in base_query:
        raise QueryBuildError("base query must be a single statement")
    if not _BASE_QUERY_RE.match(base_query):
        raise QueryBuildError(f"base query is not a SELECT ... FROM statement: {base_query!r}")
    return text(base_query).columns(*_column_clauses(columns)).subquery(_BASE_ALIAS)


def _search_filter(
    base: Subquery, searchable: Sequence[str], term: str
) -> ColumnElement[bool] | None:
    if not term or not searchable:
        return None
    return or_(*(base.c[name].icontains(term, autoescape=True) for name in searchable))


def build_page_query(
    base_query: str,
    request: PaginationRequest,
    *,
    columns: Sequence[str | ColumnClause],
    searchable: Sequence[str] = (),
    sortable: Sequence[str] | None = None,
    tiebreaker: str | None = "id",
) -> PageQuery:
    """Build the page SELECT and its COUNT for *base_query*.

    ``columns`` names (optionally typed) the columns the base query returns.
    ``searchable`` columns are OR-ed together in a case-insensitive substring
    match when ``request.search`` is non-blank. ``sortable`` is the allow-list
    for ``request.sort`` and defaults to every column. Rows that tie on the
    sort column are ordered by ``tiebreaker`` ascending so pages stay stable.

    Raises :class:`QueryBuildError` for a malformed base query or a missing
    page size, and :class:`ValidationError` for an out-of-range page or a sort
    column outside the allow-list.
    """
    if not request.items_per_page or request.items_per_page <= 0:
        raise QueryBuildError("rows per page must be a positive number")
    if request.page < 1:
        raise ValidationError(f"page must be 1 or greater, got {request.page}")

    base = _base_subquery(base_query, columns)
    known = set(base.c.keys())

    unknown = [name for name in searchable if name not in known]
    if unknown:
        raise QueryBuildError(f"searchable columns not in base query: {', '.join(unknown)}")

    allowed = list(sortable) if sortable is not None else list(base.c.keys())
    if request.sort not in allowed or request.sort not in known:
        raise ValidationError(
            f"invalid sort field '{request.sort}'; expected one of: {', '.join(allowed)}"
        )

    offset = (request.page - 1) * request.items_per_page
    if offset > _MAX_OFFSET:
        raise ValidationError(
            f"page {request.page} is out of range for {request.items_per_page} items per page"
        )
    limit = request.items_per_page

    data_q = select(base)
    count_q = select(func.count()).select_from(base)

    criteria = _search_filter(base, searchable, request.search)
    if criteria is not None:
        data_q = data_q.where(criteria)
        count_q = count_q.where(criteria)

    sort_col = base.c[request.sort]
    data_q = data_q.order_by(sort_col.desc() if request.descending else sort_col.asc())
    if tiebreaker and tiebreaker != request.sort and tiebreaker in known:
        data_q = data_q.order_by(base.c[tiebreaker].asc())

    data_q = data_q.offset(offset).limit(limit)
    return PageQuery(select=data_q, count=count_q, offset=offset, limit=limit)
