"""Unit tests for paginated query construction (no database involved)."""
import pytest
from sqlalchemy.dialects import sqlite

from app.core.exceptions import QueryBuildError, ValidationError
from app.core.pagination import PaginationRequest
from app.core.query_builder import build_page_query
from app.repositories.product import (
    BASE_QUERY,
    COLUMNS,
    SEARCHABLE_COLUMNS,
    SORTABLE_COLUMNS,
)


def _build(base_query=BASE_QUERY, **params):
    return build_page_query(
        base_query,
        PaginationRequest(**params),
        columns=COLUMNS,
        searchable=SEARCHABLE_COLUMNS,
        sortable=SORTABLE_COLUMNS,
    )


def _sql(stmt) -> str:
    return str(stmt.compile(dialect=sqlite.dialect(), compile_kwargs={"literal_binds": True}))


class TestBounds:
    @pytest.mark.parametrize(
        "page, size, offset",
        [(1, 10, 0), (2, 10, 10), (3, 2, 4), (7, 25, 150)],
    )
    def test_offset_and_limit(self, page, size, offset):
        page_q = _build(page=page, items_per_page=size)
        assert page_q.offset == offset
        assert page_q.limit == size
        assert f"LIMIT {size} OFFSET {offset}" in _sql(page_q.select)

    def test_count_has_no_sort_or_limit(self):
        sql = _sql(_build(page=3, items_per_page=5, sort="name").count)
        assert "count(*)" in sql
        assert "ORDER BY" not in sql
        assert "LIMIT" not in sql
        assert "OFFSET" not in sql

    def test_base_query_wrapped_as_subquery(self):
        sql = _sql(_build().select)
        assert "(SELECT * FROM product) AS page_base" in sql

    def test_missing_rows_per_page_rejected(self):
        request = PaginationRequest.model_construct(
            page=1, items_per_page=0, sort="id", descending=False, search=""
        )
        with pytest.raises(QueryBuildError, match="rows per page"):
            build_page_query(BASE_QUERY, request, columns=COLUMNS)

    def test_offset_beyond_64_bits_rejected(self):
        with pytest.raises(ValidationError, match="out of range"):
            _build(page=10**19, items_per_page=10)

    def test_largest_offset_accepted(self):
        page_q = _build(page=2**63 // 10, items_per_page=10)
        assert page_q.offset <= 2**63 - 1

    def test_page_below_one_rejected(self):
        request = PaginationRequest.model_construct(
            page=0, items_per_page=10, sort="id", descending=False, search=""
        )
        with pytest.raises(ValidationError, match="page"):
            build_page_query(BASE_QUERY, request, columns=COLUMNS)


class TestSort:
    def test_ascending_by_default(self):
        sql = _sql(_build(sort="name").select)
        assert "ORDER BY page_base.name ASC, page_base.id ASC" in sql

    def test_descending(self):
        sql = _sql(_build(sort="price", descending=True).select)
        assert "ORDER BY page_base.price DESC, page_base.id ASC" in sql

    def test_sort_by_id_has_no_tiebreaker(self):
        sql = _sql(_build(sort="id", descending=True).select)
        assert "ORDER BY page_base.id DESC" in sql
        assert "page_base.id ASC" not in sql

    def test_unknown_sort_rejected(self):
        with pytest.raises(ValidationError, match="invalid sort field 'bogus'"):
            _build(sort="bogus")

    def test_sort_injection_rejected(self):
        with pytest.raises(ValidationError):
            _build(sort="name; DROP TABLE product")

    def test_allow_list_narrower_than_columns(self):
        with pytest.raises(ValidationError, match="expected one of: id, name"):
            build_page_query(
                BASE_QUERY,
                PaginationRequest(sort="price"),
                columns=COLUMNS,
                sortable=("id", "name"),
            )

    def test_allow_list_defaults_to_all_columns(self):
        page_q = build_page_query(
            BASE_QUERY, PaginationRequest(sort="description"), columns=COLUMNS
        )
        assert "ORDER BY page_base.description ASC" in _sql(page_q.select)


class TestSearch:
    def test_empty_search_adds_no_filter(self):
        page_q = _build(search="")
        assert "WHERE" not in _sql(page_q.select)
        assert "WHERE" not in _sql(page_q.count)

    def test_blank_search_adds_no_filter(self):
        assert "WHERE" not in _sql(_build(search="   ").select)

    def test_search_ors_searchable_columns(self):
        page_q = _build(search="foo")
        for stmt in (page_q.select, page_q.count):
            sql = _sql(stmt)
            assert "lower(page_base.name) LIKE" in sql
            assert "lower(page_base.description) LIKE" in sql
            assert " OR " in sql
            assert "price" not in sql.split("WHERE", 1)[1]

    def test_search_term_is_bound_not_inlined(self):
        compiled = _build(search="o'brien").select.compile()
        assert "o'brien" not in str(compiled)
        assert "o'brien" in compiled.params.values()

    def test_like_wildcards_escaped(self):
        compiled = _build(search="50%_off").select.compile()
        assert "50/%/_off" in compiled.params.values()

    def test_searchable_column_must_exist(self):
        with pytest.raises(QueryBuildError, match="sku"):
            build_page_query(
                BASE_QUERY, PaginationRequest(search="x"), columns=COLUMNS, searchable=("sku",)
            )


class TestBaseQuery:
    @pytest.mark.parametrize(
        "base_query",
        [
            "",
            "   ",
            "product",
            "DELETE FROM product",
            "SELECT * FROM product; DROP TABLE product",
            "SELECT 1",
        ],
    )
    def test_malformed_base_query(self, base_query):
        with pytest.raises(QueryBuildError):
            _build(base_query=base_query)

    def test_lowercase_select_accepted(self):
        page_q = _build(base_query="select * from product")
        assert "(select * from product) AS page_base" in _sql(page_q.select)

    def test_no_columns_rejected(self):
        with pytest.raises(QueryBuildError, match="at least one column"):
            build_page_query(BASE_QUERY, PaginationRequest(), columns=())
