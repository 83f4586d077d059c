"""Tests for the SELECT builder and query-string parsing."""

import pytest

from career_guide.api.params import normalize_filter, parse_int, resolve_page
from career_guide.core.errors import ValidationError
from career_guide.db.query import SelectQuery, escape_like


class TestSelectQuery:
    """SQL and params produced by SelectQuery."""

    def test_plain_select_orders_by_primary_key(self):
        sql, params = SelectQuery("careers", ["id", "career"]).build()
        assert sql == "SELECT id, career FROM careers ORDER BY id ASC"
        assert params == {}

    def test_equals_skips_none(self):
        sql, params = SelectQuery("colleges", ["id"]).equals("state", None).build()
        assert "WHERE" not in sql
        assert params == {}

    def test_filters_are_bound_not_inlined(self):
        sql, params = (
            SelectQuery("colleges", ["id"])
            .equals("district", "Guntur'; DROP TABLE colleges; --")
            .build()
        )
        assert "DROP" not in sql
        assert "district = :district" in sql
        assert params["district"].startswith("Guntur")

    def test_case_insensitive_equals(self):
        sql, params = SelectQuery("careers", ["id"]).equals("stream", "Arts", case_insensitive=True).build()
        assert "LOWER(stream) = LOWER(:stream)" in sql
        assert params == {"stream": "Arts"}

    def test_search_spans_columns(self):
        sql, params = SelectQuery("careers", ["id"]).search("  Engineer ", "career", "qualification").build()
        assert "(LOWER(career) LIKE :search ESCAPE '\\' OR LOWER(qualification) LIKE :search ESCAPE '\\')" in sql
        assert params == {"search": "%engineer%"}

    def test_blank_search_ignored(self):
        sql, _ = SelectQuery("careers", ["id"]).search("   ", "career").build()
        assert "WHERE" not in sql

    def test_where_clauses_are_anded(self):
        sql, _ = SelectQuery("colleges", ["id"]).equals("state", "AP").equals("type", "Private").build()
        assert "WHERE state = :state AND type = :type" in sql

    def test_order_then_tiebreak_then_page(self):
        sql, params = (
            SelectQuery("careers", ["id"])
            .order_by("salary_numeric DESC")
            .paginate(10, 20)
            .build()
        )
        assert sql.endswith("ORDER BY salary_numeric DESC, id ASC LIMIT :limit OFFSET :offset")
        assert params == {"limit": 10, "offset": 20}

    def test_no_limit_clause_without_limit(self):
        sql, params = SelectQuery("colleges", ["id"]).paginate(None, 0).build()
        assert "LIMIT" not in sql
        assert params == {}

    def test_no_duplicate_primary_key_order(self):
        sql, _ = SelectQuery("careers", ["id"]).order_by("id DESC").build()
        assert sql.endswith("ORDER BY id DESC")

    def test_repeated_param_names_get_suffix(self):
        sql, params = SelectQuery("t", ["id"]).equals("stream", "a").equals("stream", "b").build()
        assert "stream = :stream AND stream = :stream_2" in sql
        assert params == {"stream": "a", "stream_2": "b"}


class TestEscapeLike:

    def test_wildcards_escaped(self):
        assert escape_like("100%_x") == "100\\%\\_x"

    def test_backslash_escaped(self):
        assert escape_like("a\\b") == "a\\\\b"


class TestParams:
    """Query-string parsing rules."""

    def test_parse_int(self):
        assert parse_int("12", "stream_id", "INVALID_STREAM_ID") == 12
        assert parse_int(None, "stream_id", "INVALID_STREAM_ID") is None
        assert parse_int("  ", "stream_id", "INVALID_STREAM_ID") is None

    def test_parse_int_rejects_text(self):
        with pytest.raises(ValidationError) as exc:
            parse_int("abc", "stream_id", "INVALID_STREAM_ID")
        assert exc.value.code == "INVALID_STREAM_ID"
        assert exc.value.status_code == 400

    @pytest.mark.parametrize("value", [None, "", "  ", "all", "ALL", "All"])
    def test_no_filter_values(self, value):
        assert normalize_filter(value) is None

    def test_filter_value_trimmed(self):
        assert normalize_filter(" Engineering ") == "Engineering"

    def test_page_defaults(self):
        page = resolve_page(None, None)
        assert (page.limit, page.offset) == (50, 0)

    def test_page_limit_capped(self):
        assert resolve_page("500", "0").limit == 100

    def test_unpaged_when_no_default(self):
        page = resolve_page(None, None, default_limit=None)
        assert (page.limit, page.offset) == (None, 0)

    def test_offset_without_default_pages_at_max(self):
        page = resolve_page(None, "5", default_limit=None)
        assert (page.limit, page.offset) == (100, 5)
        assert resolve_page("500", None, default_limit=None).limit == 100

    def test_page_rejects_bad_values(self):
        with pytest.raises(ValidationError) as exc:
            resolve_page("ten", None)
        assert exc.value.code == "INVALID_LIMIT"
        with pytest.raises(ValidationError) as exc:
            resolve_page(None, "-1")
        assert exc.value.code == "INVALID_OFFSET"
        with pytest.raises(ValidationError) as exc:
            resolve_page("-5", None)
        assert exc.value.code == "INVALID_LIMIT"
