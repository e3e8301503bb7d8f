"""Tests for sorting."""

import json

import pytest

from querykit.query import Criteria, Order, load_sort_fields, parse_sort, parse_sort_item
from querykit.query.sort import apply, apply_multiple
from tests.factories import SORT, MockOrderBuilder

FIELDS = {"email": "email", "created_at": "created_at", "name": "full_name"}


class TestApply:
    """Tests for sort.apply."""

    def test_asc_and_desc(self) -> None:
        assert apply([], SORT, FIELDS, MockOrderBuilder(), "email", "asc") == ["ORDER BY email ASC"]
        assert apply([], SORT, FIELDS, MockOrderBuilder(), "name", "desc") == ["ORDER BY full_name DESC"]

    def test_other_direction_is_asc(self) -> None:
        assert apply([], SORT, FIELDS, MockOrderBuilder(), "email", "DESC") == ["ORDER BY email ASC"]
        assert apply([], SORT, FIELDS, MockOrderBuilder(), "email", "") == ["ORDER BY email ASC"]

    def test_empty_or_unknown_field_leaves_query(self) -> None:
        query = ["base"]
        assert apply(query, SORT, FIELDS, MockOrderBuilder(), "", "asc") is query
        assert apply(query, SORT, FIELDS, MockOrderBuilder(), "password", "asc") is query


class TestApplyMultiple:
    """Tests for sort.apply_multiple."""

    def test_order_kept(self) -> None:
        sorts = [Criteria("name", Order.ASC), Criteria("created_at", Order.DESC)]
        assert apply_multiple([], SORT, FIELDS, MockOrderBuilder(), sorts) == [
            "ORDER BY full_name ASC, created_at DESC"
        ]

    def test_unknown_fields_skipped(self) -> None:
        sorts = [Criteria("ghost", "desc"), Criteria("email", "desc")]
        assert apply_multiple([], SORT, FIELDS, MockOrderBuilder(), sorts) == ["ORDER BY email DESC"]

    def test_nothing_left_leaves_query(self) -> None:
        query = ["base"]
        assert apply_multiple(query, SORT, FIELDS, MockOrderBuilder(), []) is query
        assert apply_multiple(query, SORT, FIELDS, MockOrderBuilder(), [Criteria("ghost")]) is query


class TestParseSort:
    """Tests for sort string parsing."""

    @pytest.mark.parametrize(
        ("item", "expected"),
        [
            ("-age", Criteria("age", Order.DESC)),
            ("age", Criteria("age", Order.ASC)),
            ("age DESC", Criteria("age", Order.DESC)),
            ("age asc", Criteria("age", Order.ASC)),
            ("age:desc", Criteria("age", Order.DESC)),
            ("age:d", Criteria("age", Order.DESC)),
            ("age:up", Criteria("age", Order.ASC)),
        ],
    )
    def test_parse_sort_item(self, item: str, expected: Criteria) -> None:
        assert parse_sort_item(item) == expected

    def test_parse_sort_drops_blanks(self) -> None:
        assert parse_sort(["", "  ", "-email", "-"]) == [Criteria("email", Order.DESC)]

    def test_criteria_dict(self) -> None:
        c = Criteria.from_dict({"field": "email", "order": "desc"})
        assert c.to_dict() == {"field": "email", "order": "desc"}
        assert Criteria.from_dict({"field": "email"}).order == "asc"


class TestLoadSortFields:
    """Tests for load_sort_fields."""

    def test_yaml(self, tmp_path) -> None:
        path = tmp_path / "sort.yaml"
        path.write_text("fields:\n  email: email\n  name: full_name\n", encoding="utf-8")
        assert load_sort_fields(path) == {"email": "email", "name": "full_name"}

    def test_json(self, tmp_path) -> None:
        path = tmp_path / "sort.json"
        path.write_text(json.dumps({"fields": {"created_at": "created"}}), encoding="utf-8")
        assert load_sort_fields(str(path)) == {"created_at": "created"}

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(RuntimeError):
            load_sort_fields(tmp_path / "nope.yaml")

    def test_bad_mapping(self, tmp_path) -> None:
        path = tmp_path / "sort.yml"
        path.write_text("fields:\n  - email\n", encoding="utf-8")
        with pytest.raises(RuntimeError):
            load_sort_fields(path)
