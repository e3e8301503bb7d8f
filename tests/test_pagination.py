"""Tests for pagination."""

import pytest

from querykit.query import Page, cap_page_size, new_page
from querykit.query.pagination import apply
from tests.factories import PAGINATION


class TestApply:
    """Tests for pagination.apply."""

    @pytest.mark.parametrize(
        ("limit", "offset", "expected"),
        [
            (25, 0, ["LIMIT 25"]),
            (25, 25, ["OFFSET 25", "LIMIT 25"]),
            (0, 10, ["OFFSET 10"]),
            (-1, -5, []),
            (0, 0, []),
        ],
    )
    def test_apply(self, limit: int, offset: int, expected: list) -> None:
        assert apply([], PAGINATION, limit, offset) == expected


class TestPage:
    """Tests for Page metadata."""

    def test_middle_page(self) -> None:
        page = new_page(["a", "b"], total=10, limit=2, offset=4)
        assert page.has_next_page is True
        assert page.has_prev_page is True
        assert page.page_number == 3
        assert page.total_pages == 5

    def test_last_partial_page(self) -> None:
        page = Page(data=["x"], total=7, limit=3, offset=6)
        assert page.has_next_page is False
        assert page.page_number == 3
        assert page.total_pages == 3

    def test_first_page(self) -> None:
        page = Page(total=0, limit=10, offset=0)
        assert page.has_prev_page is False
        assert page.has_next_page is False
        assert page.total_pages == 0

    def test_no_limit(self) -> None:
        page = Page(total=50, limit=0, offset=0)
        assert page.page_number == 1
        assert page.total_pages == 1

    def test_to_dict(self) -> None:
        assert new_page([1], 1, 10, 0).to_dict() == {
            "data": [1],
            "total": 1,
            "limit": 10,
            "offset": 0,
        }


class TestCapPageSize:
    """Tests for cap_page_size."""

    def test_defaults(self) -> None:
        assert cap_page_size(0) == 100
        assert cap_page_size(-3) == 100
        assert cap_page_size(50) == 50
        assert cap_page_size(5000) == 1000

    def test_explicit_cap(self) -> None:
        assert cap_page_size(0, max_page_size=20) == 20
        assert cap_page_size(30, max_page_size=20) == 20

    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from querykit.config import get_settings

        monkeypatch.setenv("QUERYKIT_DEFAULT_PAGE_SIZE", "10")
        monkeypatch.setenv("QUERYKIT_MAX_PAGE_SIZE", "40")
        get_settings.cache_clear()
        assert cap_page_size(0) == 10
        assert cap_page_size(41) == 40
