"""Tests for the filter declaration registry."""

import pytest

from querykit.filters import (
    BoolFilterBuilder,
    StringFilterBuilder,
    TimeFilterBuilder,
    bool_field,
    build_filter_map,
    nullable_string_field,
    nullable_time_field,
    string_field,
    time_field,
)
from tests.factories import COMBINATORS, bool_atoms, string_atoms, time_atoms


class TestBuildFilterMap:
    """Tests for build_filter_map."""

    def test_builds_each_field_kind(self) -> None:
        builders = build_filter_map(
            COMBINATORS,
            string_field("email", string_atoms("email")),
            nullable_string_field("first_name", string_atoms("first_name")),
            bool_field("is_active", bool_atoms("is_active")),
            time_field("created_at", time_atoms("created_at")),
            nullable_time_field("deleted_at", time_atoms("deleted_at")),
        )

        assert set(builders) == {"email", "first_name", "is_active", "created_at", "deleted_at"}
        assert isinstance(builders["email"], StringFilterBuilder)
        assert builders["email"].nullable is False
        assert builders["first_name"].nullable is True
        assert isinstance(builders["is_active"], BoolFilterBuilder)
        assert isinstance(builders["created_at"], TimeFilterBuilder)
        assert builders["created_at"].nullable is False
        assert builders["deleted_at"].nullable is True

    def test_combinators_are_injected(self) -> None:
        builders = build_filter_map(COMBINATORS, string_field("email", string_atoms("email")))
        assert builders["email"].combinators is COMBINATORS
        assert builders["email"].is_not_null() == "OR(email = , email != )"

    def test_field_description_is_reusable(self) -> None:
        """One description, two backends with different combinators."""
        from querykit.filters import Combinators

        field = string_field("email", string_atoms("email"))
        other = Combinators(or_=lambda *p: " || ".join(p), and_=lambda *p: " && ".join(p))

        assert build_filter_map(COMBINATORS, field)["email"].is_null() == "AND(email = , email != )"
        assert build_filter_map(other, field)["email"].is_null() == "email =  && email != "

    def test_mapping_is_read_only(self) -> None:
        builders = build_filter_map(COMBINATORS, string_field("email", string_atoms("email")))
        with pytest.raises(TypeError):
            builders["x"] = builders["email"]  # type: ignore[index]

    def test_lookup_is_case_sensitive(self) -> None:
        builders = build_filter_map(COMBINATORS, string_field("email", string_atoms("email")))
        assert builders.get("Email") is None

    def test_duplicate_name_last_wins(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level("WARNING", logger="querykit.filters"):
            builders = build_filter_map(
                COMBINATORS,
                string_field("flag", string_atoms("flag")),
                bool_field("flag", bool_atoms("flag")),
            )
        assert len(builders) == 1
        assert isinstance(builders["flag"], BoolFilterBuilder)
        assert "duplicate" in caplog.text

    def test_empty(self) -> None:
        assert dict(build_filter_map(COMBINATORS)) == {}


class TestTimeFieldStrictness:
    """Strictness defaults come from settings."""

    def test_default_is_lossy(self) -> None:
        builders = build_filter_map(COMBINATORS, time_field("t", time_atoms("t")))
        assert builders["t"].strict is False

    def test_default_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from querykit.config import get_settings

        monkeypatch.setenv("QUERYKIT_STRICT_TIME_PARSING", "true")
        get_settings.cache_clear()
        builders = build_filter_map(COMBINATORS, nullable_time_field("t", time_atoms("t")))
        assert builders["t"].strict is True

    def test_explicit_overrides_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from querykit.config import get_settings

        monkeypatch.setenv("QUERYKIT_STRICT_TIME_PARSING", "1")
        get_settings.cache_clear()
        builders = build_filter_map(COMBINATORS, time_field("t", time_atoms("t"), strict=False))
        assert builders["t"].strict is False
