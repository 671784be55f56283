"""Tests for roost.routing.route — RouteEntry and path normalization."""

import pytest

from roost.errors import ConfigurationError
from roost.routing.route import HTTP_VERBS, RouteEntry, normalize_path


class TestNormalizePath:
    def test_trailing_slash_stripped(self) -> None:
        assert normalize_path("/example/") == "/example"

    def test_plain_path_unchanged(self) -> None:
        assert normalize_path("/example") == "/example"

    def test_empty_is_root(self) -> None:
        assert normalize_path("") == "/"

    def test_root_stays_root(self) -> None:
        assert normalize_path("/") == "/"

    def test_repeated_trailing_slashes(self) -> None:
        assert normalize_path("/example///") == "/example"
        assert normalize_path("///") == "/"

    def test_query_string_removed(self) -> None:
        assert normalize_path("/example/?page=2&sort=asc") == "/example"
        assert normalize_path("/?q=1") == "/"

    def test_fragment_removed(self) -> None:
        assert normalize_path("/docs#intro") == "/docs"

    def test_leading_double_slash_preserved(self) -> None:
        assert normalize_path("//example") == "//example"


class TestRouteEntry:
    def test_verb_upper_cased(self) -> None:
        entry = RouteEntry("get", "/users", "users:Users")
        assert entry.verb == "GET"

    def test_all_verbs_accepted(self) -> None:
        for verb in HTTP_VERBS:
            assert RouteEntry(verb, "/", "m:C").verb == verb

    def test_head_is_not_a_routable_verb(self) -> None:
        with pytest.raises(ConfigurationError, match="Unsupported HTTP verb"):
            RouteEntry("HEAD", "/", "m:C")

    def test_path_must_be_absolute(self) -> None:
        with pytest.raises(ConfigurationError, match="must start with '/'"):
            RouteEntry("GET", "users", "m:C")

    def test_type_id_required(self) -> None:
        with pytest.raises(ConfigurationError, match="no handler type id"):
            RouteEntry("GET", "/users", "")

    def test_frozen(self) -> None:
        entry = RouteEntry("GET", "/users", "m:C")
        with pytest.raises(AttributeError):
            entry.path = "/other"  # type: ignore[misc]
