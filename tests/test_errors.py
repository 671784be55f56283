"""Tests for roost.errors — exception hierarchy."""

import pytest

from roost.errors import CacheError, ConfigurationError, RoostError


class TestHierarchy:
    def test_configuration_error_is_value_error(self) -> None:
        assert issubclass(ConfigurationError, RoostError)
        assert issubclass(ConfigurationError, ValueError)

    def test_cache_error_is_roost_error(self) -> None:
        assert issubclass(CacheError, RoostError)
        assert not issubclass(CacheError, ConfigurationError)

    def test_caught_as_value_error(self) -> None:
        with pytest.raises(ValueError, match="bad controllers directory"):
            raise ConfigurationError("bad controllers directory")
