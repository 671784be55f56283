"""Tests for roost.__init__ — lazy imports cover all public names."""

import pytest

import roost


@pytest.mark.parametrize("name", roost.__all__)
def test_all_names_resolve(name: str) -> None:
    """Every name in __all__ must resolve via __getattr__ without error."""
    obj = getattr(roost, name)
    assert obj is not None, f"roost.{name} resolved to None"


def test_names_match_defining_modules() -> None:
    from roost.controller import route
    from roost.routing.router import Router

    assert roost.Router is Router
    assert roost.route is route


def test_unknown_name_raises_attribute_error() -> None:
    """Accessing an unregistered name raises AttributeError."""
    with pytest.raises(AttributeError, match="no attribute"):
        roost.__getattr__("ThisDoesNotExist")
