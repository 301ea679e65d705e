"""Assertion helpers built on ReflectionComparator.

The expected value is always the left operand, so IGNORE_DEFAULTS forgives
defaults left out of the expectation, never of the actual value.  A failed
assertion raises ``AssertionError`` carrying the full difference report.

Example::

    from reflection_diff.assertions import assert_lenient_equals

    assert_lenient_equals(User(name="Ann", id=0), load_user("Ann"))
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from reflection_diff.algorithm.config import ComparatorConfig, ComparatorMode
from reflection_diff.comparator import ReflectionComparator
from reflection_diff.errors import IntrospectionError
from reflection_diff.formatter import difference_report

__all__ = [
    "assert_lenient_equals",
    "assert_property_lenient_equals",
    "assert_property_lenient_equals_each",
    "assert_property_reflection_equals",
    "assert_property_reflection_equals_each",
    "assert_reflection_equals",
    "get_property",
]

_LENIENT_MODES = (ComparatorMode.LENIENT_ORDER, ComparatorMode.IGNORE_DEFAULTS)


def assert_reflection_equals(
    expected: Any,
    actual: Any,
    *modes: ComparatorMode | str,
    message: str | None = None,
) -> None:
    """Assert that ``actual`` equals ``expected`` under the given modes.

    Raises:
        AssertionError: With a report of every difference found.
    """
    comparator = ReflectionComparator(ComparatorConfig(modes=frozenset(modes)))
    difference = comparator.compare(expected, actual, collect_all=True)
    if difference:
        raise AssertionError(difference_report(message, difference))


def assert_lenient_equals(
    expected: Any, actual: Any, message: str | None = None
) -> None:
    """Assert equality ignoring collection order and defaults in ``expected``."""
    assert_reflection_equals(expected, actual, *_LENIENT_MODES, message=message)


def get_property(obj: Any, property_name: str) -> Any:
    """Read a dotted attribute/key path such as ``"address.city"``.

    Each step reads a key from a mapping or an attribute from anything else.

    Raises:
        IntrospectionError: When a step cannot be read.
    """
    value = obj
    for name in property_name.split("."):
        try:
            if isinstance(value, Mapping):
                value = value[name]
            else:
                value = getattr(value, name)
        except Exception as exc:
            raise IntrospectionError(type(value), name, repr(exc)) from exc
    return value


def _property_message(message: str | None, property_name: str) -> str:
    specific = f"Incorrect value for property: {property_name}"
    return f"{message}\n{specific}" if message else specific


def assert_property_reflection_equals(
    property_name: str,
    expected_value: Any,
    actual_object: Any,
    *modes: ComparatorMode | str,
    message: str | None = None,
) -> None:
    """Assert that a (dotted) property of ``actual_object`` equals a value.

    Raises:
        AssertionError:     The property value differs from ``expected_value``.
        IntrospectionError: The property cannot be read.
    """
    actual_value = get_property(actual_object, property_name)
    assert_reflection_equals(
        expected_value,
        actual_value,
        *modes,
        message=_property_message(message, property_name),
    )


def assert_property_lenient_equals(
    property_name: str,
    expected_value: Any,
    actual_object: Any,
    message: str | None = None,
) -> None:
    """Lenient variant of ``assert_property_reflection_equals``."""
    assert_property_reflection_equals(
        property_name, expected_value, actual_object, *_LENIENT_MODES, message=message
    )


def assert_property_reflection_equals_each(
    property_name: str,
    expected_values: Iterable[Any],
    actual_objects: Iterable[Any],
    *modes: ComparatorMode | str,
    message: str | None = None,
) -> None:
    """Assert that the property collected from every actual object matches.

    Example::

        assert_property_reflection_equals_each(
            "name", ["Ann", "Bob"], users, ComparatorMode.LENIENT_ORDER
        )
    """
    actual_values = [get_property(item, property_name) for item in actual_objects]
    assert_reflection_equals(
        list(expected_values), actual_values, *modes, message=message
    )


def assert_property_lenient_equals_each(
    property_name: str,
    expected_values: Iterable[Any],
    actual_objects: Iterable[Any],
    message: str | None = None,
) -> None:
    """Lenient variant of ``assert_property_reflection_equals_each``."""
    assert_property_reflection_equals_each(
        property_name, expected_values, actual_objects, *_LENIENT_MODES, message=message
    )
