"""pytest plugin for reflection-diff.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from typing import Any

import pytest

from reflection_diff import ComparatorMode
from reflection_diff.assertions import assert_reflection_equals


@pytest.fixture(scope="session")
def assert_reflection_equal() -> Any:
    """Fixture that returns a callable reflection equality asserter.

    The fixture is session-scoped because the returned callable is stateless
    (every call builds a fresh ReflectionComparator).

    Usage in tests::

        def test_user(assert_reflection_equal):
            assert_reflection_equal(User("Ann", ["a"]), load_user("Ann"))

        def test_unordered(assert_reflection_equal):
            assert_reflection_equal([1, 2], [2, 1], "lenient_order")

    Returns:
        A callable ``_assert(expected, actual, *modes, message=None) -> None``
        that raises ``AssertionError`` with a difference report when the values
        differ.
    """

    def _assert(
        expected: Any,
        actual: Any,
        *modes: ComparatorMode | str,
        message: str | None = None,
    ) -> None:
        """Assert that ``actual`` is reflection-equal to ``expected``.

        Args:
            expected: The expected value (left operand).
            actual:   The value produced by the code under test.
            *modes:   Leniency modes, as members or their string values.
            message:  Optional message put in front of the report.

        Raises:
            AssertionError: When a difference is found.
        """
        assert_reflection_equals(expected, actual, *modes, message=message)

    return _assert
