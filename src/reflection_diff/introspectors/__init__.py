"""Introspectors subpackage for reflection-diff.

An introspector tells the record comparator which ``(name, value)`` pairs of
a record take part in a comparison.  The base install provides
``AttributeIntrospector``, which handles plain classes, slotted classes,
dataclasses and attrs classes.

All introspectors satisfy the ``RecordIntrospector`` Protocol structurally.
"""

from reflection_diff.introspectors.attributes import AttributeIntrospector

__all__ = ["AttributeIntrospector"]
