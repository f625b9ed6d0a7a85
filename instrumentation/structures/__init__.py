"""Ordered collection primitives."""

from instrumentation.structures.linked_list import Location, OrderedList, OrderedListView

__all__ = [
    "Location",
    "OrderedList",
    "OrderedListView",
]
