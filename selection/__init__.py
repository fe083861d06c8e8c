"""Selection package - pages marked for export."""

from .selection_set import SelectionSet

__all__ = ['SelectionSet']
