"""Reporting-tree resolution and visibility scope module."""

from .hierarchy import OrgHierarchyResolver
from .scope import VisibilityScope

__all__ = [
    "OrgHierarchyResolver",
    "VisibilityScope",
]
