"""
Data layer for TalentScope.

Provides database connections, data models, and repository classes
for read access to the tracker's collections.

Submodules:
- database: MongoDB connection management
- models: Pydantic data models
- repositories: Read-only queries
"""

from .database import DatabaseManager, get_database_manager

__all__ = [
    "DatabaseManager",
    "get_database_manager",
]
