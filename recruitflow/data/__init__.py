"""
Data layer for RecruitFlow.

Provides database connections, data models, entity stores and repository
classes for data access throughout the application.

Submodules:
- database: MongoDB connection management
- models: Pydantic data models/schemas
- store: entity store adapters (in-memory and MongoDB)
- repositories: entity operations and queries
"""

from .database import DatabaseManager, get_database_manager

__all__ = [
    "DatabaseManager",
    "get_database_manager",
]
