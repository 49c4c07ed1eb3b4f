"""
Storage layer: schema management and the task repository.
"""
from .schema import SchemaManager
from .task_repository import TaskRepository

__all__ = [
    'SchemaManager',
    'TaskRepository',
]
