"""Data access layer - Database models, connections and repositories."""

from .db_models import Base, ImageRecord
from .database import (
    DatabaseManager,
    get_db_manager,
    init_database,
)
from .repositories import ImageRecordRepository, validate_seed_ids

__all__ = [
    # Models
    'Base',
    'ImageRecord',

    # Database
    'DatabaseManager',
    'get_db_manager',
    'init_database',

    # Repositories
    'ImageRecordRepository',
    'validate_seed_ids',
]
