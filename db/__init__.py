from .converters import db_to_sample, sample_to_db
from .errors import StorageFailure, StorageResult
from .models import Base, SampleRecord
from .repository import Repository, SampleRepository
from .session import create_session_factory, session_scope

__all__ = [
    "Repository",
    "SampleRepository",
    "SampleRecord",
    "Base",
    "StorageFailure",
    "StorageResult",
    "create_session_factory",
    "session_scope",
    "sample_to_db",
    "db_to_sample",
]
