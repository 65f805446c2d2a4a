"""
Conversion utilities between the pydantic Sample and the SQLAlchemy SampleRecord.
"""

from models import Sample

from .models import SampleRecord


def sample_to_db(sample: Sample) -> SampleRecord:
    """
    Convert a pydantic Sample to a SampleRecord.
    The key is copied as-is; auto-increment is the repository's job.
    """
    return SampleRecord(id=sample.id, name=sample.name)


def db_to_sample(record: SampleRecord) -> Sample:
    return Sample(id=record.id, name=record.name)
