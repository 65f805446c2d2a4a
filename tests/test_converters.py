"""Tests for Sample <-> SampleRecord conversion."""

from db import SampleRecord, db_to_sample, sample_to_db
from models import Sample


def test_sample_to_db_copies_fields():
    record = sample_to_db(Sample(id=7, name="seven"))

    assert isinstance(record, SampleRecord)
    assert record.id == 7
    assert record.name == "seven"


def test_db_to_sample_copies_fields():
    sample = db_to_sample(SampleRecord(id=3, name="three"))

    assert sample == Sample(id=3, name="three")


def test_default_sample_has_zero_values():
    assert Sample() == Sample(id=0, name="")
