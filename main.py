from typing import Optional

import config
from db import SampleRepository, create_session_factory
from models import Sample
from utils import get_logger

logger = get_logger(__name__)


def _first_model(repository: SampleRepository) -> Optional[Sample]:
    models = repository.fetch_all_models()
    if not models:
        return None
    sample = models[0]
    logger.info(f"get first id: {sample.id}")
    logger.info(f"get first name: {sample.name}")
    return sample


def run_demo(repository: SampleRepository) -> Optional[Sample]:
    """
    Exercise the repository end to end:
    1. Clear the table.
    2. Insert one sample (the key is assigned by the repository).
    3. Read it back, rename it and upsert it.
    4. Read it back again.

    Returns the final stored sample, or None if nothing could be read.
    """
    repository.delete_all()
    repository.insert(Sample(name="sample!"))

    sample = _first_model(repository)
    if sample is None:
        return None

    sample.name = "sample sample"
    repository.upsert(sample)

    return _first_model(repository)


if __name__ == "__main__":
    logger.info(f"Database: {config.DATABASE_URL}")
    repo = SampleRepository(create_session_factory())

    result = run_demo(repo)
    if result is None:
        print("id: unknown")
        print("name: unknown")
    else:
        print(f"id: {result.id}")
        print(f"name: {result.name}")
