"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from db import SampleRepository, create_session_factory


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    """Provide a throwaway SQLite database per test."""
    return f"sqlite:///{tmp_path / 'test.db'}"


@pytest.fixture
def session_factory(database_url: str):
    factory = create_session_factory(database_url, echo=False)
    yield factory
    factory.kw["bind"].dispose()


@pytest.fixture
def repo(session_factory) -> SampleRepository:
    """Provide a SampleRepository over a fresh schema."""
    return SampleRepository(session_factory)


@pytest.fixture
def broken_repo(tmp_path: Path) -> SampleRepository:
    """Provide a SampleRepository whose tables were never created, so every call fails."""
    factory = create_session_factory(f"sqlite:///{tmp_path / 'empty.db'}", echo=False, create_schema=False)
    yield SampleRepository(factory)
    factory.kw["bind"].dispose()
