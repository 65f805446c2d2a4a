"""
SQLAlchemy ORM models for the persistence layer.
Primary keys are assigned client-side by the repository, so the engine's own
autoincrement is switched off.
"""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class SampleRecord(Base):
    """Database shape of a Sample."""

    __tablename__ = "samples"

    id = Column(Integer, primary_key=True, autoincrement=False, default=0)
    name = Column(String, nullable=False, default="")

    def __repr__(self) -> str:
        return f"<SampleRecord(id={self.id}, name={self.name})>"
