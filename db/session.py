"""
Engine and session construction.

Every repository call opens its own short-lived session through
`session_scope`; nothing holds a connection between calls.
"""

from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

import config
from utils import get_logger

from .models import Base

logger = get_logger(__name__)


def create_session_factory(
    database_url: Optional[str] = None,
    echo: Optional[bool] = None,
    create_schema: bool = True,
) -> sessionmaker:
    """
    Build an engine for `database_url` and return a session factory bound to it.

    Args:
        database_url: SQLAlchemy URL, defaults to config.DATABASE_URL.
        echo: Log emitted SQL, defaults to config.DATABASE_ECHO.
        create_schema: Create missing tables before returning.
    """
    url = database_url or config.DATABASE_URL
    engine = create_engine(url, echo=config.DATABASE_ECHO if echo is None else echo)
    if create_schema:
        Base.metadata.create_all(engine)
        logger.info(f"Database schema ready at {url}")
    # Records handed back to callers must stay readable after the session closes.
    return sessionmaker(bind=engine, expire_on_commit=False)


@contextmanager
def session_scope(session_factory: sessionmaker) -> Iterator[Session]:
    """Yield a session, committing on success and rolling back on error."""
    session = session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
