# File: divesight/api/deps.py

from collections.abc import Iterator

from sqlalchemy.orm import Session

from divesight.db.session import SessionLocal


def get_db() -> Iterator[Session]:
    """
    One store session per request, closed once the response is sent.

    Routes only read, so nothing is committed here. Tests swap this
    dependency for one bound to an in-memory database.
    """
    with SessionLocal() as db:
        yield db
