from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session


@contextmanager
def smart_transaction(session: Session) -> Iterator[Session]:
    """
    Context manager that begins a transaction on the given Session.
    If a transaction is already active, start a nested SAVEPOINT (begin_nested).
    Otherwise start a normal transaction (begin).
    Usage:
        with smart_transaction(db):
            ... DB work ...
    """
    if session.in_transaction():
        cm = session.begin_nested()
    else:
        cm = session.begin()
    with cm:
        yield session


@contextmanager
def unit_of_work(session: Session) -> Iterator[Session]:
    """
    Run a block of persistence work atomically and leave the session idle.

    The block runs inside smart_transaction, so a read that already autobegan
    a transaction gets a SAVEPOINT around the writes. On success the enclosing
    transaction is committed; on any exception everything is rolled back
    (including in-memory changes to loaded objects) and the exception is
    re-raised unchanged. Either way the connection goes back to the pool.
    """
    try:
        with smart_transaction(session):
            yield session
        if session.in_transaction():
            session.commit()
    except BaseException:
        session.rollback()
        raise
