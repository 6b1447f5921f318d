"""Bridges between the request-scoped database session and the DI container."""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TypeVar

from dependency_injector.providers import Provider
from sqlalchemy.orm import Session

from interview_coach.core import container
from interview_coach.database import DatabaseSession

T = TypeVar("T")


@contextmanager
def bound_session(db: Session) -> Iterator[None]:
    """Resolve every repository provider against ``db`` inside the block."""
    container.db.override(db)
    try:
        yield
    finally:
        container.db.reset_override()


def inject_use_case(provider: Provider[T]) -> Callable[[DatabaseSession], T]:
    """
    Turn a container provider into a FastAPI dependency.

    The use case and its repositories keep the request session after the
    override is lifted, so the session lives exactly as long as the request.
    """

    def dependency(db: DatabaseSession) -> T:
        with bound_session(db):
            return provider()

    return dependency
