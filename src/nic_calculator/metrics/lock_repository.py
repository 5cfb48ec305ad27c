"""Time-to-live locks shared by every instance through the database."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timedelta
from uuid import uuid4

from sqlalchemy import delete, exc as sa_exc, select
from sqlalchemy.orm import Session

from ..db.db_models import LockModel
from ..exceptions import handle_sqlalchemy_errors
from ..utils.datetimes import as_utc, utc_now

logger = logging.getLogger(__name__)


class LockRepository:
    """Acquire and release named locks stored in the ``locks`` table.

    Acquisition is a single transaction: an expired row for the lock is
    removed, then a fresh row is inserted. The primary key makes the insert
    first-writer-wins across instances; a conflicting insert means the lock
    is held elsewhere.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._clock = clock or utc_now

    def try_acquire(self, lock_id: str, owner: str, ttl: timedelta) -> bool:
        now = as_utc(self._clock())
        with handle_sqlalchemy_errors(entity="lock"):
            with self._session_factory() as session:
                session.execute(
                    delete(LockModel).where(
                        LockModel.id == lock_id,
                        LockModel.expiry_time <= now,
                    )
                )
                session.add(
                    LockModel(
                        id=lock_id,
                        owner=owner,
                        time_created=now,
                        expiry_time=now + ttl,
                    )
                )
                try:
                    session.commit()
                except sa_exc.IntegrityError:
                    session.rollback()
                    return False
        return True

    def release(self, lock_id: str, owner: str) -> None:
        with handle_sqlalchemy_errors(entity="lock"):
            with self._session_factory() as session:
                session.execute(
                    delete(LockModel).where(
                        LockModel.id == lock_id,
                        LockModel.owner == owner,
                    )
                )
                session.commit()

    def is_locked(self, lock_id: str) -> bool:
        """Report whether an unexpired holder exists; for diagnostics only."""
        now = as_utc(self._clock())
        with handle_sqlalchemy_errors(entity="lock"):
            with self._session_factory() as session:
                row = session.execute(
                    select(LockModel.id).where(
                        LockModel.id == lock_id,
                        LockModel.expiry_time > now,
                    )
                ).first()
        return row is not None


@dataclass(frozen=True, slots=True)
class LockGuard:
    """Proof of ownership for a held lock."""

    lock_id: str
    owner: str


class LockService:
    """Scoped, fail-fast access to one named lock."""

    def __init__(
        self,
        repository: LockRepository,
        *,
        lock_id: str,
        ttl: timedelta,
    ) -> None:
        if ttl <= timedelta(0):
            raise ValueError("lock ttl must be positive")
        self._repository = repository
        self.lock_id = lock_id
        self.ttl = ttl

    @contextmanager
    def try_lock(self) -> Iterator[LockGuard | None]:
        """Yield a guard when the lock was free, ``None`` when it is held.

        The lock is released on every exit path; a failed release is logged
        and left to expire with its ttl.
        """
        owner = str(uuid4())
        if not self._repository.try_acquire(self.lock_id, owner, self.ttl):
            yield None
            return
        try:
            yield LockGuard(lock_id=self.lock_id, owner=owner)
        finally:
            try:
                self._repository.release(self.lock_id, owner)
            except Exception:
                logger.warning(
                    "lock.release.failed",
                    exc_info=True,
                    extra={"lock_id": self.lock_id},
                )


__all__ = ["LockGuard", "LockRepository", "LockService"]
