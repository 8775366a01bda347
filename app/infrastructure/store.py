"""Transactional access to the content store with bounded retries.

Every write path of the engine goes through :meth:`ContentStore.run`, which
executes a unit of work inside one transaction and commits it. Races detected
by the database (unique constraints, optimistic version checks) surface as
:class:`ConcurrencyConflict` and the unit of work is replayed from a fresh
read. Transient failures surface as :class:`StoreUnavailable` and are retried
with exponential backoff only when the caller marks the unit as idempotent.
"""

from __future__ import annotations

import logging
import random
import time
from typing import Callable, TypeVar

from sqlalchemy import update
from sqlalchemy.exc import (
    DBAPIError,
    IntegrityError,
    InterfaceError,
    OperationalError,
)
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from app.config import Settings, get_settings
from app.domain.errors import ConcurrencyConflict, ConflictError, StoreUnavailable

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _is_transient(exc: DBAPIError) -> bool:
    return isinstance(exc, (OperationalError, InterfaceError)) or bool(
        exc.connection_invalidated
    )


class ContentStore:
    """Run units of work against a session, replaying them on conflicts."""

    def __init__(self, session: Session, *, settings: Settings | None = None) -> None:
        self.session = session
        self.settings = settings or get_settings()

    def run(
        self,
        operation: Callable[[Session], T],
        *,
        name: str,
        retry_unavailable: bool = True,
    ) -> T:
        """Execute ``operation`` in a transaction and commit its result.

        Args:
            operation: Callable receiving the session. It must re-read whatever
                state it depends on, since it may be invoked several times.
            name: Label used in log messages.
            retry_unavailable: Whether transient store failures may be retried.
                Leave it off for non-idempotent deltas.

        Raises:
            ConflictError: Concurrent writers won every attempt.
            StoreUnavailable: The store kept failing or retries were disabled.
        """

        max_attempts = self.settings.store_max_attempts
        delay = self.settings.store_retry_initial_delay

        for attempt in range(1, max_attempts + 1):
            try:
                result = operation(self.session)
                self.session.commit()
            except ConcurrencyConflict as exc:
                self.session.rollback()
                conflict: Exception = exc
            except (IntegrityError, StaleDataError) as exc:
                self.session.rollback()
                conflict = exc
            except DBAPIError as exc:
                self.session.rollback()
                if not _is_transient(exc):
                    raise
                if not retry_unavailable or attempt >= max_attempts:
                    logger.error(
                        "%s failed after %s attempt(s): store unavailable", name, attempt
                    )
                    raise StoreUnavailable(f"{name}: {exc.orig or exc}") from exc
                pause = self._jittered(delay)
                logger.warning(
                    "%s hit an unavailable store on attempt %s/%s, retrying in %.2fs",
                    name,
                    attempt,
                    max_attempts,
                    pause,
                )
                time.sleep(pause)
                delay = min(delay * 2, self.settings.store_retry_max_delay)
                continue
            except Exception:
                self.session.rollback()
                raise
            else:
                if attempt > 1:
                    logger.info("%s succeeded on attempt %s/%s", name, attempt, max_attempts)
                return result

            if attempt >= max_attempts:
                logger.error("%s lost %s concurrent races in a row", name, attempt)
                raise ConflictError(
                    f"{name} could not be applied after {attempt} attempts"
                ) from conflict
            logger.warning(
                "%s conflicted with a concurrent writer on attempt %s/%s: %s",
                name,
                attempt,
                max_attempts,
                conflict,
            )

        raise ConflictError(f"{name} could not be applied")  # pragma: no cover

    def _jittered(self, delay: float) -> float:
        jitter = delay * 0.25
        pause = delay + random.uniform(-jitter, jitter)
        return max(0.0, min(pause, self.settings.store_retry_max_delay))


def increment_counters(
    session: Session, model: type, record_id: int, deltas: dict[str, object]
) -> bool:
    """Atomically add ``deltas`` to numeric columns of one row.

    Returns ``False`` when no row matched ``record_id``.
    """

    columns = {name: getattr(model, name) + delta for name, delta in deltas.items()}
    result = session.execute(
        update(model)
        .where(model.id == record_id)
        .values(columns)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount > 0


__all__ = ["ContentStore", "increment_counters"]
