"""SQL-backed quota store.

Atomicity comes from a conditional UPDATE (count < limit) executed by the
database, plus the UNIQUE(identity, window) constraint for the first row of
a window.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import Engine, delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from thumbsmith.core.errors import QuotaStoreUnavailable
from thumbsmith.db.schema import UsageRecord
from thumbsmith.db.session import init_db, session_scope
from thumbsmith.models.domain import QuotaDecision
from thumbsmith.quota.base import Clock, QuotaStore

logger = logging.getLogger(__name__)


class SqlQuotaStore(QuotaStore):
    """Fixed-window counter in a relational database.

    Args:
        limit: Allowed requests per identity per window.
        engine: SQLAlchemy engine; tables are created if missing.
        clock: Time source.
    """

    def __init__(self, limit: int, engine: Engine, clock: Clock | None = None):
        super().__init__(limit, clock)
        self.engine = engine
        self._session_factory = sessionmaker(bind=engine)
        try:
            init_db(engine)
        except SQLAlchemyError as e:
            raise QuotaStoreUnavailable(f"SQL quota store unreachable: {e}") from e

    def ping(self) -> None:
        try:
            with self.engine.connect() as conn:
                conn.execute(select(1))
        except SQLAlchemyError as e:
            raise QuotaStoreUnavailable(f"SQL quota store unreachable: {e}") from e

    def _count(self, session: Session, identity: str, window: str) -> int | None:
        return session.execute(
            select(UsageRecord.count).where(
                UsageRecord.identity == identity,
                UsageRecord.window == window,
            )
        ).scalar_one_or_none()

    def _consume_once(self, identity: str, window: str) -> QuotaDecision:
        now = datetime.now(timezone.utc)
        with session_scope(self._session_factory) as session:
            result = session.execute(
                update(UsageRecord)
                .where(
                    UsageRecord.identity == identity,
                    UsageRecord.window == window,
                    UsageRecord.count < self.limit,
                )
                .values(count=UsageRecord.count + 1, updated_at=now)
                .execution_options(synchronize_session=False)
            )

            if result.rowcount:
                count = self._count(session, identity, window)
                return self._decision(count or 0)

            if self._count(session, identity, window) is not None:
                return QuotaDecision(allowed=False, remaining=0)

            # First request of the window: clear old windows and start at 1
            session.execute(
                delete(UsageRecord).where(
                    UsageRecord.identity == identity,
                    UsageRecord.window != window,
                )
            )
            session.add(UsageRecord(identity=identity, window=window, count=1, updated_at=now))
            session.flush()
            return self._decision(1)

    def check_and_consume(self, identity: str) -> QuotaDecision:
        window = self.current_window()
        try:
            try:
                return self._consume_once(identity, window)
            except IntegrityError:
                # A concurrent request inserted the row first; the retry takes the UPDATE path
                logger.debug(f"Usage row race for {identity} in {window}, retrying")
                return self._consume_once(identity, window)
        except SQLAlchemyError as e:
            raise QuotaStoreUnavailable(f"SQL quota check failed: {e}") from e

    def peek(self, identity: str) -> int:
        window = self.current_window()
        try:
            with session_scope(self._session_factory) as session:
                count = self._count(session, identity, window)
        except SQLAlchemyError as e:
            raise QuotaStoreUnavailable(f"SQL quota read failed: {e}") from e
        return max(0, self.limit - (count or 0))
