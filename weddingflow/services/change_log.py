"""
Seating change log service
Append-only audit trail of assignment-affecting actions
"""

from dataclasses import dataclass
from typing import Any, List, Optional
import uuid

from fastapi.encoders import jsonable_encoder
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select
import structlog

from weddingflow.core.config import get_settings
from weddingflow.models.seating_change_log import SeatingChangeLogEntry, ChangeAction

logger = structlog.get_logger(__name__)
settings = get_settings()


@dataclass(frozen=True)
class LogResult:
    """Outcome of a change-log write. A failed write is reported here, never raised."""
    ok: bool
    entry_id: Optional[uuid.UUID] = None
    error: Optional[str] = None


class ChangeLog:
    """Writes and reads seating_change_log rows"""

    def __init__(self, session: Session, company_id: Optional[uuid.UUID] = None):
        self.session = session
        self.company_id = company_id

    def log(
        self,
        floor_plan_id: uuid.UUID,
        action: ChangeAction,
        guest_id: Optional[uuid.UUID] = None,
        table_id: Optional[uuid.UUID] = None,
        previous_state: Any = None,
        new_state: Any = None,
        changed_by: Optional[uuid.UUID] = None,
    ) -> LogResult:
        """
        Append one entry in its own transaction.

        Called after the triggering mutation has committed, so a failure here
        can only lose the audit row, never the mutation itself.

        Returns:
            LogResult with ok=False and the error text when the insert failed
        """
        try:
            entry = SeatingChangeLogEntry(
                floor_plan_id=floor_plan_id,
                company_id=self.company_id,
                action=action,
                guest_id=guest_id,
                table_id=table_id,
                previous_state=jsonable_encoder(previous_state),
                new_state=jsonable_encoder(new_state),
                changed_by=changed_by,
            )
            self.session.add(entry)
            self.session.commit()
        except (SQLAlchemyError, ValueError, TypeError) as e:
            self.session.rollback()
            logger.warning(
                "change_log_write_failed",
                floor_plan_id=str(floor_plan_id),
                action=action.value,
                error=str(e),
            )
            return LogResult(ok=False, error=str(e))

        logger.debug("change_logged", floor_plan_id=str(floor_plan_id), action=action.value)
        return LogResult(ok=True, entry_id=entry.id)

    def history(self, floor_plan_id: uuid.UUID, limit: Optional[int] = None) -> List[SeatingChangeLogEntry]:
        """Newest entries first"""
        limit = limit or settings.CHANGE_LOG_DEFAULT_LIMIT
        limit = max(1, min(limit, settings.CHANGE_LOG_MAX_LIMIT))
        query = select(SeatingChangeLogEntry).where(SeatingChangeLogEntry.floor_plan_id == floor_plan_id)
        if self.company_id is not None:
            query = query.where(SeatingChangeLogEntry.company_id == self.company_id)
        # id breaks ties between entries stamped in the same tick
        query = query.order_by(
            SeatingChangeLogEntry.changed_at.desc(), SeatingChangeLogEntry.id.desc()
        ).limit(limit)
        return list(self.session.exec(query).all())
