"""
Guest relationship graph: undirected conflict and preference edges

Edges are keyed by (client, lower guest id, higher guest id). Adding an edge
that already exists updates it in place and reactivates it; removing an edge
only clears is_active so the history is kept.
"""

from datetime import datetime
from typing import List, Optional, Tuple, Type, Union
import uuid

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select
import structlog

from weddingflow.core.database import atomic
from weddingflow.core.exceptions import InternalFailureError, NotFoundError, SeatingValidationError
from weddingflow.models.guest import Guest
from weddingflow.models.guest_relationship import (
    GuestConflict, GuestPreference, ConflictType, ConflictSeverity,
    PreferenceType, PreferenceStrength
)

logger = structlog.get_logger(__name__)

Edge = Union[GuestConflict, GuestPreference]


def normalize_pair(guest_a: uuid.UUID, guest_b: uuid.UUID) -> Tuple[uuid.UUID, uuid.UUID]:
    """Order a pair so the lower id comes first"""
    if guest_a == guest_b:
        raise SeatingValidationError("A guest cannot be paired with themselves", context={"guest_id": str(guest_a)})
    return (guest_a, guest_b) if str(guest_a) < str(guest_b) else (guest_b, guest_a)


class GuestRelationshipGraph:
    """Catalog of conflict and preference edges for a client's guests"""

    def __init__(self, session: Session):
        self.session = session

    def add_conflict(
        self,
        company_id: uuid.UUID,
        client_id: uuid.UUID,
        guest_a: uuid.UUID,
        guest_b: uuid.UUID,
        conflict_type: ConflictType = ConflictType.GENERAL,
        severity: ConflictSeverity = ConflictSeverity.MODERATE,
        reason: Optional[str] = None,
        created_by: Optional[uuid.UUID] = None,
    ) -> GuestConflict:
        edge = self._upsert_edge(
            GuestConflict, company_id, client_id, guest_a, guest_b,
            {"conflict_type": conflict_type, "severity": severity, "reason": reason},
            created_by,
        )
        logger.info("guest_conflict_saved", conflict_id=str(edge.id), severity=edge.severity.value)
        return edge

    def add_preference(
        self,
        company_id: uuid.UUID,
        client_id: uuid.UUID,
        guest_a: uuid.UUID,
        guest_b: uuid.UUID,
        preference_type: PreferenceType = PreferenceType.TOGETHER,
        strength: PreferenceStrength = PreferenceStrength.PREFERRED,
        reason: Optional[str] = None,
        created_by: Optional[uuid.UUID] = None,
    ) -> GuestPreference:
        edge = self._upsert_edge(
            GuestPreference, company_id, client_id, guest_a, guest_b,
            {"preference_type": preference_type, "strength": strength, "reason": reason},
            created_by,
        )
        logger.info("guest_preference_saved", preference_id=str(edge.id), strength=edge.strength.value)
        return edge

    def remove_conflict(self, conflict_id: uuid.UUID, company_id: uuid.UUID) -> GuestConflict:
        return self._deactivate(GuestConflict, conflict_id, company_id)

    def remove_preference(self, preference_id: uuid.UUID, company_id: uuid.UUID) -> GuestPreference:
        return self._deactivate(GuestPreference, preference_id, company_id)

    def get_conflicts(self, client_id: uuid.UUID, company_id: uuid.UUID) -> List[GuestConflict]:
        return self._active(GuestConflict, client_id, company_id)

    def get_preferences(self, client_id: uuid.UUID, company_id: uuid.UUID) -> List[GuestPreference]:
        return self._active(GuestPreference, client_id, company_id)

    def conflicts_for_guest(self, guest_id: uuid.UUID) -> List[GuestConflict]:
        return self._touching(GuestConflict, guest_id)

    def preferences_for_guest(self, guest_id: uuid.UUID) -> List[GuestPreference]:
        return self._touching(GuestPreference, guest_id)

    def _upsert_edge(
        self,
        model: Type[Edge],
        company_id: uuid.UUID,
        client_id: uuid.UUID,
        guest_a: uuid.UUID,
        guest_b: uuid.UUID,
        fields: dict,
        created_by: Optional[uuid.UUID],
    ) -> Edge:
        """
        Insert-or-update keyed by the normalized pair.

        A concurrent insert of the same pair fails the unique key on flush;
        the write is then retried once, which finds the winner's row and
        updates it.
        """
        guest_one, guest_two = normalize_pair(guest_a, guest_b)
        for guest_id in (guest_one, guest_two):
            guest = self.session.get(Guest, guest_id)
            if not guest or guest.client_id != client_id:
                raise NotFoundError("Guest", guest_id)

        for attempt in range(2):
            try:
                with atomic(self.session, "save guest relationship"):
                    edge = self.session.exec(
                        select(model).where(
                            model.client_id == client_id,
                            model.guest_one_id == guest_one,
                            model.guest_two_id == guest_two,
                        ).with_for_update()
                    ).first()
                    if edge:
                        for key, value in fields.items():
                            setattr(edge, key, value)
                        edge.is_active = True
                        edge.updated_at = datetime.utcnow()
                    else:
                        edge = model(
                            company_id=company_id,
                            client_id=client_id,
                            guest_one_id=guest_one,
                            guest_two_id=guest_two,
                            created_by=created_by,
                            **fields,
                        )
                    self.session.add(edge)
                    self.session.flush()
                break
            except InternalFailureError as e:
                if attempt or not isinstance(e.__cause__, IntegrityError):
                    raise
                logger.warning("guest_relationship_insert_race", client_id=str(client_id))
        self.session.refresh(edge)
        return edge

    def _deactivate(self, model: Type[Edge], edge_id: uuid.UUID, company_id: uuid.UUID) -> Edge:
        edge = self.session.exec(
            select(model).where(model.id == edge_id, model.company_id == company_id)
        ).first()
        if not edge:
            raise NotFoundError(model.__name__, edge_id)
        with atomic(self.session, "remove guest relationship"):
            edge.is_active = False
            edge.updated_at = datetime.utcnow()
            self.session.add(edge)
        self.session.refresh(edge)
        logger.info("guest_relationship_deactivated", kind=model.__tablename__, edge_id=str(edge_id))
        return edge

    def _active(self, model: Type[Edge], client_id: uuid.UUID, company_id: uuid.UUID) -> List[Edge]:
        return list(self.session.exec(
            select(model).where(
                model.client_id == client_id,
                model.company_id == company_id,
                model.is_active == True,  # noqa: E712
            ).order_by(model.created_at)
        ).all())

    def _touching(self, model: Type[Edge], guest_id: uuid.UUID) -> List[Edge]:
        return list(self.session.exec(
            select(model).where(
                model.is_active == True,  # noqa: E712
                or_(model.guest_one_id == guest_id, model.guest_two_id == guest_id),
            )
        ).all())
