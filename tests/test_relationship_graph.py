"""
Unit tests for guest conflict and preference edges
"""

import pytest
import uuid
from sqlmodel import select

from weddingflow.core.exceptions import NotFoundError, SeatingValidationError
from weddingflow.models import (
    Client, GuestConflict, ConflictSeverity, ConflictType, PreferenceStrength, Guest
)
from weddingflow.services.relationship_graph import GuestRelationshipGraph, normalize_pair


def test_normalize_pair_orders_ids():
    a, b = uuid.uuid4(), uuid.uuid4()
    low, high = sorted([a, b], key=str)

    assert normalize_pair(a, b) == (low, high)
    assert normalize_pair(b, a) == (low, high)


def test_normalize_pair_rejects_self_pair():
    guest_id = uuid.uuid4()
    with pytest.raises(SeatingValidationError):
        normalize_pair(guest_id, guest_id)


def test_add_conflict_stores_normalized_pair(db, company, wedding_client, guests):
    ana, ben = guests[0], guests[1]

    conflict = GuestRelationshipGraph(db).add_conflict(
        company.id, wedding_client.id, ben.id, ana.id, severity=ConflictSeverity.HIGH, reason="Old feud"
    )

    assert (conflict.guest_one_id, conflict.guest_two_id) == normalize_pair(ana.id, ben.id)
    assert conflict.severity == ConflictSeverity.HIGH
    assert conflict.is_active


def test_re_adding_conflict_updates_existing_row(db, company, wedding_client, guests):
    graph = GuestRelationshipGraph(db)
    ana, ben = guests[0], guests[1]

    first = graph.add_conflict(company.id, wedding_client.id, ana.id, ben.id, severity=ConflictSeverity.LOW)
    second = graph.add_conflict(
        company.id, wedding_client.id, ben.id, ana.id,
        conflict_type=ConflictType.EX_PARTNER, severity=ConflictSeverity.CRITICAL,
    )

    rows = db.exec(select(GuestConflict)).all()
    assert len(rows) == 1
    assert second.id == first.id
    assert second.severity == ConflictSeverity.CRITICAL
    assert second.conflict_type == ConflictType.EX_PARTNER


def test_removed_conflict_is_reactivated_by_add(db, company, wedding_client, guests):
    graph = GuestRelationshipGraph(db)
    ana, ben = guests[0], guests[1]

    conflict = graph.add_conflict(company.id, wedding_client.id, ana.id, ben.id)
    graph.remove_conflict(conflict.id, company.id)
    assert graph.get_conflicts(wedding_client.id, company.id) == []

    revived = graph.add_conflict(company.id, wedding_client.id, ana.id, ben.id)

    assert revived.id == conflict.id
    assert revived.is_active
    assert [c.id for c in graph.get_conflicts(wedding_client.id, company.id)] == [conflict.id]


def test_remove_keeps_row_inactive(db, company, wedding_client, guests):
    graph = GuestRelationshipGraph(db)
    conflict = graph.add_conflict(company.id, wedding_client.id, guests[0].id, guests[1].id)

    graph.remove_conflict(conflict.id, company.id)

    assert db.get(GuestConflict, conflict.id).is_active is False


def test_remove_from_other_company_is_not_found(db, company, other_company, wedding_client, guests):
    graph = GuestRelationshipGraph(db)
    conflict = graph.add_conflict(company.id, wedding_client.id, guests[0].id, guests[1].id)

    with pytest.raises(NotFoundError):
        graph.remove_conflict(conflict.id, other_company.id)


def test_add_conflict_with_guest_from_other_roster(db, company, other_company, wedding_client, guests):
    other_client = Client(company_id=other_company.id, partner1_name="Jo Park")
    db.add(other_client)
    db.commit()
    stranger = Guest(client_id=other_client.id, first_name="Zed")
    db.add(stranger)
    db.commit()

    with pytest.raises(NotFoundError):
        GuestRelationshipGraph(db).add_conflict(company.id, wedding_client.id, guests[0].id, stranger.id)


def test_preferences_are_independent_of_conflicts(db, company, wedding_client, guests):
    graph = GuestRelationshipGraph(db)
    ana, ben, cara = guests[0], guests[1], guests[2]

    graph.add_conflict(company.id, wedding_client.id, ana.id, ben.id)
    preference = graph.add_preference(
        company.id, wedding_client.id, ana.id, cara.id, strength=PreferenceStrength.REQUIRED
    )

    assert [p.id for p in graph.get_preferences(wedding_client.id, company.id)] == [preference.id]
    assert len(graph.preferences_for_guest(cara.id)) == 1
    assert graph.preferences_for_guest(ben.id) == []


def test_conflicts_for_guest_matches_either_side(db, company, wedding_client, guests):
    graph = GuestRelationshipGraph(db)
    ana, ben, cara = guests[0], guests[1], guests[2]
    graph.add_conflict(company.id, wedding_client.id, ana.id, ben.id)
    graph.add_conflict(company.id, wedding_client.id, cara.id, ana.id)

    assert len(graph.conflicts_for_guest(ana.id)) == 2
    assert len(graph.conflicts_for_guest(ben.id)) == 1
