"""
Unit tests for single guest assignment
"""

import pytest
import uuid
from sqlalchemy.exc import OperationalError
from sqlmodel import select

from weddingflow.core.exceptions import CapacityExceededError, NotFoundError
from weddingflow.models import (
    ChangeAction, Client, Guest, SeatAssignment, SeatingChangeLogEntry
)
from weddingflow.services.assignment_store import AssignmentStore
from weddingflow.services.relationship_graph import GuestRelationshipGraph


def _assignments(db, floor_plan):
    return db.exec(select(SeatAssignment).where(SeatAssignment.floor_plan_id == floor_plan.id)).all()


def _log(db, floor_plan):
    return db.exec(
        select(SeatingChangeLogEntry).where(SeatingChangeLogEntry.floor_plan_id == floor_plan.id)
    ).all()


def test_assign_guest_to_table(db, floor_plan, guests, make_table):
    table = make_table(table_number=1)

    outcome = AssignmentStore(db).assign(floor_plan.id, table.id, guests[0].id, seat_number=2)

    assert outcome.assignment.table_id == table.id
    assert outcome.assignment.seat_number == 2
    assert outcome.replaced is False
    assert outcome.conflicts == []

    entries = _log(db, floor_plan)
    assert [e.action for e in entries] == [ChangeAction.ASSIGN]
    assert entries[0].guest_id == guests[0].id


def test_full_table_rejects_next_guest(db, floor_plan, guests, make_table):
    """A capacity-2 table with two guests rejects a third; nothing changes."""
    store = AssignmentStore(db)
    table = make_table(table_number=1, capacity=2)
    store.assign(floor_plan.id, table.id, guests[0].id)
    store.assign(floor_plan.id, table.id, guests[1].id)

    with pytest.raises(CapacityExceededError) as exc_info:
        store.assign(floor_plan.id, table.id, guests[2].id)

    assert "would exceed capacity (2)" in str(exc_info.value)
    assert len(_assignments(db, floor_plan)) == 2
    assert len(_log(db, floor_plan)) == 2


def test_force_does_not_bypass_capacity(db, floor_plan, guests, make_table, seat):
    table = make_table(table_number=1, capacity=1)
    seat(guests[0], table)

    with pytest.raises(CapacityExceededError):
        AssignmentStore(db).assign(floor_plan.id, table.id, guests[1].id, force=True)


def test_conflict_is_advisory(db, company, wedding_client, floor_plan, guests, make_table, seat):
    """A conflicting seatmate is reported but the guest is still seated."""
    ana, ben = guests[0], guests[1]
    table = make_table(table_number=1)
    seat(ben, table)
    GuestRelationshipGraph(db).add_conflict(company.id, wedding_client.id, ana.id, ben.id)

    outcome = AssignmentStore(db).assign(floor_plan.id, table.id, ana.id)

    assert [c.guest_id for c in outcome.conflicts] == [ben.id]
    assert len(_assignments(db, floor_plan)) == 2
    assign_entry = [e for e in _log(db, floor_plan) if e.action == ChangeAction.ASSIGN][0]
    assert assign_entry.new_state["conflicts"][0]["guest_id"] == str(ben.id)


def test_force_skips_conflict_check(db, company, wedding_client, floor_plan, guests, make_table, seat):
    ana, ben = guests[0], guests[1]
    table = make_table(table_number=1)
    seat(ben, table)
    GuestRelationshipGraph(db).add_conflict(company.id, wedding_client.id, ana.id, ben.id)

    outcome = AssignmentStore(db).assign(floor_plan.id, table.id, ana.id, force=True)

    assert outcome.conflicts == []


def test_reassign_moves_guest(db, floor_plan, guests, make_table):
    store = AssignmentStore(db)
    first, second = make_table(table_number=1), make_table(table_number=2)
    store.assign(floor_plan.id, first.id, guests[0].id)

    outcome = store.assign(floor_plan.id, second.id, guests[0].id)

    rows = _assignments(db, floor_plan)
    assert outcome.replaced is True
    assert [(r.guest_id, r.table_id) for r in rows] == [(guests[0].id, second.id)]
    moves = [e for e in _log(db, floor_plan) if e.previous_state]
    assert [e.previous_state["table_id"] for e in moves] == [str(first.id)]


def test_reassign_to_same_full_table_is_allowed(db, floor_plan, guests, make_table):
    store = AssignmentStore(db)
    table = make_table(table_number=1, capacity=1)
    store.assign(floor_plan.id, table.id, guests[0].id)

    outcome = store.assign(floor_plan.id, table.id, guests[0].id, seat_number=1)

    assert outcome.replaced is True
    assert len(_assignments(db, floor_plan)) == 1


def test_unknown_table_is_not_found(db, floor_plan, guests):
    with pytest.raises(NotFoundError):
        AssignmentStore(db).assign(floor_plan.id, uuid.uuid4(), guests[0].id)


def test_guest_from_other_roster_is_not_found(db, floor_plan, make_table, other_company):
    other_client = Client(company_id=other_company.id, partner1_name="Jo Park")
    db.add(other_client)
    db.commit()
    stranger = Guest(client_id=other_client.id, first_name="Zed")
    db.add(stranger)
    db.commit()
    table = make_table(table_number=1)

    with pytest.raises(NotFoundError):
        AssignmentStore(db).assign(floor_plan.id, table.id, stranger.id)


def test_unassign_removes_seat_and_logs(db, floor_plan, guests, make_table):
    store = AssignmentStore(db)
    table = make_table(table_number=1)
    store.assign(floor_plan.id, table.id, guests[0].id)

    assert store.unassign(floor_plan.id, guests[0].id) is True

    assert _assignments(db, floor_plan) == []
    assert [e.action for e in _log(db, floor_plan)] == [ChangeAction.ASSIGN, ChangeAction.UNASSIGN]


def test_unassign_without_seat_is_noop(db, floor_plan, guests):
    assert AssignmentStore(db).unassign(floor_plan.id, guests[0].id) is False
    assert _log(db, floor_plan) == []


def test_table_occupancy(db, floor_plan, guests, make_table, seat):
    first, second = make_table(table_number=1), make_table(table_number=2)
    seat(guests[0], first)
    seat(guests[1], first)
    seat(guests[2], second)

    occupancy = AssignmentStore(db).table_occupancy(floor_plan.id)

    assert occupancy == {first.id: 2, second.id: 1}
    assert len(AssignmentStore(db).list_assignments(floor_plan.id)) == 3


def test_change_log_failure_does_not_undo_assignment(db, floor_plan, guests, make_table, monkeypatch):
    table = make_table(table_number=1)
    real_commit = db.commit

    def commit():
        if any(isinstance(obj, SeatingChangeLogEntry) for obj in db.new):
            raise OperationalError("INSERT INTO seating_change_log", {}, Exception("disk I/O error"))
        real_commit()

    monkeypatch.setattr(db, "commit", commit)

    outcome = AssignmentStore(db).assign(floor_plan.id, table.id, guests[0].id)

    assert outcome.assignment.guest_id == guests[0].id
    assert len(_assignments(db, floor_plan)) == 1
    assert _log(db, floor_plan) == []
