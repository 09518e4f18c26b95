"""
Unit tests for all-or-nothing batch assignment
"""

import pytest
import uuid
from sqlmodel import select

from weddingflow.core.exceptions import CapacityExceededError, NotFoundError, SeatingValidationError
from weddingflow.models import ChangeAction, SeatAssignment, SeatingChangeLogEntry
from weddingflow.schemas.seating import BatchAssignItem
from weddingflow.services.batch_assignment import BatchAssignmentCoordinator


def _seating(db, floor_plan):
    rows = db.exec(select(SeatAssignment).where(SeatAssignment.floor_plan_id == floor_plan.id)).all()
    return {row.guest_id: row.table_id for row in rows}


def _item(guest, table):
    return BatchAssignItem(guest_id=guest.id, table_id=table.id)


def test_empty_batch_writes_nothing(db, floor_plan):
    outcome = BatchAssignmentCoordinator(db).batch_assign(floor_plan.id, [])

    assert outcome.assigned == 0
    assert db.exec(select(SeatingChangeLogEntry)).all() == []


def test_batch_assigns_all_items(db, floor_plan, guests, make_table):
    first, second = make_table(table_number=1), make_table(table_number=2)

    outcome = BatchAssignmentCoordinator(db).batch_assign(
        floor_plan.id, [_item(guests[0], first), _item(guests[1], first), _item(guests[2], second)]
    )

    assert outcome.assigned == 3
    assert _seating(db, floor_plan) == {
        guests[0].id: first.id, guests[1].id: first.id, guests[2].id: second.id,
    }
    entries = db.exec(select(SeatingChangeLogEntry)).all()
    assert [e.action for e in entries] == [ChangeAction.BATCH_ASSIGN]
    assert entries[0].new_state["count"] == 3


def test_batch_overflow_writes_nothing(db, floor_plan, guests, make_table, seat):
    """Two guests for a capacity-1 table: the batch fails and prior seats survive."""
    t1 = make_table(table_number=1, capacity=1)
    t2 = make_table(table_number=2)
    seat(guests[3], t2)
    before = _seating(db, floor_plan)

    with pytest.raises(CapacityExceededError) as exc_info:
        BatchAssignmentCoordinator(db).batch_assign(
            floor_plan.id, [_item(guests[3], t1), _item(guests[4], t1)]
        )

    assert exc_info.value.table_label == "1"
    assert _seating(db, floor_plan) == before
    assert db.exec(select(SeatingChangeLogEntry)).all() == []


def test_batch_counts_existing_occupants(db, floor_plan, guests, make_table, seat):
    table = make_table(table_number=1, capacity=2)
    seat(guests[0], table)
    seat(guests[1], table)

    with pytest.raises(CapacityExceededError):
        BatchAssignmentCoordinator(db).batch_assign(floor_plan.id, [_item(guests[2], table)])


def test_batch_can_swap_guests_between_full_tables(db, floor_plan, guests, make_table, seat):
    first = make_table(table_number=1, capacity=1)
    second = make_table(table_number=2, capacity=1)
    seat(guests[0], first)
    seat(guests[1], second)

    outcome = BatchAssignmentCoordinator(db).batch_assign(
        floor_plan.id, [_item(guests[0], second), _item(guests[1], first)]
    )

    assert outcome.replaced == 2
    assert _seating(db, floor_plan) == {guests[0].id: second.id, guests[1].id: first.id}


def test_duplicate_guest_is_rejected(db, floor_plan, guests, make_table):
    first, second = make_table(table_number=1), make_table(table_number=2)

    with pytest.raises(SeatingValidationError):
        BatchAssignmentCoordinator(db).batch_assign(
            floor_plan.id, [_item(guests[0], first), _item(guests[0], second)]
        )


def test_unknown_table_is_not_found(db, floor_plan, guests):
    with pytest.raises(NotFoundError):
        BatchAssignmentCoordinator(db).batch_assign(
            floor_plan.id, [BatchAssignItem(guest_id=guests[0].id, table_id=uuid.uuid4())]
        )


def test_unknown_guest_is_not_found(db, floor_plan, make_table):
    table = make_table(table_number=1)

    with pytest.raises(NotFoundError):
        BatchAssignmentCoordinator(db).batch_assign(
            floor_plan.id, [BatchAssignItem(guest_id=uuid.uuid4(), table_id=table.id)]
        )
