"""
Unit tests for seating versions
"""

import pytest
import uuid
from sqlmodel import select

from weddingflow.core.exceptions import CapacityExceededError, NotFoundError
from weddingflow.models import ChangeAction, FloorPlanTable, SeatAssignment, SeatingChangeLogEntry, SeatingVersion
from weddingflow.services.version_store import VersionStore


def _seating(db, floor_plan):
    rows = db.exec(select(SeatAssignment).where(SeatAssignment.floor_plan_id == floor_plan.id)).all()
    return {row.guest_id: row.table_id for row in rows}


def _current_versions(db, floor_plan):
    return db.exec(
        select(SeatingVersion).where(
            SeatingVersion.floor_plan_id == floor_plan.id,
            SeatingVersion.is_current == True,  # noqa: E712
        )
    ).all()


def test_save_snapshots_tables_and_assignments(db, floor_plan, guests, make_table, seat):
    table = make_table(table_number=1, x=120, y=80)
    seat(guests[0], table)
    seat(guests[1], table)

    version = VersionStore(db).save(floor_plan.id, "First draft", description="Before RSVPs")

    assert version.version_number == 1
    assert version.is_current
    assert version.total_tables == 1
    assert version.assigned_guests == 2
    assert version.total_guests == len(guests)
    snapshot = version.table_snapshots()[0]
    assert (snapshot.id, snapshot.x, snapshot.y) == (table.id, 120, 80)
    assert {a.guest_id for a in version.assignment_snapshots()} == {guests[0].id, guests[1].id}


def test_version_numbers_increase_and_one_is_current(db, floor_plan, make_table):
    make_table(table_number=1)
    store = VersionStore(db)

    versions = [store.save(floor_plan.id, f"Draft {i}") for i in range(3)]

    assert [v.version_number for v in versions] == [1, 2, 3]
    assert [v.id for v in _current_versions(db, floor_plan)] == [versions[-1].id]
    assert store.get_current(floor_plan.id).id == versions[-1].id
    assert [v.version_number for v in store.list_versions(floor_plan.id)] == [3, 2, 1]


def test_restore_replaces_assignments_and_positions(db, floor_plan, guests, make_table, seat):
    first, second = make_table(table_number=1, x=100, y=100), make_table(table_number=2)
    seat(guests[0], first)
    seat(guests[1], first)
    store = VersionStore(db)
    saved = store.save(floor_plan.id, "Original")

    # Rearrange after saving
    for row in db.exec(select(SeatAssignment)).all():
        db.delete(row)
    db.commit()
    seat(guests[2], second)
    first.x = 900
    db.add(first)
    db.commit()
    store.save(floor_plan.id, "Rearranged")

    outcome = store.restore(saved.id, floor_plan.id)

    assert outcome.restored_tables == 2
    assert outcome.restored_assignments == 2
    assert _seating(db, floor_plan) == {guests[0].id: first.id, guests[1].id: first.id}
    assert db.get(FloorPlanTable, first.id).x == 100
    assert [v.id for v in _current_versions(db, floor_plan)] == [saved.id]
    actions = db.exec(select(SeatingChangeLogEntry.action)).all()
    assert ChangeAction.RESTORE_VERSION in actions


def test_restore_skips_deleted_tables(db, floor_plan, guests, make_table, seat):
    kept, dropped = make_table(table_number=1), make_table(table_number=2)
    seat(guests[0], kept)
    seat(guests[1], dropped)
    store = VersionStore(db)
    saved = store.save(floor_plan.id, "Two tables")

    db.delete(db.exec(select(SeatAssignment).where(SeatAssignment.table_id == dropped.id)).one())
    db.delete(dropped)
    db.commit()

    outcome = store.restore(saved.id, floor_plan.id)

    assert (outcome.skipped_tables, outcome.skipped_assignments) == (1, 1)
    assert _seating(db, floor_plan) == {guests[0].id: kept.id}


def test_restore_rejects_snapshot_over_current_capacity(db, floor_plan, guests, make_table, seat):
    table = make_table(table_number=1, capacity=3)
    for guest in guests[:3]:
        seat(guest, table)
    store = VersionStore(db)
    saved = store.save(floor_plan.id, "Full table")

    for row in db.exec(select(SeatAssignment)).all():
        db.delete(row)
    db.commit()
    seat(guests[4], table)
    table.capacity = 2
    db.add(table)
    db.commit()

    with pytest.raises(CapacityExceededError):
        store.restore(saved.id, floor_plan.id)

    assert _seating(db, floor_plan) == {guests[4].id: table.id}


def test_restore_version_of_other_floor_plan_is_not_found(db, floor_plan, make_table):
    make_table(table_number=1)
    saved = VersionStore(db).save(floor_plan.id, "Mine")

    with pytest.raises(NotFoundError):
        VersionStore(db).restore(saved.id, uuid.uuid4())


def test_delete_current_version_does_not_promote(db, floor_plan, make_table):
    make_table(table_number=1)
    store = VersionStore(db)
    older = store.save(floor_plan.id, "Older")
    newer = store.save(floor_plan.id, "Newer")

    store.delete_version(newer.id)

    assert store.get_current(floor_plan.id) is None
    assert db.get(SeatingVersion, older.id).is_current is False
    assert store.save(floor_plan.id, "Next").version_number == 2
