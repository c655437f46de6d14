from __future__ import annotations

from models.constraint import ConstraintKind, TimeConstraint
from models.entities import EntityType, class_ref, teacher_ref
from models.results import ConflictKind
from services import constraint_store


def _toggle(store, entity, day, period, kind, **kw):
    result = constraint_store.toggle(store, entity, day, period, kind, **kw)
    assert result.ok, result.conflict
    return result.store


def test_toggle_inserts_new_record(empty_constraints, teacher_ali, now):
    store = _toggle(empty_constraints, teacher_ali, "Pazartesi", "1", ConstraintKind.UNAVAILABLE, now=now)

    found = constraint_store.query(store, EntityType.TEACHER, "teach-ali-veli", "Pazartesi", "1")
    assert found is not None
    assert found.constraint_type is ConstraintKind.UNAVAILABLE
    assert found.reason == "Unavailable - Ali Veli"
    assert found.created_at == now
    assert found.updated_at == now
    assert store.version == empty_constraints.version + 1
    assert len(empty_constraints) == 0


def test_same_kind_toggles_alternate_presence(empty_constraints, teacher_ali):
    store = empty_constraints
    for i in range(6):
        store = _toggle(store, teacher_ali, "Salı", "3", "unavailable")
        present = constraint_store.query(store, "teacher", "teach-ali-veli", "Salı", "3") is not None
        assert present == (i % 2 == 0)
    assert len(store) == 0


def test_different_kind_replaces_in_place(empty_constraints, teacher_ali, now, later):
    store = _toggle(empty_constraints, teacher_ali, "Cuma", "2", ConstraintKind.UNAVAILABLE, now=now)
    original = constraint_store.query(store, "teacher", "teach-ali-veli", "Cuma", "2")

    store = _toggle(store, teacher_ali, "Cuma", "2", ConstraintKind.RESTRICTED, reason="Meeting", now=later)
    updated = constraint_store.query(store, "teacher", "teach-ali-veli", "Cuma", "2")

    assert len(store) == 1
    assert updated.id == original.id
    assert updated.constraint_type is ConstraintKind.RESTRICTED
    assert updated.reason == "Meeting"
    assert updated.created_at == now
    assert updated.updated_at == later


def test_three_way_cycle(empty_constraints, teacher_ali):
    store = _toggle(empty_constraints, teacher_ali, "Perşembe", "4", "unavailable")
    store = _toggle(store, teacher_ali, "Perşembe", "4", "preferred")
    assert constraint_store.query(store, "teacher", "teach-ali-veli", "Perşembe", "4").constraint_type is ConstraintKind.PREFERRED
    store = _toggle(store, teacher_ali, "Perşembe", "4", "preferred")
    assert constraint_store.query(store, "teacher", "teach-ali-veli", "Perşembe", "4") is None


def test_toggle_on_break_period_is_rejected(empty_constraints, teacher_ali):
    store = _toggle(empty_constraints, teacher_ali, "Pazartesi", "1", "unavailable")

    result = constraint_store.toggle(store, teacher_ali, "Pazartesi", "6", "unavailable")

    assert not result.ok
    assert result.conflict.kind is ConflictKind.INVALID_PERIOD
    assert result.store is store
    assert len(result.store) == 1


def test_toggle_rejects_unknown_day_and_period(empty_constraints, teacher_ali):
    assert constraint_store.toggle(empty_constraints, teacher_ali, "Cumartesi", "1", "unavailable").conflict.kind is ConflictKind.INVALID_PERIOD
    assert constraint_store.toggle(empty_constraints, teacher_ali, "Salı", "12", "unavailable").conflict.kind is ConflictKind.INVALID_PERIOD


def test_entity_without_level_uses_primary_grid(empty_constraints):
    teacher = teacher_ref("teach-zeynep", "Zeynep")

    assert not constraint_store.toggle(empty_constraints, teacher, "Salı", "5", "unavailable").ok
    assert constraint_store.toggle(empty_constraints, teacher, "Salı", "6", "unavailable").ok


def test_bulk_set_fills_every_lesson_slot(empty_constraints, teacher_ali, teacher_ayse):
    store = _toggle(empty_constraints, teacher_ayse, "Salı", "1", "restricted")
    store = _toggle(store, teacher_ali, "Salı", "1", "restricted")

    store = constraint_store.bulk_set(store, teacher_ali, ConstraintKind.UNAVAILABLE)

    ali = constraint_store.for_entity(store, "teach-ali-veli")
    assert len(ali) == 5 * 9
    assert {c.constraint_type for c in ali} == {ConstraintKind.UNAVAILABLE}
    assert {c.reason for c in ali} == {"Bulk assignment: Unavailable"}
    assert all(c.period not in {"prep", "6", "afternoon-breakfast"} for c in ali)
    assert len(constraint_store.for_entity(store, "teach-ayse-yilmaz")) == 1


def test_bulk_set_to_baseline_clears_entity(empty_constraints, teacher_ali):
    store = constraint_store.bulk_set(empty_constraints, teacher_ali, "restricted")
    assert len(store) == 45

    store = constraint_store.bulk_set(store, teacher_ali, ConstraintKind.PREFERRED)

    assert constraint_store.for_entity(store, "teach-ali-veli") == []


def test_bulk_set_then_reset_leaves_nothing(empty_constraints, teacher_ali, teacher_ayse):
    store = _toggle(empty_constraints, teacher_ali, "Cuma", "9", "preferred")
    store = _toggle(store, teacher_ayse, "Cuma", "9", "preferred")

    store = constraint_store.bulk_set(store, teacher_ali, "unavailable")
    store = constraint_store.reset(store, "teach-ali-veli")

    assert constraint_store.for_entity(store, "teach-ali-veli") == []
    assert len(store) == 1


def test_bulk_set_clears_records_of_every_type_for_the_id(empty_constraints, now):
    teacher = teacher_ref("shared-id", "T", "Ortaokul")
    klass = class_ref("shared-id", "C", "Ortaokul")
    store = _toggle(empty_constraints, klass, "Salı", "2", "restricted", now=now)

    store = constraint_store.bulk_set(store, teacher, "preferred")

    assert len(store) == 0


def test_reset_of_unknown_entity_is_a_no_op(empty_constraints, teacher_ali):
    store = _toggle(empty_constraints, teacher_ali, "Salı", "1", "unavailable")

    assert constraint_store.reset(store, "teach-nobody") is store


def test_from_records_keeps_last_record_per_key(now, later):
    def rec(cid, kind, ts):
        return TimeConstraint(cid, EntityType.CLASS, "cls-5-a", "Salı", "1", kind, "", ts, ts)

    store = constraint_store.from_records([rec("a", ConstraintKind.UNAVAILABLE, now), rec("b", ConstraintKind.PREFERRED, later)])

    assert len(store) == 1
    assert constraint_store.query(store, "class", "cls-5-a", "Salı", "1").id == "b"


def test_remove_many_and_counts(empty_constraints, teacher_ali):
    store = _toggle(empty_constraints, teacher_ali, "Salı", "1", "unavailable")
    store = _toggle(store, teacher_ali, "Salı", "2", "restricted")
    assert constraint_store.counts_by_kind(store) == {"unavailable": 1, "preferred": 0, "restricted": 1}

    target = constraint_store.query(store, "teacher", "teach-ali-veli", "Salı", "1")
    store = constraint_store.remove_many(store, [target.id])

    assert len(store) == 1
    assert constraint_store.remove_many(store, ["missing"]) is store


def test_records_round_trip_through_dicts(empty_constraints, teacher_ali, now):
    store = _toggle(empty_constraints, teacher_ali, "Salı", "1", "unavailable", now=now)
    [record] = constraint_store.to_records(store)

    assert TimeConstraint.from_dict(record.to_dict()) == record
