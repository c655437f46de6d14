from __future__ import annotations

from models.entities import class_ref, subject_ref, teacher_ref
from models.results import ConflictKind
from services import fixed_slot_store


def _add(store, teacher, klass, subject, day, period, **kw):
    result = fixed_slot_store.add(store, teacher, klass, subject, day, period, **kw)
    assert result.ok, result.conflict
    return result.store


def test_add_pins_a_lesson(empty_fixed_slots, teacher_ali, class_5a, math, now):
    store = _add(empty_fixed_slots, teacher_ali, class_5a, math, "Pazartesi", "1", now=now)

    [slot] = fixed_slot_store.to_records(store)
    assert slot.id.startswith("fixed-")
    assert (slot.teacher_name, slot.class_name, slot.subject_name) == ("Ali Veli", "5-A", "Matematik")
    assert (slot.day, slot.period, slot.created_at) == ("Pazartesi", "1", now)
    assert store.version == 1
    assert len(empty_fixed_slots) == 0


def test_class_slot_taken(empty_fixed_slots, teacher_ali, teacher_ayse, class_5a, math):
    store = _add(empty_fixed_slots, teacher_ali, class_5a, math, "Salı", "2")
    [first] = store.slots

    result = fixed_slot_store.add(store, teacher_ayse, class_5a, math, "Salı", "2")

    assert not result.ok
    assert result.conflict.kind is ConflictKind.CLASS_SLOT_TAKEN
    assert result.conflict.existing == first
    assert result.store is store
    assert len(result.store) == 1


def test_teacher_slot_taken(empty_fixed_slots, teacher_ali, class_5a, class_6b, math):
    store = _add(empty_fixed_slots, teacher_ali, class_5a, math, "Çarşamba", "3")

    result = fixed_slot_store.add(store, teacher_ali, class_6b, math, "Çarşamba", "3")

    assert result.conflict.kind is ConflictKind.TEACHER_SLOT_TAKEN
    assert result.conflict.existing.class_id == "cls-5-a"
    assert len(result.store) == 1


def test_class_conflict_is_reported_before_teacher_conflict(empty_fixed_slots, teacher_ali, class_5a, math):
    store = _add(empty_fixed_slots, teacher_ali, class_5a, math, "Cuma", "4")

    result = fixed_slot_store.add(store, teacher_ali, class_5a, math, "Cuma", "4")

    assert result.conflict.kind is ConflictKind.CLASS_SLOT_TAKEN


def test_same_teacher_other_period_is_fine(empty_fixed_slots, teacher_ali, class_5a, class_6b, math):
    store = _add(empty_fixed_slots, teacher_ali, class_5a, math, "Cuma", "4")
    store = _add(store, teacher_ali, class_6b, math, "Cuma", "5")
    store = _add(store, teacher_ali, class_6b, math, "Perşembe", "4")

    assert len(store) == 3


def test_break_period_of_class_level_is_rejected(empty_fixed_slots, teacher_ali, class_5a, math):
    result = fixed_slot_store.add(empty_fixed_slots, teacher_ali, class_5a, math, "Salı", "6")
    assert result.conflict.kind is ConflictKind.INVALID_PERIOD

    primary = class_ref("cls-3-a", "3-A", "İlkokul")
    assert fixed_slot_store.add(empty_fixed_slots, teacher_ali, primary, math, "Salı", "6").ok


def test_levelless_class_checks_labels_only(empty_fixed_slots, math):
    teacher = teacher_ref("teach-x", "X")
    klass = class_ref("cls-x", "X")

    assert fixed_slot_store.add(empty_fixed_slots, teacher, klass, math, "Salı", "6").ok
    assert not fixed_slot_store.add(empty_fixed_slots, teacher, klass, math, "Salı", "11").ok
    assert not fixed_slot_store.add(empty_fixed_slots, teacher, klass, math, "Sunday", "1").ok


def test_remove_is_idempotent(empty_fixed_slots, teacher_ali, class_5a, math):
    store = _add(empty_fixed_slots, teacher_ali, class_5a, math, "Salı", "1")
    [slot] = store.slots

    assert fixed_slot_store.remove(store, "fixed-missing") is store
    emptied = fixed_slot_store.remove(store, slot.id)
    assert len(emptied) == 0
    assert fixed_slot_store.remove(emptied, slot.id) is emptied


def test_group_by_teacher_keeps_insertion_order(empty_fixed_slots, teacher_ali, teacher_ayse, class_5a, class_6b, math):
    store = _add(empty_fixed_slots, teacher_ali, class_5a, math, "Cuma", "2")
    store = _add(store, teacher_ayse, class_5a, math, "Pazartesi", "1")
    store = _add(store, teacher_ali, class_6b, math, "Pazartesi", "1")

    groups = fixed_slot_store.group_by_teacher(store)

    assert list(groups) == ["teach-ali-veli", "teach-ayse-yilmaz"]
    assert [s.day for s in groups["teach-ali-veli"]] == ["Cuma", "Pazartesi"]
    assert [s.class_id for s in fixed_slot_store.for_class(store, "cls-5-a")] == ["cls-5-a", "cls-5-a"]


def test_find_violations_on_loaded_collection(empty_fixed_slots, teacher_ali, teacher_ayse, class_5a, class_6b, math):
    a = _add(empty_fixed_slots, teacher_ali, class_5a, math, "Salı", "1")
    b = _add(empty_fixed_slots, teacher_ayse, class_5a, math, "Salı", "1")
    c = _add(empty_fixed_slots, teacher_ali, class_6b, subject_ref("sub-y", "Y"), "Salı", "1")

    loaded = fixed_slot_store.from_records([*a.slots, *b.slots, *c.slots])
    kinds = [v.kind for v in fixed_slot_store.find_violations(loaded)]

    assert kinds == [ConflictKind.CLASS_SLOT_TAKEN, ConflictKind.TEACHER_SLOT_TAKEN]
    assert fixed_slot_store.find_violations(a) == []
