from __future__ import annotations

import pytest

from core.ids import class_id, extract_real_id, is_virtual_club_id, normalize_id, slugify, subject_id, teacher_id


def test_slugify_maps_turkish_letters():
    assert slugify("Ayşe Yılmaz") == "ayse-yilmaz"
    assert slugify("  Ömer   ÇELİK ") == "omer-celik"
    assert slugify("5/A -- Şube") == "5a-sube"
    assert slugify("") == ""
    assert slugify(None) == ""


def test_prefixed_ids():
    assert teacher_id("Ömer Çelik") == "teach-omer-celik"
    assert class_id("5-A") == "cls-5-a"
    assert subject_id("5-A", "Ali Veli", "Matematik") == "sub-5-a-ali-veli-matematik"


@pytest.mark.parametrize(
    "raw, entity_type, expected",
    [
        ("teach - Ayşe Yılmaz ", "teacher", "teach-ayse-yilmaz"),
        ("teach-ayse-yilmaz", "teachers", "teach-ayse-yilmaz"),
        ("Ali Veli", "teacher", "teach-ali-veli"),
        ("cls-5-A", "classes", "cls-5-a"),
        ("5-A", "class", "cls-5-a"),
        ("sub-matematik", None, "sub-matematik"),
        ("teacher-ali", None, "teach-ali"),
        ("Math Club", None, "math-club"),
        ("", "teacher", ""),
    ],
)
def test_normalize_id(raw, entity_type, expected):
    assert normalize_id(raw, entity_type) == expected


def test_virtual_club_ids_map_to_real_entity():
    raw = "kulup-virtual-teacher-teach-ali-veli"
    assert is_virtual_club_id(raw)
    assert extract_real_id(raw) == "teach-ali-veli"
    assert normalize_id(raw) == "teach-ali-veli"
    assert not is_virtual_club_id("teach-ali-veli")
