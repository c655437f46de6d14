from __future__ import annotations

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from models.entities import class_ref, subject_ref, teacher_ref
from services.constraint_store import ConstraintStore
from services.fixed_slot_store import FixedSlotStore


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 9, 9, 8, 0, tzinfo=timezone.utc)


@pytest.fixture
def later() -> datetime:
    return datetime(2024, 9, 9, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def empty_constraints() -> ConstraintStore:
    return ConstraintStore()


@pytest.fixture
def empty_fixed_slots() -> FixedSlotStore:
    return FixedSlotStore()


@pytest.fixture
def teacher_ali():
    return teacher_ref("teach-ali-veli", "Ali Veli", "Ortaokul")


@pytest.fixture
def teacher_ayse():
    return teacher_ref("teach-ayse-yilmaz", "Ayşe Yılmaz", "Ortaokul")


@pytest.fixture
def class_5a():
    return class_ref("cls-5-a", "5-A", "Ortaokul")


@pytest.fixture
def class_6b():
    return class_ref("cls-6-b", "6-B", "Ortaokul")


@pytest.fixture
def math():
    return subject_ref("sub-5-a-ali-veli-matematik", "Matematik")


@pytest.fixture
def client() -> TestClient:
    from main import create_app

    return TestClient(create_app())
