from models.constraint import BASELINE_KIND, ConstraintKind, TimeConstraint
from models.entities import EntityRef, EntityType, class_ref, subject_ref, teacher_ref
from models.fixed_slot import FixedSlot
from models.results import ConflictKind, MutationResult, StoreConflict
from models.time_grid import DAYS, DEFAULT_LEVEL, Level, TimePeriod

__all__ = [
	"BASELINE_KIND",
	"ConstraintKind",
	"TimeConstraint",
	"EntityRef",
	"EntityType",
	"class_ref",
	"subject_ref",
	"teacher_ref",
	"FixedSlot",
	"ConflictKind",
	"MutationResult",
	"StoreConflict",
	"DAYS",
	"DEFAULT_LEVEL",
	"Level",
	"TimePeriod",
]
