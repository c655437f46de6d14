"""Entity identifier helpers.

Roster ids are prefixed slugs (``teach-ayse-yilmaz``, ``cls-5-a``). Older
wizard data may carry plain names or spaced prefixes (``"teach - Ayşe "``),
so anything that compares stored ids against the roster goes through
``normalize_id`` first.
"""

from __future__ import annotations

import re


_TR_ASCII = str.maketrans(
    {
        "ç": "c",
        "Ç": "c",
        "ğ": "g",
        "Ğ": "g",
        "ş": "s",
        "Ş": "s",
        "ü": "u",
        "Ü": "u",
        "ö": "o",
        "Ö": "o",
        "ı": "i",
        "İ": "i",
    }
)

_LEGACY_PREFIX_RE = re.compile(r"^(teach|cls|sub|teacher|class|subject|teachers|classes|subjects)\s*-\s*")

PREFIX_BY_TYPE = {
    "teacher": "teach",
    "class": "cls",
    "subject": "sub",
}

_VIRTUAL_CLUB_PREFIXES = ("kulup-virtual-teacher-", "kulup-virtual-class-")


def slugify(text: str | None) -> str:
    if not text:
        return ""
    s = text.translate(_TR_ASCII).lower()
    s = re.sub(r"\s+", "-", s)
    s = re.sub(r"[^a-z0-9-]", "", s)
    s = re.sub(r"-+", "-", s)
    return s.strip("-")


def teacher_id(name: str) -> str:
    return f"teach-{slugify(name)}"


def class_id(name: str) -> str:
    return f"cls-{slugify(name)}"


def subject_id(class_name: str, teacher_names: str, subject_name: str) -> str:
    return f"sub-{slugify(f'{class_name}-{teacher_names}-{subject_name}')}"


def _singular_type(entity_type: str | None) -> str | None:
    if not entity_type:
        return None
    t = str(getattr(entity_type, "value", entity_type)).strip().lower()
    if t == "classes":
        return "class"
    if t in {"teachers", "subjects"}:
        return t[:-1]
    return t


def is_virtual_club_id(raw: str | None) -> bool:
    if not raw:
        return False
    return "kulup-virtual-" in raw or "auto-kulup-" in raw


def extract_real_id(raw: str) -> str:
    """Map a virtual club id back to the id of the entity it stands in for."""
    for prefix in _VIRTUAL_CLUB_PREFIXES:
        if raw.startswith(prefix):
            return raw[len(prefix):]
    return raw


def normalize_id(raw: str | None, entity_type: str | None = None) -> str:
    """Canonicalize an entity id.

    The known prefix of ``entity_type`` is enforced; without a type the
    prefix the raw id started with is kept. Unprefixed, untyped ids come back
    as a bare slug.
    """

    if not raw:
        return ""

    original = extract_real_id(raw.strip())
    cleaned = _LEGACY_PREFIX_RE.sub("", original)
    slug = slugify(cleaned)

    prefix = PREFIX_BY_TYPE.get(_singular_type(entity_type) or "")
    if prefix:
        return f"{prefix}-{slug}"

    for guess in ("teach", "cls", "sub"):
        if original.startswith(guess):
            return f"{guess}-{slug}"
    return slug
