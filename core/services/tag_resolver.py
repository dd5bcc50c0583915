"""Resolve loosely typed decoder tag records into display strings.

Every component reads tag records through this module. Raw records are
classified into the `TagRecord` union (`PrimitiveTag`, `DescribedTag`,
`ValuedTag`) and resolved by dispatching on the variant. The raw accessors
at the bottom are the only other sanctioned way to look inside a record.
"""

from __future__ import annotations

from collections.abc import Mapping
from numbers import Real
from typing import Any

from core.models import DescribedTag, MetadataBag, PrimitiveTag, TagRecord, ValuedTag

# Decoder artifacts that mean "no value".
REJECTED_VALUES = frozenset({"Unknown", '""'})

_MISSING = object()


def is_primitive(value: Any) -> bool:
    """True for strings and real numbers; booleans are not display primitives."""
    return isinstance(value, str) or (isinstance(value, Real) and not isinstance(value, bool))


def stringify(value: str | Real) -> str:
    """Render a primitive the way the decoder would display it."""
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return str(number)


def _accept(text: str) -> str | None:
    text = text.strip()
    if not text or text in REJECTED_VALUES:
        return None
    return text


def _field(tag: Any, name: str) -> Any:
    if isinstance(tag, Mapping):
        return tag.get(name, _MISSING)
    return getattr(tag, name, _MISSING)


def classify(tag: Any) -> TagRecord | None:
    """Classify a raw decoder record into the `TagRecord` union."""
    if tag is None or isinstance(tag, bool):
        return None
    if is_primitive(tag):
        return PrimitiveTag(tag)

    value = _field(tag, "value")
    valued = ValuedTag(None if value is _MISSING else value)
    description = _field(tag, "description")
    if isinstance(description, str):
        return DescribedTag(description, valued if value is not _MISSING else None)
    return valued


def _resolve_valued(tag: ValuedTag) -> str | None:
    value = tag.value
    if isinstance(value, (list, tuple)):
        parts = [stringify(v) for v in value if is_primitive(v)]
        if not parts:
            return None
        return _accept(", ".join(parts))
    if is_primitive(value):
        return _accept(stringify(value))
    return None


def resolve_record(record: TagRecord | None) -> str | None:
    """Resolve an already classified record."""
    if record is None:
        return None
    if isinstance(record, PrimitiveTag):
        return _accept(stringify(record.value))
    if isinstance(record, DescribedTag):
        described = _accept(record.description)
        if described is not None:
            return described
        return _resolve_valued(record.fallback) if record.fallback else None
    if isinstance(record, ValuedTag):
        return _resolve_valued(record)
    return None


def resolve(tag: Any) -> str | None:
    """Return the best human-readable string for `tag`, or None when absent.

    Never raises: unexpected shapes resolve to None.
    """
    try:
        return resolve_record(classify(tag))
    except (TypeError, ValueError, OverflowError):
        return None


def get_tag(bag: MetadataBag | None, name: str) -> Any:
    """Return the raw record for `name`, or None when the bag or tag is missing."""
    if not bag:
        return None
    return bag.get(name)


def resolve_tag(bag: MetadataBag | None, name: str) -> str | None:
    """Resolve tag `name` of `bag`."""
    return resolve(get_tag(bag, name))


def resolve_first(bag: MetadataBag | None, *names: str) -> str | None:
    """Resolve the first of `names` that yields a value."""
    for name in names:
        value = resolve_tag(bag, name)
        if value is not None:
            return value
    return None


def tag_is_present(tag: Any) -> bool:
    """Truthiness of a raw record: objects always count, primitives by value."""
    if tag is None:
        return False
    if isinstance(tag, bool) or is_primitive(tag):
        return bool(tag)
    return True


def tag_sequence(tag: Any) -> list[Any] | None:
    """Return the record's raw `value` when it is an ordered sequence."""
    record = classify(tag)
    if isinstance(record, DescribedTag):
        record = record.fallback
    if isinstance(record, ValuedTag) and isinstance(record.value, (list, tuple)):
        return list(record.value)
    return None


def tag_description(tag: Any) -> str | None:
    """Return the record's decoder-rendered description, if it has one."""
    record = classify(tag)
    if isinstance(record, DescribedTag):
        return record.description
    return None
