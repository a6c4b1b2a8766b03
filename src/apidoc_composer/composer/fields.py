"""Editable request fields for the selected endpoint.

A :class:`FieldSet` is owned by whoever drives the composer (the CLI, a
test, a UI shell). It is mutated only between submits; the assembler
works on the snapshot returned by :meth:`FieldSet.ordered`.
"""

import itertools
from dataclasses import dataclass, replace
from enum import Enum

from apidoc_composer.catalog.base import Endpoint
from apidoc_composer.logging import get_logger

_LOGGER = get_logger(__name__)


class FieldKind(str, Enum):
    HEADER = "Header"
    QUERY = "Query"
    BODY = "Body"


KIND_ORDER = {
    FieldKind.HEADER: 1,
    FieldKind.QUERY: 2,
    FieldKind.BODY: 3,
}


@dataclass
class Field:
    """One editable name/value pair. An empty value means unset."""

    id: int
    name: str
    value: str
    kind: FieldKind
    removed: bool = False


def normalize_name(name: str) -> str:
    """Turn a dotted name into bracket notation: ``a.b.c`` -> ``a[b][c]``."""
    if "." not in name:
        return name
    first, *rest = name.split(".")
    return first + "".join(f"[{segment}]" for segment in rest)


class FieldSet:
    """Request fields of the active endpoint.

    Ids come from a counter that is never rewound, so they stay unique for
    the lifetime of the set, reseeds included. Removing a field only flags
    it; the record is kept.
    """

    def __init__(self):
        self._fields: list[Field] = []
        self._ids = itertools.count()

    def __iter__(self):
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def seed(self, endpoint: Endpoint) -> None:
        """Replace every field with the endpoint's declared headers and parameters."""
        param_kind = FieldKind.QUERY if endpoint.method == "GET" else FieldKind.BODY

        self._fields = []
        for declared in endpoint.header_fields():
            self._append(normalize_name(declared.field), "", FieldKind.HEADER)
        for declared in endpoint.parameter_fields():
            self._append(normalize_name(declared.field), "", param_kind)

    def add(self, kind: FieldKind, name: str = "", value: str = "") -> Field:
        return self._append(name, value, FieldKind(kind))

    def get(self, field_id: int) -> Field | None:
        """The active field with this id, or None."""
        for f in self._fields:
            if f.id == field_id and not f.removed:
                return f
        return None

    def find(self, name: str) -> Field | None:
        """The first active field with this name, or None."""
        for f in self._fields:
            if f.name == name and not f.removed:
                return f
        return None

    def remove(self, field_id: int) -> None:
        field = self._lookup(field_id)
        if field is not None:
            field.removed = True

    def rename(self, field_id: int, name: str) -> None:
        field = self._lookup(field_id)
        if field is not None:
            field.name = name

    def set_value(self, field_id: int, value: str) -> None:
        field = self._lookup(field_id)
        if field is not None:
            field.value = value

    def duplicate(self, field_id: int) -> Field | None:
        """Append a copy of a field under a fresh id; the copy is never removed."""
        source = next((f for f in self._fields if f.id == field_id), None)
        if source is None:
            _LOGGER.debug("field_lookup_miss", operation="duplicate", field_id=field_id)
            return None
        copy = replace(source, id=next(self._ids), removed=False)
        self._fields.append(copy)
        return copy

    def ordered(self) -> list[Field]:
        """Active fields, Header before Query before Body, insertion order within a kind."""
        active = [replace(f) for f in self._fields if not f.removed]
        return sorted(active, key=lambda f: KIND_ORDER[f.kind])

    def _append(self, name: str, value: str, kind: FieldKind) -> Field:
        field = Field(id=next(self._ids), name=name, value=value, kind=kind)
        self._fields.append(field)
        return field

    def _lookup(self, field_id: int) -> Field | None:
        field = self.get(field_id)
        if field is None:
            _LOGGER.debug("field_lookup_miss", field_id=field_id)
        return field
