"""Resolution of ``:name`` placeholders in endpoint URL templates."""

import re
from dataclasses import dataclass

from apidoc_composer.composer.fields import Field


@dataclass(frozen=True)
class ResolvedPath:
    path: str
    consumed: frozenset[int]


def placeholder_name(segment: str) -> str | None:
    """Name of a ``:name`` or ``:name(regex)`` segment, None for literal segments."""
    if not segment.startswith(":"):
        return None
    return re.split(r"[:(]+", segment)[1]


def resolve_path(template: str, fields: list[Field]) -> ResolvedPath:
    """Substitute field values into the template's placeholder segments.

    Each placeholder takes the first active field with that name and a
    non-empty value. Placeholders without one are left in the path as is.
    """
    segments = template.split("/")
    consumed: set[int] = set()

    for index, segment in enumerate(segments):
        name = placeholder_name(segment)
        if not name:
            continue

        field = next((f for f in fields if f.name == name and not f.removed and f.value), None)
        if field is None:
            continue

        segments[index] = field.value
        consumed.add(field.id)

    return ResolvedPath(path="/".join(segments), consumed=frozenset(consumed))
