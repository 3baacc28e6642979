# ==============================================
# RawValue (Tagged Union)
# ==============================================
#
# PURPOSE:
#   Immutable representation of one node of the design metadata
#   tree. Every downstream stage pattern-matches on `kind`
#   instead of calling isinstance() on raw JSON.
#
# ENUMS:
# ------
# - ValueKind(Enum): ARRAY, OBJECT, SCALAR
#
# CLASSES:
# --------
# - RawValue (frozen dataclass)
#     kind: ValueKind
#     items: tuple[RawValue]               → ARRAY children, in order
#     entries: tuple[(str, RawValue)]      → OBJECT children, insertion order kept
#     value: str | int | float | bool | None → SCALAR payload (None = absent)
#
#     Constructors: RawValue.array(...), RawValue.object(...), RawValue.scalar(...)
#
# ==============================================

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Iterator, List, Optional, Tuple, Union


ScalarPayload = Union[str, int, float, bool, None]


class ValueKind(Enum):
    """Structural kind of a RawValue."""
    ARRAY = "array"
    OBJECT = "object"
    SCALAR = "scalar"


@dataclass(frozen=True)
class RawValue:
    """
    One node of the analyzed metadata tree.

    Only the attribute matching `kind` is meaningful; the others keep
    their empty defaults.
    """

    kind: ValueKind
    items: Tuple["RawValue", ...] = ()
    entries: Tuple[Tuple[str, "RawValue"], ...] = ()
    value: ScalarPayload = None

    # --- Constructors ---

    @classmethod
    def array(cls, items: Iterable["RawValue"]) -> "RawValue":
        return cls(kind=ValueKind.ARRAY, items=tuple(items))

    @classmethod
    def object(cls, entries: Iterable[Tuple[str, "RawValue"]]) -> "RawValue":
        return cls(kind=ValueKind.OBJECT, entries=tuple(entries))

    @classmethod
    def scalar(cls, value: ScalarPayload) -> "RawValue":
        return cls(kind=ValueKind.SCALAR, value=value)

    # --- Kind checks ---

    @property
    def is_array(self) -> bool:
        return self.kind is ValueKind.ARRAY

    @property
    def is_object(self) -> bool:
        return self.kind is ValueKind.OBJECT

    @property
    def is_scalar(self) -> bool:
        return self.kind is ValueKind.SCALAR

    @property
    def is_absent(self) -> bool:
        """True for a JSON null."""
        return self.is_scalar and self.value is None

    @property
    def is_empty(self) -> bool:
        """Empty array, empty object or null."""
        if self.is_array:
            return not self.items
        if self.is_object:
            return not self.entries
        return self.value is None

    # --- Object access ---

    def keys(self) -> List[str]:
        return [name for name, _ in self.entries]

    def get(self, name: str) -> Optional["RawValue"]:
        for key, child in self.entries:
            if key == name:
                return child
        return None

    def iter_entries(self) -> Iterator[Tuple[str, "RawValue"]]:
        return iter(self.entries)

    # --- Shape helpers ---

    @property
    def field_count(self) -> int:
        """
        Number of fields this node contributes when used as a
        collection item: an object counts its keys, anything else 1.
        """
        if self.is_object:
            return len(self.entries)
        return 1

    def shape_signature(self) -> Tuple[Any, ...]:
        """
        Signature used to decide whether two nodes are "structurally
        similar": objects compare by key set, arrays and scalars by kind.
        """
        if self.is_object:
            return (ValueKind.OBJECT.value, tuple(sorted(self.keys())))
        return (self.kind.value,)

    def scalar_type(self) -> str:
        """Python type name of a scalar payload ("null" for None)."""
        if self.value is None:
            return "null"
        return type(self.value).__name__

    def to_python(self) -> Any:
        """Convert back to plain JSON-compatible Python data."""
        if self.is_array:
            return [item.to_python() for item in self.items]
        if self.is_object:
            return {name: child.to_python() for name, child in self.entries}
        return self.value
