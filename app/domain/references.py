"""Polymorphic single-target references used by favorites and reviews.

A favorite or review points at exactly one of a branch, a menu item or an
offer. Storage keeps the flat shape (``type`` plus three nullable foreign
keys); everything above the repositories works with :class:`TargetRef`, a
tagged union that cannot hold an inconsistent combination.

``overall`` is a review-only kind that targets the branch as a whole and is
stored in ``branch_id``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional

from app.core.exceptions import ValidationError


class TargetKind(str, Enum):
    BRANCH = "branch"
    MENU_ITEM = "menu_item"
    OFFER = "offer"
    OVERALL = "overall"

    @property
    def column(self) -> str:
        """Name of the reference column populated for this kind."""
        return _COLUMN_FOR_KIND[self]


REFERENCE_COLUMNS: tuple[str, ...] = ("branch_id", "menu_item_id", "offer_id")

_COLUMN_FOR_KIND: dict[TargetKind, str] = {
    TargetKind.BRANCH: "branch_id",
    TargetKind.MENU_ITEM: "menu_item_id",
    TargetKind.OFFER: "offer_id",
    TargetKind.OVERALL: "branch_id",
}

FAVORITE_KINDS: frozenset[TargetKind] = frozenset(
    {TargetKind.BRANCH, TargetKind.MENU_ITEM, TargetKind.OFFER}
)
REVIEW_KINDS: frozenset[TargetKind] = frozenset(TargetKind)


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _ordered(kinds: Iterable[TargetKind]) -> list[TargetKind]:
    return [kind for kind in TargetKind if kind in set(kinds)]


@dataclass(frozen=True)
class TargetRef:
    kind: TargetKind
    target_id: str

    def __post_init__(self) -> None:
        if not isinstance(self.kind, TargetKind):
            raise TypeError(f"kind must be a TargetKind, got {self.kind!r}")
        if not self.target_id:
            raise ValueError("target_id must be a non-empty id")

    @property
    def column(self) -> str:
        return self.kind.column

    @classmethod
    def parse(
        cls,
        discriminant: Any,
        *,
        branch_id: Optional[str] = None,
        menu_item_id: Optional[str] = None,
        offer_id: Optional[str] = None,
        allowed: frozenset[TargetKind] = REVIEW_KINDS,
    ) -> "TargetRef":
        """Build a reference from the flat submitted fields.

        Exactly one reference field may be set and it must be the one named by
        the discriminant. Raises :class:`ValidationError` naming the offending
        fields otherwise. Never touches the database.
        """
        allowed_values = [kind.value for kind in _ordered(allowed)]
        raw = discriminant.value if isinstance(discriminant, Enum) else discriminant
        try:
            kind = TargetKind(raw)
        except ValueError:
            kind = None
        if kind is None or kind not in allowed:
            raise ValidationError(
                f"type must be one of: {', '.join(allowed_values)}",
                details={"fields": ["type"], "allowed": allowed_values},
            )

        supplied = {
            "branch_id": _blank_to_none(branch_id),
            "menu_item_id": _blank_to_none(menu_item_id),
            "offer_id": _blank_to_none(offer_id),
        }
        expected = kind.column
        conflicting = [col for col in REFERENCE_COLUMNS if col != expected and supplied[col]]
        missing = [] if supplied[expected] else [expected]

        if conflicting or missing:
            problems = []
            if missing:
                problems.append(f"{expected} is required")
            if conflicting:
                problems.append(f"{', '.join(conflicting)} must be empty")
            raise ValidationError(
                f"type '{kind.value}' references {expected} only: {'; '.join(problems)}",
                details={
                    "type": kind.value,
                    "expected": expected,
                    "missing": missing,
                    "conflicting": conflicting,
                    "fields": missing + conflicting,
                },
            )
        return cls(kind, supplied[expected])  # type: ignore[arg-type]

    @classmethod
    def from_row(cls, row: Any) -> "TargetRef":
        """Rebuild the reference from a stored favorite/review row."""
        return cls.parse(
            row.type,
            branch_id=row.branch_id,
            menu_item_id=row.menu_item_id,
            offer_id=row.offer_id,
        )

    def to_columns(self) -> dict[str, Optional[str]]:
        """Flatten into the persisted ``type`` + three reference columns."""
        columns: dict[str, Optional[str]] = dict.fromkeys(REFERENCE_COLUMNS)
        columns[self.column] = self.target_id
        columns["type"] = self.kind.value
        return columns


def single_reference_check(allowed: frozenset[TargetKind]) -> str:
    """SQL CHECK expression mirroring :meth:`TargetRef.parse` for ``allowed`` kinds."""
    clauses = []
    for kind in _ordered(allowed):
        parts = [f"type = '{kind.value}'"]
        for col in REFERENCE_COLUMNS:
            parts.append(f"{col} IS NOT NULL" if col == kind.column else f"{col} IS NULL")
        clauses.append("(" + " AND ".join(parts) + ")")
    return " OR ".join(clauses)
