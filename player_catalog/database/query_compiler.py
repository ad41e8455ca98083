"""
Compile filter clauses into a parameterized SQL predicate over the JSONB
``doc`` column.

Equality compares JSONB values (``doc -> 'f' = $n::jsonb``) so strings and
booleans share one code path; ranges compare the text form, which orders ISO
dates correctly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, List

from player_catalog.domain.filter import Between, Clause, Equals

# Document fields a clause may reference
FILTERABLE_FIELDS = frozenset(
    {"updateStatus", "position", "isActive", "clubId", "dateOfBirth", "id"}
)


@dataclass
class CompiledPredicate:
    sql: str
    args: List[Any] = field(default_factory=list)


def _field_ref(name: str, *, as_text: bool) -> str:
    if name not in FILTERABLE_FIELDS:
        raise ValueError(f"Field '{name}' is not filterable")
    op = "->>" if as_text else "->"
    return f"doc {op} '{name}'"


def compile_clauses(clauses: Iterable[Clause]) -> CompiledPredicate:
    """AND-combine clauses; an empty clause list matches every row."""
    parts: list[str] = []
    args: list[Any] = []

    for clause in clauses:
        if isinstance(clause, Equals):
            args.append(clause.value)
            parts.append(f"{_field_ref(clause.field, as_text=False)} = ${len(args)}::jsonb")
        elif isinstance(clause, Between):
            ref = _field_ref(clause.field, as_text=True)
            if clause.gte is not None:
                args.append(clause.gte)
                parts.append(f"{ref} >= ${len(args)}")
            if clause.lte is not None:
                args.append(clause.lte)
                parts.append(f"{ref} <= ${len(args)}")
        else:
            raise TypeError(f"Unsupported clause: {clause!r}")

    return CompiledPredicate(sql=" AND ".join(parts) if parts else "TRUE", args=args)
