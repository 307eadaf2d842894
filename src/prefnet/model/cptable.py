# src/prefnet/model/cptable.py

from __future__ import annotations

import logging
from typing import Dict, FrozenSet, Iterable, Iterator, Mapping, Optional, Set, Tuple

from .assignment import Assignment, all_assignments
from ..errors import IllegalTableEdit, IncompleteQuery

__all__ = ["CPTable"]

logger = logging.getLogger(__name__)


class CPTable:
    """
    Conditional preference table for a single variable.

    Maps parent assignments to the preferred value of :attr:`var`. All keys
    share one domain, the table's parent set, and :attr:`var` never conditions
    itself. Tables are never edited in place: :meth:`altered` and
    :meth:`flipped` return new tables, so an old table stays a valid value
    (e.g. for rolling back an edit).

    A table may be incomplete, i.e. lack a preferred value for some parent
    assignments; lookups for those return ``None``.
    """

    __slots__ = ("var", "_entries", "_parents")

    def __init__(self, var: str, entries: Optional[Mapping[Assignment, bool]] = None) -> None:
        self.var = var
        self._entries: Dict[Assignment, bool] = dict(entries or {})

        parents: Optional[FrozenSet[str]] = None
        for key, val in self._entries.items():
            if not isinstance(key, Assignment):
                raise IllegalTableEdit(f"table key for {var!r} must be an Assignment, got {key!r}")
            if not isinstance(val, bool):
                raise IllegalTableEdit(f"preferred value for {var!r} must be a bool, got {val!r}")
            if var in key:
                raise IllegalTableEdit(f"{var!r} cannot condition its own preference ({key})")
            if parents is None:
                parents = key.variables
            elif key.variables != parents:
                raise IllegalTableEdit(
                    f"statements for {var!r} condition on different variables: "
                    f"{sorted(parents)} vs {sorted(key.variables)}"
                )
        self._parents: FrozenSet[str] = parents or frozenset()

    # ──────────────────────────────────────────────────────────────────
    # Read access
    # ──────────────────────────────────────────────────────────────────
    @property
    def parents(self) -> FrozenSet[str]:
        return self._parents

    def items(self) -> Iterator[Tuple[Assignment, bool]]:
        return iter(sorted(self._entries.items(), key=lambda kv: kv[0]._items))

    def get(self, key: Assignment) -> Optional[bool]:
        return self._entries.get(key)

    def __iter__(self) -> Iterator[Assignment]:
        return (k for k, _ in self.items())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CPTable):
            return NotImplemented
        return self.var == other.var and self._entries == other._entries

    def __hash__(self) -> int:
        return hash((self.var, frozenset(self._entries.items())))

    def __repr__(self) -> str:
        return f"CPTable({self.var!r}, {len(self._entries)} statements, parents={sorted(self._parents)})"

    def __str__(self) -> str:
        lines = [f"{self.var} | parents: {', '.join(sorted(self._parents)) or '∅'}"]
        for key, val in self.items():
            best, worst = ("T", "F") if val else ("F", "T")
            lines.append(f"  {key}: {self.var}={best} > {self.var}={worst}")
        return "\n".join(lines)

    # ──────────────────────────────────────────────────────────────────
    # Queries
    # ──────────────────────────────────────────────────────────────────
    def preferred_value_given(self, condition: Assignment) -> Optional[bool]:
        """
        Preferred value of :attr:`var` under ``condition``.

        ``condition`` must bind every parent (it may bind more, e.g. a full
        outcome). Returns ``None`` when the table has no statement for the
        parents' values.
        """
        if not self._parents <= condition.variables:
            missing = sorted(self._parents - condition.variables)
            raise IncompleteQuery(
                f"lookup in table for {self.var!r} does not bind parent(s) {missing}"
            )
        return self._entries.get(condition.restricted_to(self._parents))

    def is_complete(self) -> bool:
        return len(self._entries) == 2 ** len(self._parents)

    def missing_assignments(self) -> Iterator[Assignment]:
        """Parent assignments the table has no statement for."""
        return (a for a in all_assignments(self._parents) if a not in self._entries)

    # ──────────────────────────────────────────────────────────────────
    # Edits (always return a new table)
    # ──────────────────────────────────────────────────────────────────
    def altered(self, parent_assignment: Assignment, preferred_value: bool) -> "CPTable":
        """
        Table with ``parent_assignment: preferred_value`` added.

        When the new statement and the existing ones condition on different
        variables, both sides are expanded onto the union; e.g. with Entree and
        Wine as parents, ``Fish: Soup>Salad`` becomes ``Fish,Red: Soup>Salad``
        and ``Fish,White: Soup>Salad``. The new statement then replaces any
        equal key, and the result is simplified.
        """
        if self.var in parent_assignment:
            raise IllegalTableEdit(
                f"{self.var!r} cannot condition its own preference ({parent_assignment})"
            )
        mod: Dict[Assignment, bool] = {}
        new_vars = parent_assignment.variables
        for key, val in self._entries.items():
            for expanded in key.expanded_by_vars(new_vars):
                mod[expanded] = val
        for expanded in parent_assignment.expanded_by_vars(self._parents):
            mod[expanded] = preferred_value
        return CPTable(self.var, mod).simplified()

    def simplified(self) -> "CPTable":
        """
        Minimal equivalent table: drop every parent the preferences do not
        really depend on.

        A parent is superfluous when flipping it in any statement lands on a
        statement with the same preferred value. A statement whose flip is
        missing keeps the parent, since the missing entry might disagree.
        """
        table = self
        while True:
            superfluous = table._superfluous_parents()
            if not superfluous:
                return table
            reduced: Dict[Assignment, bool] = {}
            for key, val in table._entries.items():
                reduced[key.with_vars_removed(superfluous)] = val
            logger.debug("table for %s: dropped superfluous parent(s) %s", self.var, sorted(superfluous))
            table = CPTable(self.var, reduced)

    def _superfluous_parents(self) -> Set[str]:
        superfluous: Set[str] = set()
        for parent in self._parents:
            if all(self._entries.get(key.flipped(parent)) is val for key, val in self._entries.items()):
                superfluous.add(parent)
        return superfluous

    def flipped(self, assignment: Assignment) -> "CPTable":
        """
        Table entailing the opposite preference for ``assignment``.

        ``assignment`` has to be at least as specific as the statement it
        overrides. Raises :class:`IllegalTableEdit` if an existing statement is
        strictly more specific (the flip would silently contradict it) or if no
        statement applies to ``assignment``.
        """
        preferred: Optional[bool] = None
        for key, val in self._entries.items():
            if assignment.subsumes(key):
                preferred = not val
            elif key.subsumes(assignment):
                raise IllegalTableEdit(
                    f"cannot flip {assignment} in table for {self.var!r}: "
                    f"statement {key} is more specific"
                )
        if preferred is None:
            raise IllegalTableEdit(
                f"cannot flip {assignment} in table for {self.var!r}: no statement applies"
            )
        return self.altered(assignment, preferred)

    # ──────────────────────────────────────────────────────────────────
    # Construction helpers
    # ──────────────────────────────────────────────────────────────────
    @classmethod
    def from_statements(
        cls,
        var: str,
        statements: Iterable[Tuple[Assignment, bool]],
    ) -> "CPTable":
        """Fold ``(parent_assignment, preferred_value)`` pairs through :meth:`altered`."""
        table = cls(var)
        for parent_assignment, value in statements:
            table = table.altered(parent_assignment, value)
        return table
