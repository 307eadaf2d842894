# src/prefnet/model/assignment.py

from __future__ import annotations

from collections.abc import Mapping
from itertools import product
from typing import Dict, FrozenSet, Iterable, Iterator, Optional, Tuple

from ..errors import InvalidAssignment, UnboundVariable

__all__ = [
    "Assignment",
    "all_assignments",
    "iter_complete_assignments",
]

_TRUE_TOKENS = frozenset({"t", "true", "1", "yes"})
_FALSE_TOKENS = frozenset({"f", "false", "0", "no"})


class Assignment(Mapping):
    """
    Immutable valuation of preference variables to booleans.

    Bindings are kept sorted by variable name, so iteration order, ``str`` and
    hashing never depend on insertion order. The class exposes the read-only
    mapping protocol and the domain operations below; there are no mutating
    methods, every "edit" returns a new assignment.

    Examples
    --------
    >>> a = Assignment(A=True, B=False)
    >>> str(a)
    '(A=T,B=F)'
    >>> a.subsumes(Assignment(A=True))
    True
    >>> str(a.flipped("B"))
    '(A=T,B=T)'
    """

    __slots__ = ("_items", "_index", "_hash")

    def __init__(self, mapping: Optional[Mapping] = None, **bindings: bool) -> None:
        merged: Dict[str, bool] = {}
        if mapping is not None:
            merged.update(mapping)
        merged.update(bindings)
        for var, val in merged.items():
            if not isinstance(var, str):
                raise InvalidAssignment(f"variable names must be strings, got {var!r}")
            if not isinstance(val, bool):
                raise InvalidAssignment(f"value of {var!r} must be a bool, got {val!r}")
        self._items: Tuple[Tuple[str, bool], ...] = tuple(sorted(merged.items()))
        self._index: Dict[str, bool] = dict(self._items)
        self._hash: Optional[int] = None

    # ──────────────────────────────────────────────────────────────────
    # Alternate constructors
    # ──────────────────────────────────────────────────────────────────
    @classmethod
    def uniform(cls, variables: Iterable[str], value: bool) -> "Assignment":
        """Assign every variable in ``variables`` to ``value``."""
        return cls({v: value for v in variables})

    @classmethod
    def parse(cls, text: str) -> "Assignment":
        """
        Read the text form produced by ``str``: ``"(A=T,B=F)"``.

        Parentheses are optional, whitespace is ignored, and values may be
        written as ``T/F``, ``1/0``, ``true/false`` or ``yes/no``. An empty
        string (or ``"()"``) is the empty assignment.
        """
        body = text.strip()
        if body.startswith("(") and body.endswith(")"):
            body = body[1:-1]
        bindings: Dict[str, bool] = {}
        for chunk in body.split(","):
            chunk = chunk.strip()
            if not chunk:
                continue
            if chunk.count("=") != 1:
                raise InvalidAssignment(f"expected 'var=value', got {chunk!r}")
            var, raw = (s.strip() for s in chunk.split("="))
            if not var:
                raise InvalidAssignment(f"missing variable name in {chunk!r}")
            if var in bindings:
                raise InvalidAssignment(f"variable {var!r} bound twice in {text!r}")
            token = raw.lower()
            if token in _TRUE_TOKENS:
                bindings[var] = True
            elif token in _FALSE_TOKENS:
                bindings[var] = False
            else:
                raise InvalidAssignment(f"cannot read {raw!r} as a boolean value")
        return cls(bindings)

    # ──────────────────────────────────────────────────────────────────
    # Mapping protocol
    # ──────────────────────────────────────────────────────────────────
    def __getitem__(self, var: str) -> bool:
        return self._index[var]

    def __iter__(self) -> Iterator[str]:
        return (var for var, _ in self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, var: object) -> bool:
        return var in self._index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Assignment):
            return NotImplemented
        return self._items == other._items

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(self._items)
        return self._hash

    def __str__(self) -> str:
        body = ",".join(f"{var}={'T' if val else 'F'}" for var, val in self._items)
        return f"({body})"

    def __repr__(self) -> str:
        body = ", ".join(f"{var}={val}" for var, val in self._items)
        return f"Assignment({body})"

    def __reduce__(self):
        return (Assignment, (self._index,))

    @property
    def variables(self) -> FrozenSet[str]:
        return frozenset(self._index)

    def as_dict(self) -> Dict[str, bool]:
        return dict(self._items)

    # ──────────────────────────────────────────────────────────────────
    # Domain operations
    # ──────────────────────────────────────────────────────────────────
    def subsumes(self, other: "Assignment") -> bool:
        """
        True iff every binding of ``other`` also appears in ``self``.

        ``self`` is then at least as specific as ``other``; e.g.
        ``(Entree=Fish,Wine=White)`` subsumes ``()``, ``(Entree=Fish)`` and
        itself.
        """
        if len(self._items) < len(other._items):
            return False
        idx = self._index
        for var, val in other._items:
            if idx.get(var) is not val:
                return False
        return True

    def altered(self, var: str, value: bool) -> "Assignment":
        """Copy of ``self`` with ``var`` (re)bound to ``value``."""
        mod = dict(self._index)
        mod[var] = value
        return Assignment(mod)

    def flipped(self, var: str) -> "Assignment":
        """Copy of ``self`` with the value of ``var`` complemented."""
        if var not in self._index:
            raise UnboundVariable(f"cannot flip {var!r}: not bound in {self}")
        return self.altered(var, not self._index[var])

    def expanded_by_vars(self, variables: Iterable[str]) -> FrozenSet["Assignment"]:
        """
        Extend ``self`` with every combination of values for the members of
        ``variables`` it does not bind yet.

        e.g. with Entree and Wine as extra variables, ``(Side=Soup)`` becomes the
        four assignments ``(Entree=*,Side=Soup,Wine=*)``. Returns ``{self}``
        when nothing is missing.
        """
        missing = sorted(set(variables) - set(self._index))
        if not missing:
            return frozenset({self})
        expanded = set()
        for values in product((False, True), repeat=len(missing)):
            mod = dict(self._index)
            mod.update(zip(missing, values))
            expanded.add(Assignment(mod))
        return frozenset(expanded)

    def with_vars_removed(self, variables: Iterable[str]) -> "Assignment":
        drop = set(variables)
        return Assignment({v: b for v, b in self._items if v not in drop})

    def restricted_to(self, variables: Iterable[str]) -> "Assignment":
        keep = set(variables)
        return Assignment({v: b for v, b in self._items if v in keep})

    def first_lexicographically(self) -> "Assignment":
        return Assignment.uniform(self._index, False)

    def next_lexicographically(self) -> "Assignment":
        """
        Successor in the binary-counter order over this assignment's variables.

        The first variable by name is the lowest digit, and the counter wraps
        from all-true back to all-false:
        ``(a=F,b=F) -> (a=T,b=F) -> (a=F,b=T) -> (a=T,b=T) -> (a=F,b=F)``.
        """
        mod = dict(self._index)
        for var, _ in self._items:
            mod[var] = not mod[var]
            if mod[var]:
                break
        return Assignment(mod)


# ──────────────────────────────────────────────────────────────────────────────
# Outcome-space enumeration
# ──────────────────────────────────────────────────────────────────────────────

def all_assignments(variables: Iterable[str]) -> Iterator[Assignment]:
    """
    Lazily yield the ``2**n`` complete assignments of ``variables``.

    Order matches :meth:`Assignment.next_lexicographically` starting from
    all-false. With no variables, the single empty assignment is produced.
    """
    names = sorted(set(variables))
    # product() varies its last position fastest; reverse so the first name is the low digit
    for values in product((False, True), repeat=len(names)):
        yield Assignment(dict(zip(names, reversed(values))))


def iter_complete_assignments(variables: Iterable[str]) -> Iterator[Assignment]:
    """
    Walk the outcome space with ``next_lexicographically`` until it wraps.

    Each call returns a fresh generator, so the sequence is restartable and no
    outcome list is ever materialized.
    """
    first = Assignment.uniform(variables, False)
    current = first
    while True:
        yield current
        current = current.next_lexicographically()
        if current == first:
            return
